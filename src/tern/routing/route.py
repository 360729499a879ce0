"""Route, RouteMatch, and Outcome."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from tern._internal.types import Handler


class Outcome(Enum):
    """What a handler or interceptor reports back to the router.

    ``HANDLED`` stops dispatch for the request. ``DECLINE`` asks the router
    to move on: to the next interceptor, or to the next matching route.
    Returning ``None`` counts as ``HANDLED``.
    """

    HANDLED = "handled"
    DECLINE = "decline"


HANDLED = Outcome.HANDLED
DECLINE = Outcome.DECLINE


def as_outcome(result: object, source: object) -> Outcome:
    """Coerce a handler/interceptor return value to an ``Outcome``.

    Raises ``TypeError`` for anything other than ``None`` or an ``Outcome``.
    """
    if result is None:
        return Outcome.HANDLED
    if isinstance(result, Outcome):
        return result
    name = getattr(source, "__qualname__", repr(source))
    msg = f"{name} returned {type(result).__name__}; expected Outcome or None"
    raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class Route:
    """A registered (pattern, handler) pair.

    ``pattern`` is always the normalized form.
    """

    pattern: str
    handler: Handler

    @property
    def name(self) -> str:
        return getattr(self.handler, "__qualname__", repr(self.handler))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful pattern match."""

    route: Route
    params: Mapping[str, str]
