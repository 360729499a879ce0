"""Route table kept in specificity order.

Patterns are registered during setup. Every registration publishes a new,
fully sorted snapshot, so a reader iterating the table never sees a
half-sorted sequence even if registration continues at runtime.
"""

import logging
import threading

from tern._internal.types import Handler
from tern.errors import RouterFrozenError
from tern.routing.ordering import sort_patterns
from tern.routing.pattern import normalize_pattern, validate_pattern
from tern.routing.route import Route

logger = logging.getLogger("tern.routing")


class RouteTable:
    """Ordered patterns plus a pattern -> Route mapping.

    The ordered tuple and the mapping's key set always hold the same
    patterns. Re-registering a pattern replaces its handler in place.

    Usage::

        table = RouteTable()
        table.register("/users/:id", show_user)
        table.register("/users/*", user_files)
        table.ordered_patterns()  # ("/users/:id/", "/users/*/")
    """

    __slots__ = ("_frozen", "_lock", "_order", "_routes", "_strict")

    def __init__(self, *, strict: bool = True) -> None:
        self._routes: dict[str, Route] = {}
        self._order: tuple[str, ...] = ()
        self._lock = threading.Lock()
        self._frozen = False
        self._strict = strict

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, pattern: object) -> bool:
        if not isinstance(pattern, str):
            return False
        return normalize_pattern(pattern) in self._routes

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject further registrations."""
        with self._lock:
            self._frozen = True

    def register(self, pattern: str, handler: Handler) -> Route:
        """Store *handler* under the normalized *pattern* and re-sort.

        Raises ``InvalidPatternError`` for a malformed pattern (when the
        table is strict) and ``RouterFrozenError`` after ``freeze()``.
        """
        normalized = validate_pattern(pattern) if self._strict else normalize_pattern(pattern)
        route = Route(pattern=normalized, handler=handler)

        with self._lock:
            if self._frozen:
                msg = f"Cannot register {normalized!r}: the route table is frozen."
                raise RouterFrozenError(msg)

            replaced = normalized in self._routes
            routes = {**self._routes, normalized: route}
            order = self._order if replaced else tuple(sort_patterns((*self._order, normalized)))

            # Publish the mapping before the order so every pattern a reader
            # can see in the order already has a route.
            self._routes = routes
            self._order = order

        if replaced:
            logger.debug("Replaced handler for %s with %s", normalized, route.name)
        else:
            logger.debug("Registered %s -> %s", normalized, route.name)
        return route

    def lookup(self, pattern: str) -> tuple[Handler | None, bool]:
        """Exact lookup by pattern string. No matching is performed.

        *pattern* is normalized first, so ``"users"`` finds ``"/users/"``.
        """
        route = self._routes.get(normalize_pattern(pattern))
        if route is None:
            return None, False
        return route.handler, True

    def get(self, pattern: str) -> Route | None:
        """Return the Route stored under the exact *pattern*, if any."""
        return self._routes.get(normalize_pattern(pattern))

    def ordered_patterns(self) -> tuple[str, ...]:
        """Snapshot of the registered patterns in dispatch order."""
        return self._order

    @property
    def routes(self) -> tuple[Route, ...]:
        """Snapshot of the registered routes in dispatch order."""
        order = self._order
        routes = self._routes
        return tuple(routes[pattern] for pattern in order)
