"""Router — interceptor chain plus specificity-ordered route dispatch.

Dispatch runs in two phases. Every interceptor runs first, in
registration order; any of them may answer the request and stop there.
Then the route table is walked most-specific-first, and each matching
handler either handles the request or declines it to the next match.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from types import MappingProxyType
from typing import TYPE_CHECKING

from tern._internal.types import Handler, Interceptor
from tern.config import RouterConfig
from tern.errors import RouterFrozenError
from tern.http.request import Request, RequestView
from tern.http.response import ResponseSink
from tern.routing.pattern import match as match_pattern
from tern.routing.route import Outcome, Route, RouteMatch, as_outcome
from tern.routing.table import RouteTable

if TYPE_CHECKING:
    from tern.server.handler import ASGIAdapter

logger = logging.getLogger("tern.routing")


class Router:
    """An explicitly constructed router. No process-wide state.

    Usage::

        router = Router()

        @router.handle("/users/:id")
        def show_user(sink, request):
            sink.write(f"user {request.param('id')}")

        @router.handle("*")
        def not_found(sink, request):
            sink.set_status(404)

        router.route(ResponseWriter(), Request("/users/42"))
    """

    __slots__ = ("_config", "_interceptors", "_lock", "_table")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._table = RouteTable(strict=self._config.strict_patterns)
        self._interceptors: tuple[Interceptor, ...] = ()
        self._lock = threading.Lock()

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def table(self) -> RouteTable:
        return self._table

    # -- Registration --

    def register(self, pattern: str, handler: Handler) -> Route:
        """Bind *handler* to *pattern*. Re-registering replaces the handler."""
        return self._table.register(pattern, handler)

    def handle(self, pattern: str) -> Callable[[Handler], Handler]:
        """Decorator form of ``register``."""

        def decorator(handler: Handler) -> Handler:
            self.register(pattern, handler)
            return handler

        return decorator

    def register_interceptor(self, interceptor: Interceptor) -> Interceptor:
        """Append *interceptor* to the chain. Usable as a decorator."""
        with self._lock:
            if self._table.frozen:
                msg = "Cannot register an interceptor: the router is frozen."
                raise RouterFrozenError(msg)
            self._interceptors = (*self._interceptors, interceptor)
        logger.debug("Registered interceptor %s", getattr(interceptor, "__qualname__", interceptor))
        return interceptor

    def freeze(self) -> None:
        """Close the registration phase. Later registrations raise."""
        with self._lock:
            self._table.freeze()

    # -- Introspection --

    def lookup(self, pattern: str) -> tuple[Handler | None, bool]:
        """Exact lookup of the handler bound to *pattern*."""
        return self._table.lookup(pattern)

    def list_patterns(self) -> tuple[str, ...]:
        """Registered patterns in dispatch order."""
        return self._table.ordered_patterns()

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._table.routes

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return self._interceptors

    def match(self, path: str) -> list[RouteMatch]:
        """Every route matching *path*, in dispatch order. Runs no handlers."""
        matches: list[RouteMatch] = []
        for route in self._table.routes:
            params, matched = match_pattern(route.pattern, path)
            if matched:
                matches.append(RouteMatch(route=route, params=MappingProxyType(params)))
        return matches

    # -- Dispatch --

    def intercept(self, sink: ResponseSink, request: Request) -> bool:
        """Run the interceptor chain.

        Returns ``True`` if every interceptor declined, i.e. dispatch
        should continue to the routes.
        """
        for interceptor in self._interceptors:
            outcome = as_outcome(interceptor(sink, request), interceptor)
            if outcome is Outcome.HANDLED:
                logger.debug(
                    "Interceptor %s stopped %s",
                    getattr(interceptor, "__qualname__", interceptor),
                    request.path,
                )
                return False
        return True

    def route(self, sink: ResponseSink, request: Request) -> bool:
        """Dispatch *request*.

        Returns ``True`` once an interceptor or a handler reports
        ``HANDLED``. Returns ``False`` when no route matched or every
        matching handler declined; the router writes nothing in that case.
        """
        if not self.intercept(sink, request):
            return True

        for route in self._table.routes:
            params, matched = match_pattern(route.pattern, request.path)
            if not matched:
                continue

            view = RequestView.for_match(request, params)
            outcome = as_outcome(route.handler(sink, view), route.handler)
            if outcome is Outcome.HANDLED:
                return True
            logger.debug("%s declined %s", route.pattern, request.path)

        logger.debug("No route handled %s", request.path)
        return False

    # -- Transport --

    def asgi(self) -> ASGIAdapter:
        """Wrap this router in an ASGI application."""
        from tern.server.handler import ASGIAdapter

        return ASGIAdapter(self)
