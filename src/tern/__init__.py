"""Tern — an embeddable HTTP request router.

Maps request paths to handlers through a small pattern language, runs
interceptors before dispatch, and lets a handler decline a request so the
next matching route gets it.

Basic usage::

    from tern import DECLINE, Router

    router = Router()

    @router.handle("/users/:id")
    def show_user(sink, request):
        if request.param("id") == "me":
            return DECLINE
        sink.write(f"user {request.param('id')}")

    @router.handle("*")
    def fallback(sink, request):
        sink.set_status(404)
        sink.write("Not Found")

    app = router.asgi()  # serve with any ASGI server
"""

__version__ = "0.1.0"
__all__ = [
    "DECLINE",
    "HANDLED",
    "ASGIAdapter",
    "ConfigurationError",
    "InvalidPatternError",
    "Outcome",
    "Request",
    "RequestView",
    "Response",
    "ResponseSink",
    "ResponseWriter",
    "Route",
    "Router",
    "RouterConfig",
    "RouterFrozenError",
    "StaticFolder",
    "TernError",
    "download",
    "match",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tern`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from tern.routing.router import Router

        return Router

    if name == "RouterConfig":
        from tern.config import RouterConfig

        return RouterConfig

    if name in ("Outcome", "HANDLED", "DECLINE", "Route"):
        from tern.routing import route

        return getattr(route, name)

    if name == "match":
        from tern.routing.pattern import match

        return match

    if name in ("Request", "RequestView"):
        from tern.http import request

        return getattr(request, name)

    if name in ("Response", "ResponseSink", "ResponseWriter"):
        from tern.http import response

        return getattr(response, name)

    if name in ("StaticFolder", "download"):
        from tern import files

        return getattr(files, name)

    if name == "ASGIAdapter":
        from tern.server.handler import ASGIAdapter

        return ASGIAdapter

    if name in ("TernError", "ConfigurationError", "InvalidPatternError", "RouterFrozenError"):
        from tern import errors

        return getattr(errors, name)

    msg = f"module 'tern' has no attribute {name!r}"
    raise AttributeError(msg)
