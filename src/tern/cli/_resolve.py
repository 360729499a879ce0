"""Router import resolution — resolves ``"module:attribute"`` strings to Router instances.

Shared utility used by ``tern routes`` and ``tern match``.
"""

import importlib
import logging
import sys

from tern.routing.router import Router
from tern.server.handler import ASGIAdapter


def resolve_router(import_string: str) -> Router:
    """Resolve an import string to a tern Router instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"router"``.

    An ``ASGIAdapter`` resolves to the router it wraps, and a factory
    function is called to obtain the router.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a Router, an adapter, or
            a factory returning one of those.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, (Router, ASGIAdapter)):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, ASGIAdapter):
        obj = obj.router

    if not isinstance(obj, Router):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a tern.Router instance"
        raise TypeError(msg)

    return obj


def load_router(import_string: str, log_level: str | None) -> Router:
    """Resolve the router and apply its log level to the ``tern`` logger.

    Exits with status 1 and a message on stderr when resolution fails.
    """
    try:
        router = resolve_router(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    level = (log_level or router.config.log_level).upper()
    logging.getLogger("tern").setLevel(level)
    return router
