"""ASGI handler — translates ASGI scope/messages to tern types.

The only component that touches raw ASGI directly. Converts the scope to
a ``Request``, runs the synchronous router against a ``ResponseWriter``,
and sends what the handlers wrote back through ASGI ``send()``.
"""

import logging
import traceback
from functools import partial

import anyio.to_thread

from tern._internal.asgi import Receive, Scope, Send
from tern.config import RouterConfig
from tern.http.request import Request
from tern.http.response import Response, ResponseWriter
from tern.routing.router import Router
from tern.server.sender import send_response

logger = logging.getLogger("tern.server")


class ASGIAdapter:
    """ASGI 3 application around a ``Router``.

    The router itself never writes a fallback response. The adapter is the
    caller that does: when dispatch ends without anything written, it sends
    ``config.not_found_status`` with ``config.not_found_body``. Register a
    ``*`` route to take over that answer.

    Usage::

        router = Router()
        ...
        app = ASGIAdapter(router)   # serve with any ASGI server
    """

    __slots__ = ("_config", "_router")

    def __init__(self, router: Router, config: RouterConfig | None = None) -> None:
        self._router = router
        self._config = config or router.config

    @property
    def router(self) -> Router:
        return self._router

    @property
    def config(self) -> RouterConfig:
        return self._config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope)
        response = await self.dispatch(request)
        await send_response(response, send)

    async def dispatch(self, request: Request) -> Response:
        """Route *request* and return the response its handlers wrote."""
        writer = ResponseWriter()
        run = partial(self._router.route, writer, request)
        try:
            if self._config.offload_dispatch:
                await anyio.to_thread.run_sync(run)
            else:
                run()
        except Exception as exc:
            logger.exception("Unhandled error while routing %s %s", request.method, request.path)
            return self._internal_error(exc)

        if not writer.written:
            return Response(
                body=self._config.not_found_body,
                status=self._config.not_found_status,
            )
        return writer.to_response()

    def _internal_error(self, exc: Exception) -> Response:
        if self._config.debug:
            detail = "".join(traceback.format_exception(exc))
            return Response(body=detail, status=500)
        return Response(body="Internal Server Error", status=500)
