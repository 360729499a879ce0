"""Immutable HTTP request and the per-match request view.

The router never parses anything out of the request besides its path.
Query strings stay raw bytes; the transport decides everything else.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from tern._internal.asgi import Scope
from tern.http.headers import Headers

if TYPE_CHECKING:
    from pathlib import Path

    from tern.http.response import ResponseSink

_NO_PARAMS: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request as handed over by the transport.

    ``handle`` is the transport's own request object (the ASGI scope when
    built by ``from_asgi``). The router carries it through untouched.
    """

    path: str
    method: str = "GET"
    headers: Headers = field(default_factory=Headers)
    raw_query: bytes = b""
    http_version: str = "1.1"
    client: tuple[str, int] | None = None
    server: tuple[str, int] | None = None
    handle: Any = field(default=None, repr=False, compare=False)

    @property
    def url(self) -> str:
        """Request target: path plus the raw query string, if any."""
        if self.raw_query:
            return f"{self.path}?{self.raw_query.decode('latin-1')}"
        return self.path

    @classmethod
    def from_asgi(cls, scope: Scope) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            path=scope["path"],
            method=scope.get("method", "GET"),
            headers=Headers.from_raw(scope.get("headers", ())),
            raw_query=scope.get("query_string", b""),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            server=tuple(server) if server else None,
            handle=scope,
        )


@dataclass(frozen=True, slots=True)
class RequestView:
    """Read-only view of a request plus the parameters its route captured.

    Handlers receive a ``RequestView``; interceptors run before matching
    and receive the bare ``Request``.
    """

    request: Request
    params: Mapping[str, str] = field(default_factory=lambda: _NO_PARAMS)

    @classmethod
    def for_match(cls, request: Request, params: Mapping[str, str]) -> RequestView:
        return cls(request=request, params=MappingProxyType(dict(params)))

    @property
    def path(self) -> str:
        return self.request.path

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def headers(self) -> Headers:
        return self.request.headers

    @property
    def url(self) -> str:
        return self.request.url

    @property
    def handle(self) -> Any:
        return self.request.handle

    def param(self, name: str, default: str | None = None) -> str | None:
        """Return the captured value for *name*, or *default*."""
        return self.params.get(name, default)

    def download(self, sink: ResponseSink, path: str | Path) -> None:
        """Send the file at *path* to the client as an attachment."""
        from tern.files import download

        download(sink, self.request, path)
