"""Response sink protocol, the buffering writer, and the immutable Response.

Handlers write through a ``ResponseSink``. The router never touches the
sink itself; only handlers and interceptors do. The transport adapter
hands every request a ``ResponseWriter`` and converts it to a
``Response`` once dispatch is over.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol, runtime_checkable

DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


@runtime_checkable
class ResponseSink(Protocol):
    """Where handlers put status, headers, and body bytes.

    Any object with these four methods will do::

        def hello(sink: ResponseSink, request: RequestView) -> None:
            sink.set_header("Content-Type", "text/plain")
            sink.write(f"hello {request.param('name')}")
    """

    def set_status(self, status: int) -> None: ...
    def set_header(self, name: str, value: str) -> None: ...
    def add_header(self, name: str, value: str) -> None: ...
    def write(self, data: str | bytes) -> None: ...


class ResponseWriter:
    """A ``ResponseSink`` that buffers everything in memory.

    ``written`` turns true on the first call of any sink method, which is
    how callers tell a handled request from one nobody answered.
    """

    __slots__ = ("_chunks", "_headers", "_status", "_written")

    def __init__(self) -> None:
        self._status = 200
        self._headers: list[tuple[str, str]] = []
        self._chunks: list[bytes] = []
        self._written = False

    def set_status(self, status: int) -> None:
        self._status = status
        self._written = True

    def set_header(self, name: str, value: str) -> None:
        """Set *name*, replacing any earlier values."""
        lowered = name.lower()
        self._headers = [(n, v) for n, v in self._headers if n.lower() != lowered]
        self._headers.append((name, value))
        self._written = True

    def add_header(self, name: str, value: str) -> None:
        """Append *name* without touching earlier values."""
        self._headers.append((name, value))
        self._written = True

    def write(self, data: str | bytes) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._chunks.append(data)
        self._written = True

    # -- Inspection --

    @property
    def written(self) -> bool:
        return self._written

    @property
    def status(self) -> int:
        return self._status

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._headers)

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    def header(self, name: str) -> str | None:
        """Return the last value set for *name*, or ``None``."""
        lowered = name.lower()
        for n, v in reversed(self._headers):
            if n.lower() == lowered:
                return v
        return None

    def to_response(self) -> Response:
        """Freeze what has been written so far into a ``Response``."""
        content_type = self.header("content-type") or DEFAULT_CONTENT_TYPE
        headers = tuple((n, v) for n, v in self._headers if n.lower() != "content-type")
        return Response(
            body=self.body,
            status=self._status,
            content_type=content_type,
            headers=headers,
        )


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set status
    and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = DEFAULT_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def header(self, name: str) -> str | None:
        """Return the first value for *name*, or ``None``."""
        lowered = name.lower()
        for n, v in self.headers:
            if n.lower() == lowered:
                return v
        return None

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body
