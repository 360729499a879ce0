"""ASGI response sending — translates a tern Response into ASGI messages."""

from tern._internal.asgi import Send
from tern.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a tern Response into ASGI send() calls."""
    body = response.body_bytes if _body_allowed(response.status) else b""

    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    has_length = False
    for name, value in response.headers:
        lowered = name.lower()
        if lowered == "content-length":
            # A HEAD answer keeps the length of the body it didn't send
            if not body and _body_allowed(response.status):
                raw_headers.append((b"content-length", value.encode("latin-1")))
                has_length = True
            continue
        raw_headers.append((lowered.encode("latin-1"), value.encode("latin-1")))

    if not has_length:
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
