"""File-serving helpers built on the router's request and sink types.

``download`` sends a single file as an attachment from inside a handler.
``StaticFolder`` is an interceptor that answers requests whose path names
a file under a directory and declines everything else.
"""

import logging
import mimetypes
from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime
from pathlib import Path

from tern.http.request import Request
from tern.http.response import ResponseSink
from tern.routing.route import Outcome

logger = logging.getLogger("tern.files")


def _not_modified(request: Request, modified: datetime) -> bool:
    """Whether the client's If-Modified-Since covers *modified*."""
    since = request.headers.get("if-modified-since")
    if not since:
        return False
    try:
        parsed = parsedate_to_datetime(since)
    except (TypeError, ValueError):
        return False
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return modified <= parsed


def send_file(
    sink: ResponseSink,
    request: Request,
    path: Path,
    *,
    attachment: bool = True,
    cache_control: str | None = None,
) -> None:
    """Write *path* to *sink*.

    Sets Content-Type (guessed from the file name), Content-Length and
    Last-Modified, and answers ``304`` when If-Modified-Since is satisfied.
    HEAD requests get the headers without the body.
    """
    stat = path.stat()
    modified = datetime.fromtimestamp(int(stat.st_mtime), tz=UTC)
    last_modified = format_datetime(modified, usegmt=True)

    if _not_modified(request, modified):
        sink.set_status(304)
        sink.set_header("Last-Modified", last_modified)
        return

    content_type, _ = mimetypes.guess_type(path.name)
    body = path.read_bytes()

    sink.set_status(200)
    sink.set_header("Content-Type", content_type or "application/octet-stream")
    sink.set_header("Content-Length", str(len(body)))
    sink.set_header("Last-Modified", last_modified)
    if attachment:
        filename = path.name.replace("\\", "\\\\").replace('"', '\\"')
        sink.set_header("Content-Disposition", f'attachment; filename="{filename}"')
    if cache_control:
        sink.set_header("Cache-Control", cache_control)
    if request.method != "HEAD":
        sink.write(body)


def download(sink: ResponseSink, request: Request, path: str | Path) -> None:
    """Send the file at *path* as an attachment.

    Raises ``FileNotFoundError`` if *path* does not exist and
    ``IsADirectoryError`` if it is a directory. What to answer then is the
    calling handler's decision.
    """
    file_path = Path(path)
    if file_path.is_dir():
        raise IsADirectoryError(str(file_path))
    send_file(sink, request, file_path)


class StaticFolder:
    """Interceptor that serves files from a directory.

    The request path, relative to the directory, names the file. Paths
    that don't name a regular file are declined so the chain continues.

    Security: resolves symlinks and verifies the final path is within the
    configured directory to prevent path traversal.

    Usage::

        router.register_interceptor(StaticFolder("./public"))
    """

    __slots__ = ("_attachment", "_cache_control", "_directory")

    def __init__(
        self,
        directory: str | Path,
        *,
        attachment: bool = True,
        cache_control: str | None = "public, max-age=3600",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._attachment = attachment
        self._cache_control = cache_control

    @property
    def directory(self) -> Path:
        return self._directory

    def __call__(self, sink: ResponseSink, request: Request) -> Outcome:
        if request.method not in ("GET", "HEAD"):
            return Outcome.DECLINE

        relative = request.path.lstrip("/")
        if not relative:
            return Outcome.DECLINE

        file_path = (self._directory / relative).resolve()
        if not file_path.is_relative_to(self._directory):
            logger.warning("Refused path outside %s: %s", self._directory, request.path)
            sink.set_status(403)
            sink.write("Forbidden")
            return Outcome.HANDLED

        if not file_path.is_file():
            return Outcome.DECLINE

        send_file(
            sink,
            request,
            file_path,
            attachment=self._attachment,
            cache_control=self._cache_control,
        )
        return Outcome.HANDLED
