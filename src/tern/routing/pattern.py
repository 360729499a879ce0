"""Route pattern normalization, validation, and matching.

Pattern syntax::

    /users/          literal segments, compared character for character
    /users/:id/      ``:name`` captures exactly one path segment
    /files/*         ``*`` as the final segment swallows the rest of the path
    *                the bare token matches every path

Patterns are normalized at registration: a leading ``/`` is inserted and a
trailing ``/`` appended, so ``users/:id`` and ``/users/:id/`` name the same
route.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from tern.errors import InvalidPatternError

WILDCARD = "*"
CAPTURE_MARK = ":"
SEPARATOR = "/"

# Parameter key that reports what a trailing wildcard swallowed
WILDCARD_PARAM = "*"


class SegmentKind(Enum):
    LITERAL = "literal"
    CAPTURE = "capture"
    WILDCARD = "wildcard"


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed segment of a normalized pattern.

    Literal:   ``/users``  (kind=LITERAL, value="users")
    Capture:   ``/:id``    (kind=CAPTURE, value="id")
    Wildcard:  ``/*``      (kind=WILDCARD, value="*")
    """

    kind: SegmentKind
    value: str

    @property
    def is_dynamic(self) -> bool:
        return self.kind is not SegmentKind.LITERAL


class _Region(Enum):
    CAPTURE = "capture"
    WILDCARD = "wildcard"


def normalize_pattern(pattern: str) -> str:
    """Return the canonical form of *pattern*.

    Examples::

        ""            -> "*"
        "*"           -> "*"
        "users"       -> "/users/"
        "/users/:id"  -> "/users/:id/"
    """
    if not pattern:
        return WILDCARD
    if pattern == WILDCARD:
        return pattern
    if not pattern.startswith(SEPARATOR):
        pattern = SEPARATOR + pattern
    if not pattern.endswith(SEPARATOR):
        pattern += SEPARATOR
    return pattern


def iter_segments(pattern: str) -> Iterator[Segment]:
    """Yield the segments of a normalized pattern, left to right.

    The match-everything token yields a single wildcard segment and the
    root pattern ``/`` yields nothing. A ``*`` that is not the final segment
    is a literal, the same way ``match`` treats it.
    """
    if pattern == WILDCARD:
        yield Segment(SegmentKind.WILDCARD, WILDCARD)
        return

    inner = pattern[1:-1]
    if not inner:
        return

    parts = inner.split(SEPARATOR)
    last = len(parts) - 1
    for index, part in enumerate(parts):
        if part.startswith(CAPTURE_MARK):
            yield Segment(SegmentKind.CAPTURE, part[1:])
        elif part == WILDCARD and index == last:
            yield Segment(SegmentKind.WILDCARD, WILDCARD)
        else:
            yield Segment(SegmentKind.LITERAL, part)


def validate_pattern(pattern: str) -> str:
    """Normalize *pattern* and reject it if it is malformed.

    Returns the normalized pattern.

    Raises ``InvalidPatternError`` for an empty segment (``//``), a capture
    without a name (``/:/``), a capture named ``*``, a capture name used
    twice, or a ``*`` segment that is not the final segment.
    """
    normalized = normalize_pattern(pattern)
    if normalized == WILDCARD:
        return normalized

    if SEPARATOR * 2 in normalized:
        raise InvalidPatternError(pattern, "empty path segment")

    parts = normalized[1:-1].split(SEPARATOR)
    if WILDCARD in parts[:-1]:
        raise InvalidPatternError(pattern, "'*' must be the final segment")

    seen: set[str] = set()
    for segment in iter_segments(normalized):
        if segment.kind is SegmentKind.CAPTURE:
            if not segment.value:
                raise InvalidPatternError(pattern, "capture segment needs a name after ':'")
            if segment.value == WILDCARD_PARAM:
                raise InvalidPatternError(pattern, f"{WILDCARD_PARAM!r} is not a valid capture name")
            if segment.value in seen:
                raise InvalidPatternError(pattern, f"capture name {segment.value!r} used twice")
            seen.add(segment.value)

    return normalized


def match(pattern: str, path: str) -> tuple[dict[str, str], bool]:
    """Match a request *path* against *pattern* in a single left-to-right scan.

    Returns ``(params, matched)``. ``params`` holds the captured segments
    (and the wildcard remainder under ``"*"``); it is only meaningful when
    ``matched`` is true.

    One cursor walks the path and one walks the pattern. They advance in
    lockstep over literal text. A capture swallows path characters up to
    the next ``/``; a final wildcard swallows everything that is left,
    separators included, and needs at least one character of it.
    There is no backtracking: the first literal mismatch fails the match.

    Examples::

        match("*", "/anything")            -> ({}, True)
        match("/a/:x/", "/a/b")            -> ({"x": "b"}, True)
        match("/a/:x/", "/a/")             -> ({}, False)
        match("/files/*", "/files/a/b/c")  -> ({"*": "a/b/c"}, True)
        match("/files/*", "/files//x")     -> ({"*": "/x"}, True)
    """
    params: dict[str, str] = {}
    if pattern == WILDCARD:
        return params, True

    pattern = normalize_pattern(pattern)
    if not path.endswith(SEPARATOR):
        path += SEPARATOR

    size = len(pattern)
    cursor = 0
    region: _Region | None = None
    name = ""
    start = 0

    for index, char in enumerate(path):
        if region is _Region.CAPTURE:
            if char != SEPARATOR:
                continue
            params[name] = path[start:index]
            region = None

        if cursor >= size:
            return params, False

        expected = pattern[cursor]
        if cursor > 0 and pattern[cursor - 1] == SEPARATOR:
            if expected == CAPTURE_MARK:
                if char == SEPARATOR:
                    return params, False
                end = pattern.index(SEPARATOR, cursor)
                name = pattern[cursor + 1 : end]
                cursor = end
                region = _Region.CAPTURE
                start = index
                continue
            if expected == WILDCARD and cursor + 2 == size:
                region = _Region.WILDCARD
                start = index
                break

        if char != expected:
            return params, False
        cursor += 1

    if region is _Region.WILDCARD:
        remainder = path[start:-1]
        if not remainder:
            return params, False
        params[WILDCARD_PARAM] = remainder
        return params, True

    return params, cursor == size
