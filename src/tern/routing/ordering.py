"""Specificity ordering for route patterns.

The route table is kept sorted so that more specific patterns are tried
before more general ones. Specificity comes from the pattern's own
structure, so the order never depends on registration order::

    /a/b/       literal depth 2          tried first
    /a/:x/      literal depth 1, capture
    /a/*        literal depth 1, wildcard
    *           match-everything         always last
"""

from collections.abc import Iterable

from tern.routing.pattern import WILDCARD, SegmentKind, iter_segments

SpecificityKey = tuple[bool, int, int, bool, int, int, str]


def _literal_prefix(pattern: str) -> str:
    """Characters before the first capture or wildcard segment."""
    offset = 0
    for segment in iter_segments(pattern):
        if segment.is_dynamic:
            break
        offset += len(segment.value) + 1
    return pattern[: offset + 1]


def specificity(pattern: str) -> SpecificityKey:
    """Sort key for a normalized pattern. Smaller keys are tried first.

    Ranked, in order, by:

    1. the match-everything token, which always sorts last;
    2. literal segments before the first capture or wildcard (more first);
    3. length of that literal prefix (longer first);
    4. absence of a trailing wildcard (captures beat wildcards);
    5. total segment count (deeper first);
    6. total literal segments (more first);
    7. the pattern string, so that the order is total.
    """
    if pattern == WILDCARD:
        return (True, 0, 0, True, 0, 0, pattern)

    segments = list(iter_segments(pattern))
    leading = 0
    for segment in segments:
        if segment.is_dynamic:
            break
        leading += 1

    has_wildcard = any(s.kind is SegmentKind.WILDCARD for s in segments)
    literals = sum(1 for s in segments if s.kind is SegmentKind.LITERAL)

    return (
        False,
        -leading,
        -len(_literal_prefix(pattern)),
        has_wildcard,
        -len(segments),
        -literals,
        pattern,
    )


def precedes(first: str, second: str) -> bool:
    """True if *first* must be tried before *second*."""
    return specificity(first) < specificity(second)


def sort_patterns(patterns: Iterable[str]) -> list[str]:
    """Return *patterns* in dispatch order, most specific first."""
    return sorted(patterns, key=specificity)
