"""Path segment model — tokenizing patterns and ranking their specificity.

Patterns use ``:name`` for dynamic segments and a trailing ``*`` (or
``name*``) for a splat that swallows the rest of the path::

    "/"                 -> [Segment(ROOT)]
    "/users/:id"        -> [Segment(STATIC, "users"), Segment(DYNAMIC, "id")]
    "/files/*"          -> [Segment(STATIC, "files"), Segment(SPLAT)]
    "/docs/rest*"       -> [Segment(STATIC, "docs"), Segment(SPLAT, "rest")]

Segments are always derived from the pattern string; nothing here is
registered or cached.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from trailhead.errors import ConfigurationError


class SegmentKind(Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"
    SPLAT = "splat"
    ROOT = "root"


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed segment of a route pattern.

    ``value`` is the literal text for static segments and the parameter
    name for dynamic segments. Named splats (``rest*``) carry the name;
    a bare ``*`` has an empty value.
    """

    kind: SegmentKind
    value: str = ""

    @property
    def is_param(self) -> bool:
        return self.kind is SegmentKind.DYNAMIC or self.kind is SegmentKind.SPLAT


ROOT = Segment(SegmentKind.ROOT)

# Key under which every splat capture is stored in RouteMatch.params
SPLAT_KEY = "*"

# Handler arguments supplied by the route context; a path parameter may
# not take one of these names
CONTEXT_NAMES = frozenset({"params", "uri", "location", "navigate", "match"})

# Positional weights. An absent position counts as 0, so a splat (-1)
# ranks below the same pattern without it.
STATIC_POINTS = 4
DYNAMIC_POINTS = 3
ROOT_POINTS = 2
SPLAT_POINTS = -1

# Each position is a digit in base RANK_BASE, most significant first.
# RANK_BASE must exceed the widest weight spread (4 - -1) plus one so a
# difference at an earlier position can never be outweighed later on.
RANK_BASE = 8
RANK_DEPTH = 32


def split_path(path: str) -> list[str]:
    """Split a slash-separated path into its non-empty tokens."""
    return [part for part in path.split("/") if part]


def _classify(token: str) -> Segment:
    if token.startswith(":"):
        return Segment(SegmentKind.DYNAMIC, token[1:])
    if token.endswith("*"):
        return Segment(SegmentKind.SPLAT, token[:-1])
    return Segment(SegmentKind.STATIC, token)


def segmentize(pattern: str) -> list[Segment]:
    """Parse a route pattern into an ordered list of segments.

    Empty tokens from leading, trailing, or doubled slashes are dropped.
    The root pattern (``"/"`` or ``""``) yields a single ROOT segment.
    """
    tokens = split_path(pattern)
    if not tokens:
        return [ROOT]
    return [_classify(token) for token in tokens]


def segmentize_path(pathname: str) -> list[str]:
    """Tokenize a concrete pathname. The root pathname has no tokens."""
    return split_path(pathname)


def validate_pattern(pattern: str) -> list[Segment]:
    """Segmentize *pattern* and reject shapes the matcher cannot align.

    Raises ``ConfigurationError`` for a splat that is not the final
    segment, a dynamic segment without a name, a parameter name
    used twice, or a parameter named after a route context argument
    (``params``, ``uri``, ``location``, ``navigate``, ``match``).
    """
    segments = segmentize(pattern)
    seen: set[str] = set()
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        if segment.kind is SegmentKind.SPLAT and index != last:
            msg = (
                f"Invalid route pattern {pattern!r}: a splat ('*') "
                "must be the last segment."
            )
            raise ConfigurationError(msg)
        if segment.kind is SegmentKind.DYNAMIC and not segment.value:
            msg = f"Invalid route pattern {pattern!r}: dynamic segment ':' needs a name."
            raise ConfigurationError(msg)
        if segment.is_param and segment.value:
            if segment.value in seen or segment.value == SPLAT_KEY:
                msg = (
                    f"Invalid route pattern {pattern!r}: parameter "
                    f"{segment.value!r} is declared more than once."
                )
                raise ConfigurationError(msg)
            if segment.value in CONTEXT_NAMES:
                msg = (
                    f"Invalid route pattern {pattern!r}: parameter "
                    f"{segment.value!r} collides with a route context argument."
                )
                raise ConfigurationError(msg)
            seen.add(segment.value)
    return segments


def _points(segment: Segment) -> int:
    match segment.kind:
        case SegmentKind.STATIC:
            return STATIC_POINTS
        case SegmentKind.DYNAMIC:
            return DYNAMIC_POINTS
        case SegmentKind.ROOT:
            return ROOT_POINTS
        case SegmentKind.SPLAT:
            return SPLAT_POINTS


def rank(segments: Sequence[Segment]) -> int:
    """Compute the specificity score of a segmentized pattern.

    Earlier positions weigh more than later ones, so ``/users/*`` beats
    ``/:a/:b/:c`` on ``/users/x/y``. The score depends on the pattern
    alone, never on registration order. Segments past ``RANK_DEPTH``
    do not contribute.
    """
    score = 0
    for index, segment in enumerate(segments[:RANK_DEPTH]):
        score += _points(segment) * RANK_BASE ** (RANK_DEPTH - index)
    return score


def rank_pattern(pattern: str) -> int:
    """Shortcut for ``rank(segmentize(pattern))``."""
    return rank(segmentize(pattern))
