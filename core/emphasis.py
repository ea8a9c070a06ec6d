"""Emphasis (傍点) transcoding between platform dialects.

Every line is first rewritten into the intermediate form, where an
emphasized span reads ``#<span#>`` and a literal ``#`` is doubled.
Recognized source dialects:

- intermediate form written by hand: ``#<すごい#>``
- per-character ruby annotations: ``｜す《﹅》｜ご《﹅》``
- doubled brackets: ``《《すごい》》``

The intermediate form is then rendered for the destination platform,
either one ruby annotation per grapheme unit (Narou, Novelup) or one
doubled-bracket pair per span (Kakuyomu, HTML).

Markers that never close stay in the text as written.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from core.graphemes import iter_units, split_units
from core.platforms import EmphasisStyle

ESCAPE = "#"
OPEN = "#<"
CLOSE = "#>"

RUBY_SEPARATORS = frozenset("|｜")
RUBY_OPEN = "《"
RUBY_CLOSE = "》"
# Characters a ruby base or a doubled-bracket span may never contain.
RUBY_SYNTAX = frozenset("|｜《》")

# Annotation glyphs conventionally used as emphasis marks.
DEFAULT_MARKS = frozenset("・●○﹅﹆")

# Spaces and exclamation/question marks are never emphasized.
BREAK_CHARS = frozenset(" \t　!?！？⁇⁈⁉")


@dataclass
class Segment:
    text: str
    emphasized: bool = False


class _SegmentBuilder:
    """Collects text into segments, merging neighbours with the same emphasis."""

    def __init__(self):
        self.segments: list[Segment] = []

    def add(self, text: str, emphasized: bool) -> None:
        if not text:
            return
        if self.segments and self.segments[-1].emphasized == emphasized:
            self.segments[-1].text += text
        else:
            self.segments.append(Segment(text, emphasized))


class _State(Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"
    ESCAPE_PENDING = "escape_pending"


def parse_intermediate(text: str) -> list[Segment]:
    """Split intermediate-form text into plain and emphasized segments.

    An open marker without a matching close is kept as literal text.
    """
    builder = _SegmentBuilder()
    state = _State.OUTSIDE
    resume = _State.OUTSIDE
    outside: list[str] = []
    inside: list[str] = []

    for ch in text:
        if state is not _State.ESCAPE_PENDING:
            if ch == ESCAPE:
                resume, state = state, _State.ESCAPE_PENDING
            elif state is _State.INSIDE:
                inside.append(ch)
            else:
                outside.append(ch)
            continue

        buf = inside if resume is _State.INSIDE else outside
        if ch == ESCAPE:
            buf.append(ESCAPE)
            state = resume
        elif ch == "<" and resume is _State.OUTSIDE:
            builder.add("".join(outside), False)
            outside = []
            state = _State.INSIDE
        elif ch == ">" and resume is _State.INSIDE:
            builder.add("".join(inside), True)
            inside = []
            state = _State.OUTSIDE
        else:
            buf.append(ESCAPE + ch)
            state = resume

    if state is _State.ESCAPE_PENDING:
        (inside if resume is _State.INSIDE else outside).append(ESCAPE)
        state = resume
    if state is _State.INSIDE:
        outside.append(OPEN + "".join(inside))
    builder.add("".join(outside), False)
    return builder.segments


def escape(text: str) -> str:
    return text.replace(ESCAPE, ESCAPE * 2)


def write_intermediate(segments: Iterable[Segment]) -> str:
    parts = []
    for segment in segments:
        if segment.emphasized:
            parts.append(OPEN + escape(segment.text) + CLOSE)
        else:
            parts.append(escape(segment.text))
    return "".join(parts)


def _find_close(units: list[str], start: int) -> Optional[int]:
    """Index of the next unescaped close marker at or after start."""
    j = start
    while j < len(units) - 1:
        if units[j] == ESCAPE:
            if units[j + 1] == ">":
                return j
            if units[j + 1] == ESCAPE:
                j += 2
                continue
        j += 1
    return None


def _match_ruby(units: list[str], k: int, marks: frozenset) -> Optional[str]:
    """Base unit of a one-character emphasis annotation starting at k."""
    if k + 4 >= len(units):
        return None
    base = units[k + 1]
    if base in RUBY_SYNTAX:
        return None
    if units[k + 2] == RUBY_OPEN and units[k + 3] in marks and units[k + 4] == RUBY_CLOSE:
        return base
    return None


def _match_double_bracket(units: list[str], k: int) -> Optional[int]:
    """Index of the closing 》》 of a 《《span》》 starting at k."""
    j = k + 2
    while j < len(units) and units[j] not in RUBY_SYNTAX:
        j += 1
    if j == k + 2 or j + 1 >= len(units):
        return None
    if units[j] == RUBY_CLOSE and units[j + 1] == RUBY_CLOSE:
        return j
    return None


def recognize(line: str, marks: frozenset = DEFAULT_MARKS) -> list[Segment]:
    """Read every supported emphasis dialect in line into segments.

    Adjacent emphasized text comes back as one segment.
    """
    units = split_units(line)
    builder = _SegmentBuilder()
    inside = False
    k = 0

    while k < len(units):
        unit = units[k]
        nxt = units[k + 1] if k + 1 < len(units) else ""

        if unit == ESCAPE:
            if nxt == ESCAPE:
                builder.add(ESCAPE, inside)
                k += 2
            elif nxt == "<" and not inside and _find_close(units, k + 2) is not None:
                inside = True
                k += 2
            elif nxt == ">" and inside:
                inside = False
                k += 2
            else:
                builder.add(ESCAPE, inside)
                k += 1
            continue

        if unit in RUBY_SEPARATORS:
            base = _match_ruby(units, k, marks)
            if base is not None:
                builder.add(base, True)
                k += 5
                continue
        elif unit == RUBY_OPEN and nxt == RUBY_OPEN and (k == 0 or units[k - 1] not in RUBY_SEPARATORS):
            end = _match_double_bracket(units, k)
            if end is not None:
                builder.add("".join(units[k + 2:end]), True)
                k = end + 2
                continue

        builder.add(unit, inside)
        k += 1

    return builder.segments


def relocate_breaks(segments: Iterable[Segment]) -> list[Segment]:
    """Move spaces and exclamation marks out of emphasized segments.

    The span closes before each such run and reopens after it. Empty
    spans disappear.
    """
    builder = _SegmentBuilder()
    for segment in segments:
        if not segment.emphasized:
            builder.add(segment.text, False)
            continue
        for unit in iter_units(segment.text):
            builder.add(unit, unit not in BREAK_CHARS)
    return builder.segments


def _needs_scan(line: str) -> bool:
    return ESCAPE in line or RUBY_OPEN in line or any(sep in line for sep in RUBY_SEPARATORS)


def to_intermediate(line: str, marks: frozenset = DEFAULT_MARKS) -> str:
    """Rewrite every recognized emphasis in line into the intermediate form."""
    if not _needs_scan(line):
        return line
    return write_intermediate(relocate_breaks(recognize(line, marks)))


def ruby_wrap(text: str, mark: str) -> str:
    """Annotate each grapheme unit of text with mark."""
    return "".join(
        f"｜{unit}{RUBY_OPEN}{mark}{RUBY_CLOSE}"
        for unit in iter_units(text)
    )


def render(intermediate: str, style: EmphasisStyle, mark: str) -> str:
    """Render intermediate-form text in the destination dialect."""
    if ESCAPE not in intermediate:
        return intermediate

    parts = []
    for segment in parse_intermediate(intermediate):
        if not segment.emphasized:
            parts.append(segment.text)
        elif style is EmphasisStyle.RUBY:
            parts.append(ruby_wrap(segment.text, mark))
        else:
            parts.append(f"{RUBY_OPEN}{RUBY_OPEN}{segment.text}{RUBY_CLOSE}{RUBY_CLOSE}")
    return "".join(parts)


def transcode(line: str, style: EmphasisStyle, mark: str, marks: Optional[frozenset] = None) -> str:
    """Convert every emphasis in line to style, using mark for ruby output."""
    if marks is None:
        marks = DEFAULT_MARKS | {mark}
    return render(to_intermediate(line, marks), style, mark)
