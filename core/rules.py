"""Line rewriting rules.

Each rule is a small frozen value carrying its own parameters. ``apply``
takes one line and returns the rewritten line; a rule whose condition
does not hold returns the line unchanged.
"""

import re
from dataclasses import dataclass
from typing import ClassVar

from core.emphasis import transcode
from core.platforms import PlatformConfig

DIALOGUE_OPEN = "「"
DIALOGUE_CLOSE = "」"
PERIOD = "。"

EXCLAMATIONS = "!?！？⁇⁈⁉"
CLOSING_BRACKETS = "）」』］】》〉〕)]"
# 《 is left out: it opens a ruby annotation, see MoveSpaceAfterRuby.
OPENING_BRACKETS = "（「『［【〈〔(["

_LEADING_SPACE_RE = re.compile(r"^[\s\ufeff]+")
_TRAILING_SPACE_RE = re.compile(r"[\s\ufeff]+$")
_DIALOGUE_PERIOD_RE = re.compile(PERIOD + "(?=" + DIALOGUE_CLOSE + ")")
# A closing emphasis marker (#>) counts as a closing bracket.
_MISSING_PERIOD_RE = re.compile(
    "([^" + re.escape(EXCLAMATIONS + "。．…‥" + CLOSING_BRACKETS + DIALOGUE_OPEN) + "])(?<!#>)(?=" + DIALOGUE_CLOSE + ")"
)
_SPACE_AFTER_EXCLAMATION_RE = re.compile("(?<=[" + re.escape(EXCLAMATIONS) + r"])\s+")
_BARE_EXCLAMATION_RE = re.compile(
    "([" + re.escape(EXCLAMATIONS) + "])(?![" + re.escape(EXCLAMATIONS + OPENING_BRACKETS + CLOSING_BRACKETS) + "]|$)"
)
_SPACE_BEFORE_RUBY_RE = re.compile(r"([|｜][^|｜《》]+)(\s)(《[^|｜《》]+》)")
_SPACE_BEFORE_CLOSING_RE = re.compile(r"\s+(?=[" + re.escape(CLOSING_BRACKETS) + "])")


class Rule:
    name: ClassVar[str] = "rule"

    def apply(self, line: str) -> str:
        raise NotImplementedError

    def __call__(self, line: str) -> str:
        return self.apply(line)


@dataclass(frozen=True)
class StripIndent(Rule):
    """Remove all leading and trailing whitespace."""

    name: ClassVar[str] = "strip_indent"

    def apply(self, line: str) -> str:
        return _TRAILING_SPACE_RE.sub("", _LEADING_SPACE_RE.sub("", line))


@dataclass(frozen=True)
class ParagraphIndent(Rule):
    """Indent non-empty lines that do not open with dialogue."""

    indent: str
    name: ClassVar[str] = "paragraph_indent"

    def apply(self, line: str) -> str:
        if not line or line.startswith(DIALOGUE_OPEN):
            return line
        return self.indent + line


@dataclass(frozen=True)
class DialogueIndent(Rule):
    """Indent lines that open with dialogue."""

    indent: str
    name: ClassVar[str] = "dialogue_indent"

    def apply(self, line: str) -> str:
        if line.startswith(DIALOGUE_OPEN):
            return self.indent + line
        return line


@dataclass(frozen=True)
class StripDialoguePeriod(Rule):
    name: ClassVar[str] = "strip_dialogue_period"

    def apply(self, line: str) -> str:
        return _DIALOGUE_PERIOD_RE.sub("", line)


@dataclass(frozen=True)
class AddDialoguePeriod(Rule):
    """Close every dialogue with a period unless it already ends in a terminal mark."""

    name: ClassVar[str] = "add_dialogue_period"

    def apply(self, line: str) -> str:
        return _MISSING_PERIOD_RE.sub(r"\1" + PERIOD, line)


@dataclass(frozen=True)
class StripExclamationSpace(Rule):
    name: ClassVar[str] = "strip_exclamation_space"

    def apply(self, line: str) -> str:
        return _SPACE_AFTER_EXCLAMATION_RE.sub("", line)


@dataclass(frozen=True)
class AddExclamationSpace(Rule):
    """Follow each exclamation or question mark with one space.

    Runs of marks, marks next to a bracket and marks at the end of the
    line are left alone.
    """

    space: str
    name: ClassVar[str] = "add_exclamation_space"

    def apply(self, line: str) -> str:
        return _BARE_EXCLAMATION_RE.sub(lambda m: m.group(1) + self.space, line)


@dataclass(frozen=True)
class EmphasisTranscoder(Rule):
    platform: PlatformConfig
    mark: str
    name: ClassVar[str] = "emphasis"

    def apply(self, line: str) -> str:
        return transcode(line, self.platform.emphasis_style, self.mark)


@dataclass(frozen=True)
class MoveSpaceAfterRuby(Rule):
    """Move a space that landed inside a ruby base to after its annotation."""

    name: ClassVar[str] = "move_space_after_ruby"

    def apply(self, line: str) -> str:
        return _SPACE_BEFORE_RUBY_RE.sub(r"\1\3\2", line)


@dataclass(frozen=True)
class StripSpaceBeforeClosingBracket(Rule):
    name: ClassVar[str] = "strip_space_before_closing_bracket"

    def apply(self, line: str) -> str:
        # First occurrence only.
        return _SPACE_BEFORE_CLOSING_RE.sub("", line, count=1)
