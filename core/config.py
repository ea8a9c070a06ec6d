"""Formatting preferences.

FormatConfig is a read-only value passed into the formatter. It can be
built directly, from a settings mapping (camelCase keys, as written in
editor settings), or from NOVEL_FORMAT_* environment variables.
"""

import os
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Mapping, Optional

import grapheme


class ConfigurationError(ValueError):
    """Raised when a formatting option has an unrecognized value."""


class IndentType(str, Enum):
    SPACE = "space"
    FULLWIDTH_SPACE = "fullwidth_space"
    TAB = "tab"
    EM_SPACE = "em_space"

    @property
    def char(self) -> str:
        return _INDENT_CHARS[self]

    def repeat(self, count: int) -> str:
        return self.char * count


_INDENT_CHARS = {
    IndentType.SPACE: " ",
    IndentType.FULLWIDTH_SPACE: "　",
    IndentType.TAB: "\t",
    IndentType.EM_SPACE: "\u2003",
}


class PeriodPolicy(str, Enum):
    LEAVE = "leave"
    STRIP = "strip"
    STRIP_THEN_ADD = "strip_then_add"


class SpacePolicy(str, Enum):
    LEAVE = "leave"
    STRIP = "strip"
    ADD = "add"


# Japanese labels from editor settings and spelled-out names.
_ALIASES = {
    IndentType: {
        "半角空白": IndentType.SPACE,
        "全角空白": IndentType.FULLWIDTH_SPACE,
        "タブ": IndentType.TAB,
        "em sp": IndentType.EM_SPACE,
        "full_width_space": IndentType.FULLWIDTH_SPACE,
    },
    PeriodPolicy: {
        "そのまま": PeriodPolicy.LEAVE,
        "leave_as_is": PeriodPolicy.LEAVE,
        "削除": PeriodPolicy.STRIP,
        "追加": PeriodPolicy.STRIP_THEN_ADD,
        "add": PeriodPolicy.STRIP_THEN_ADD,
    },
    SpacePolicy: {
        "そのまま": SpacePolicy.LEAVE,
        "leave_as_is": SpacePolicy.LEAVE,
        "削除": SpacePolicy.STRIP,
        "追加": SpacePolicy.ADD,
    },
}


def parse_enum(enum_cls, value, option: str):
    """Parse an option value into enum_cls, accepting names and labels."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip()
        aliases = _ALIASES.get(enum_cls, {})
        if key in aliases:
            return aliases[key]
        normalized = key.lower().replace("-", "_").replace(" ", "_")
        for candidate in (key.lower(), normalized):
            if candidate in aliases:
                return aliases[candidate]
        try:
            return enum_cls(normalized)
        except ValueError:
            pass
    allowed = ", ".join(member.value for member in enum_cls)
    raise ConfigurationError(f"Invalid value for {option}: {value!r} (expected one of {allowed})")


def _parse_count(value, option: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid value for {option}: {value!r}")
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid value for {option}: {value!r}") from None
    if count < 0:
        raise ConfigurationError(f"{option} must be non-negative, got {count}")
    return count


# camelCase settings key -> dataclass field
SETTING_KEYS = {
    "paragraphIndentNum": "paragraph_indent_num",
    "paragraphIndentType": "paragraph_indent_type",
    "dialogueIndentNum": "dialogue_indent_num",
    "dialogueIndentType": "dialogue_indent_type",
    "periodAtEndOfDialogue": "period_at_end_of_dialogue",
    "spaceAfterExclamation": "space_after_exclamation",
    "spaceAfterExclamationType": "space_after_exclamation_type",
    "emphasisMark": "emphasis_mark",
}

ENV_PREFIX = "NOVEL_FORMAT_"


@dataclass(frozen=True)
class FormatConfig:
    paragraph_indent_num: int = 1
    paragraph_indent_type: IndentType = IndentType.FULLWIDTH_SPACE
    dialogue_indent_num: int = 0
    dialogue_indent_type: IndentType = IndentType.FULLWIDTH_SPACE
    period_at_end_of_dialogue: PeriodPolicy = PeriodPolicy.LEAVE
    space_after_exclamation: SpacePolicy = SpacePolicy.LEAVE
    space_after_exclamation_type: IndentType = IndentType.FULLWIDTH_SPACE
    emphasis_mark: str = "﹅"

    def __post_init__(self):
        # Normalize loose values so a config built by hand behaves like a parsed one.
        set_ = object.__setattr__
        set_(self, "paragraph_indent_num", _parse_count(self.paragraph_indent_num, "paragraphIndentNum"))
        set_(self, "dialogue_indent_num", _parse_count(self.dialogue_indent_num, "dialogueIndentNum"))
        set_(self, "paragraph_indent_type",
             parse_enum(IndentType, self.paragraph_indent_type, "paragraphIndentType"))
        set_(self, "dialogue_indent_type",
             parse_enum(IndentType, self.dialogue_indent_type, "dialogueIndentType"))
        set_(self, "period_at_end_of_dialogue",
             parse_enum(PeriodPolicy, self.period_at_end_of_dialogue, "periodAtEndOfDialogue"))
        set_(self, "space_after_exclamation",
             parse_enum(SpacePolicy, self.space_after_exclamation, "spaceAfterExclamation"))
        set_(self, "space_after_exclamation_type",
             parse_enum(IndentType, self.space_after_exclamation_type, "spaceAfterExclamationType"))
        if self.space_after_exclamation_type is IndentType.TAB:
            raise ConfigurationError("Invalid value for spaceAfterExclamationType: tab is only allowed for indents")
        if not isinstance(self.emphasis_mark, str) or not self.emphasis_mark:
            raise ConfigurationError(f"Invalid value for emphasisMark: {self.emphasis_mark!r}")

    @property
    def mark(self) -> str:
        """The emphasis mark, truncated to its first character."""
        return next(grapheme.graphemes(self.emphasis_mark))

    @classmethod
    def from_mapping(cls, data: Optional[Mapping], base: Optional["FormatConfig"] = None) -> "FormatConfig":
        """Build a config from settings keys, falling back to base for missing ones.

        Both camelCase keys and field names are accepted. Unknown keys are ignored.
        """
        values = asdict(base) if base is not None else {}
        for key, value in (data or {}).items():
            field_name = SETTING_KEYS.get(key, key)
            if field_name in SETTING_KEYS.values():
                values[field_name] = value
        return cls(**values)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FormatConfig":
        """Build a config from NOVEL_FORMAT_<FIELD> environment variables."""
        environ = os.environ if environ is None else environ
        data = {}
        for field_name in SETTING_KEYS.values():
            raw = environ.get(ENV_PREFIX + field_name.upper(), "")
            if raw.strip():
                # Keep the mark verbatim; it may itself be whitespace-like.
                data[field_name] = raw if field_name == "emphasis_mark" else raw.strip()
        return cls.from_mapping(data)

    def to_mapping(self) -> dict:
        """Return the config as camelCase settings."""
        result = {}
        for key, field_name in SETTING_KEYS.items():
            value = getattr(self, field_name)
            result[key] = value.value if isinstance(value, Enum) else value
        return result
