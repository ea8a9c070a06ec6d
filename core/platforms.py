"""Destination platforms and the emphasis dialect each one expects."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union


class UnknownPlatformError(ValueError):
    """Raised for a platform identifier that names no known platform."""


class Platform(IntEnum):
    NAROU = 1
    KAKUYOMU = 2
    NOVELUP = 3
    HTML = 4


class EmphasisStyle(str, Enum):
    # ｜字《﹅》 per character
    RUBY = "ruby"
    # 《《span》》 once per span
    DOUBLE_BRACKET = "double_bracket"


@dataclass(frozen=True)
class PlatformConfig:
    platform: Platform
    key: str
    title: str
    emphasis_style: EmphasisStyle


NAROU = PlatformConfig(Platform.NAROU, "narou", "小説家になろう", EmphasisStyle.RUBY)
KAKUYOMU = PlatformConfig(Platform.KAKUYOMU, "kakuyomu", "カクヨム", EmphasisStyle.DOUBLE_BRACKET)
NOVELUP = PlatformConfig(Platform.NOVELUP, "novelup", "ノベルアップ＋", EmphasisStyle.RUBY)
HTML = PlatformConfig(Platform.HTML, "html", "HTML", EmphasisStyle.DOUBLE_BRACKET)

PLATFORM_CONFIGS = {
    config.key: config
    for config in (NAROU, KAKUYOMU, NOVELUP, HTML)
}

_BY_PLATFORM = {config.platform: config for config in PLATFORM_CONFIGS.values()}


def resolve_platform(value: Union[Platform, PlatformConfig, str, int]) -> PlatformConfig:
    """Look up a platform by enum member, record, key or numeric id."""
    if isinstance(value, PlatformConfig):
        return value
    if isinstance(value, Platform):
        return _BY_PLATFORM[value]
    if isinstance(value, bool):
        raise UnknownPlatformError(f"Unknown platform: {value!r}")
    if isinstance(value, int):
        try:
            return _BY_PLATFORM[Platform(value)]
        except ValueError:
            raise UnknownPlatformError(f"Unknown platform: {value!r}") from None
    if isinstance(value, str):
        key = value.strip().lower()
        if key in PLATFORM_CONFIGS:
            return PLATFORM_CONFIGS[key]
        if key.isdigit():
            return resolve_platform(int(key))
    raise UnknownPlatformError(f"Unknown platform: {value!r}")
