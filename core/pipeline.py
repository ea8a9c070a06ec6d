"""Assemble the ordered rule list for a platform and configuration."""

import logging
from dataclasses import dataclass
from typing import Union

from core.config import ConfigurationError, FormatConfig, PeriodPolicy, SpacePolicy
from core.platforms import Platform, PlatformConfig, resolve_platform
from core.rules import (
    AddDialoguePeriod,
    AddExclamationSpace,
    DialogueIndent,
    EmphasisTranscoder,
    MoveSpaceAfterRuby,
    ParagraphIndent,
    Rule,
    StripDialoguePeriod,
    StripExclamationSpace,
    StripIndent,
    StripSpaceBeforeClosingBracket,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pipeline:
    rules: tuple[Rule, ...]

    def apply(self, line: str) -> str:
        for rule in self.rules:
            line = rule.apply(line)
        return line

    def describe(self) -> list[str]:
        return [rule.name for rule in self.rules]

    def __len__(self) -> int:
        return len(self.rules)


def build_pipeline(
    config: FormatConfig,
    platform: Union[Platform, PlatformConfig, str, int],
) -> Pipeline:
    """Build the rules for config and platform in their fixed order.

    Indentation and period rules run before emphasis rendering so inserted
    ruby text is never mistaken for prose. The exclamation space is added
    after rendering so the new space never ends up inside a span.

    Raises:
        ConfigurationError: config is not a FormatConfig.
        UnknownPlatformError: platform names no known platform.
    """
    if not isinstance(config, FormatConfig):
        raise ConfigurationError(f"Expected FormatConfig, got {type(config).__name__}")
    target = resolve_platform(platform)

    rules: list[Rule] = [StripIndent()]

    if config.paragraph_indent_num > 0:
        rules.append(ParagraphIndent(config.paragraph_indent_type.repeat(config.paragraph_indent_num)))
    if config.dialogue_indent_num > 0:
        rules.append(DialogueIndent(config.dialogue_indent_type.repeat(config.dialogue_indent_num)))

    if config.period_at_end_of_dialogue is not PeriodPolicy.LEAVE:
        rules.append(StripDialoguePeriod())
        if config.period_at_end_of_dialogue is PeriodPolicy.STRIP_THEN_ADD:
            rules.append(AddDialoguePeriod())

    if config.space_after_exclamation is not SpacePolicy.LEAVE:
        rules.append(StripExclamationSpace())

    rules.append(EmphasisTranscoder(target, config.mark))

    if config.space_after_exclamation is SpacePolicy.ADD:
        rules.append(AddExclamationSpace(config.space_after_exclamation_type.char))

    rules.append(MoveSpaceAfterRuby())
    rules.append(StripSpaceBeforeClosingBracket())

    pipeline = Pipeline(tuple(rules))
    logger.debug("Built pipeline for %s: %s", target.key, ", ".join(pipeline.describe()))
    return pipeline
