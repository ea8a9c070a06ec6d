"""Tests for pipeline assembly."""

import pytest

from core.config import ConfigurationError, FormatConfig, IndentType, PeriodPolicy, SpacePolicy
from core.pipeline import build_pipeline
from core.platforms import NAROU, Platform, UnknownPlatformError
from core.rules import AddExclamationSpace, EmphasisTranscoder, ParagraphIndent


class TestBuildPipeline:
    def test_default_rules(self):
        pipeline = build_pipeline(FormatConfig(), Platform.KAKUYOMU)
        assert pipeline.describe() == [
            "strip_indent",
            "paragraph_indent",
            "emphasis",
            "move_space_after_ruby",
            "strip_space_before_closing_bracket",
        ]

    def test_all_rules_in_order(self):
        config = FormatConfig(
            paragraph_indent_num=1,
            dialogue_indent_num=1,
            period_at_end_of_dialogue=PeriodPolicy.STRIP_THEN_ADD,
            space_after_exclamation=SpacePolicy.ADD,
        )
        pipeline = build_pipeline(config, Platform.NAROU)
        assert pipeline.describe() == [
            "strip_indent",
            "paragraph_indent",
            "dialogue_indent",
            "strip_dialogue_period",
            "add_dialogue_period",
            "strip_exclamation_space",
            "emphasis",
            "add_exclamation_space",
            "move_space_after_ruby",
            "strip_space_before_closing_bracket",
        ]

    def test_minimal_rules(self):
        config = FormatConfig(paragraph_indent_num=0)
        assert build_pipeline(config, "html").describe() == [
            "strip_indent",
            "emphasis",
            "move_space_after_ruby",
            "strip_space_before_closing_bracket",
        ]

    def test_strip_policies_do_not_add(self):
        config = FormatConfig(
            paragraph_indent_num=0,
            period_at_end_of_dialogue=PeriodPolicy.STRIP,
            space_after_exclamation=SpacePolicy.STRIP,
        )
        names = build_pipeline(config, "narou").describe()
        assert "strip_dialogue_period" in names
        assert "add_dialogue_period" not in names
        assert "strip_exclamation_space" in names
        assert "add_exclamation_space" not in names

    def test_rule_parameters_come_from_config(self):
        config = FormatConfig(
            paragraph_indent_num=2,
            paragraph_indent_type=IndentType.TAB,
            space_after_exclamation=SpacePolicy.ADD,
            space_after_exclamation_type=IndentType.EM_SPACE,
            emphasis_mark="●",
        )
        rules = build_pipeline(config, Platform.NAROU).rules
        assert ParagraphIndent("\t\t") in rules
        assert AddExclamationSpace("\u2003") in rules
        assert EmphasisTranscoder(NAROU, "●") in rules

    def test_deterministic(self):
        config = FormatConfig(dialogue_indent_num=1)
        assert build_pipeline(config, "novelup") == build_pipeline(config, "novelup")

    def test_apply_folds_rules(self):
        pipeline = build_pipeline(FormatConfig(), Platform.KAKUYOMU)
        assert pipeline.apply("  本文 ") == "　本文"


class TestBuildErrors:
    def test_unknown_platform(self):
        with pytest.raises(UnknownPlatformError):
            build_pipeline(FormatConfig(), "pixiv")

    def test_not_a_config(self):
        with pytest.raises(ConfigurationError):
            build_pipeline({"paragraphIndentNum": 1}, Platform.NAROU)
