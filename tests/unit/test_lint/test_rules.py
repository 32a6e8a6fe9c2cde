"""Tests for the rule catalogue and severity resolution."""

import pytest

from css_lint.lint.rules import LintSettings, Rules, Settings, to_level
from css_lint.nodes import Level


class TestRules:
    def test_rule_ids_are_unique(self):
        """Test rule ids are unique."""
        ids = [rule.id for rule in Rules.all()]

        assert len(ids) == len(set(ids)) == 19

    def test_lookup_by_id(self):
        """Test rule lookup by id."""
        assert Rules.get("zeroUnits") is Rules.ZeroWithUnit
        assert Rules.get("noSuchRule") is None

    def test_defaults(self):
        """Test default rule levels."""
        assert Rules.HexColorLength.default_value is Level.ERROR
        assert Rules.EmptyRuleSet.default_value is Level.WARNING
        assert Rules.AvoidFloat.default_value is Level.IGNORE


class TestLintSettings:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("error", Level.ERROR),
            ("Warning", Level.WARNING),
            ("ignore", Level.IGNORE),
            ("loud", Level.IGNORE),
            (None, Level.IGNORE),
        ],
    )
    def test_to_level(self, value, expected):
        """Test conversion of level names."""
        assert to_level(value) is expected

    def test_configured_rule_wins(self):
        """Test configured levels override defaults."""
        settings = LintSettings({"float": "error", "emptyRules": "ignore"})

        assert settings.get_rule(Rules.AvoidFloat) is Level.ERROR
        assert settings.get_rule(Rules.EmptyRuleSet) is Level.IGNORE

    def test_unconfigured_rule_uses_default(self):
        """Test unconfigured rules use their default."""
        settings = LintSettings()

        assert settings.get_rule(Rules.ArgsInColorFunction) is Level.ERROR
        assert settings.get_rule(Rules.AvoidImportant) is Level.IGNORE

    def test_valid_properties_setting(self):
        """Test the valid properties setting."""
        assert LintSettings().get_setting(Settings.ValidProperties) == []
        settings = LintSettings({"validProperties": ["foo"]})
        assert settings.get_setting(Settings.ValidProperties) == ["foo"]
