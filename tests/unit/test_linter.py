"""Tests for the CSSLinter entry point."""

import logging

from css_builder import decl, ruleset, stylesheet
from css_lint import CSSLinter, lint
from css_lint.config import CSSLintConfig, LintConfig, LoggingConfig
from css_lint.nodes import Level
from css_lint.utils.logging_config import JSONFormatter


class TestCSSLinter:
    def test_clean_stylesheet(self):
        """Test linting a stylesheet without problems."""
        tree, text = stylesheet(ruleset(".a", decl("color", "red")))
        result = CSSLinter().lint(tree, text)

        assert result.markers == []
        assert result.summary == "No problems"
        assert result.lint_time_ms >= 0

    def test_summary_counts(self):
        """Test error and warning counts in the summary."""
        tree, text = stylesheet(
            ruleset(".a", decl("colr", "red"), decl("color", "#ab"))
        )
        result = CSSLinter().lint(tree, text)

        assert result.errors == 1
        assert result.warnings == 1
        assert result.summary == "1 errors, 1 warnings"

    def test_config_levels_and_valid_properties(self, test_config: CSSLintConfig):
        """Test rule levels and valid properties from configuration."""
        tree, text = stylesheet(ruleset("#a", decl("composes", "b")))
        linter = CSSLinter.from_config(test_config)

        assert [m.rule.id for m in linter.lint(tree, text).markers] == [
            "unknownProperties",
            "idSelector",
        ]

        test_config.lint.valid_properties.append("composes")
        assert [m.rule.id for m in CSSLinter.from_config(test_config).lint(tree, text).markers] == [
            "idSelector"
        ]

    def test_message_overrides(self):
        """Test message templates overridden in configuration."""
        config = LintConfig(messages={"property.unknownproperty.detailed": "Nope: {0}"})
        tree, text = stylesheet(ruleset(".a", decl("colr", "red")))

        (marker,) = CSSLinter(config).lint(tree, text).markers

        assert marker.message == "Nope: colr"

    def test_entry_filter(self):
        """Test filtering reported markers by level."""
        tree, text = stylesheet(ruleset(".a", decl("float", "left")))

        assert lint(tree, text) == []
        (marker,) = lint(tree, text, entry_filter=Level.IGNORE)
        assert marker.rule.id == "float"

    def test_custom_data_file(self, temp_dir):
        """Test properties contributed by a custom data file."""
        data_file = temp_dir / "data.yaml"
        data_file.write_text("properties:\n  - name: composes\n")
        tree, text = stylesheet(ruleset(".a", decl("composes", "b")))

        result = CSSLinter(LintConfig(custom_data=str(data_file))).lint(tree, text)

        assert result.markers == []

    def test_logs_result(self, caplog):
        """Test the lint pass is logged with its counts."""
        tree, text = stylesheet(ruleset(".a"))

        with caplog.at_level(logging.INFO, logger="css_lint"):
            CSSLinter().lint(tree, text)

        record = next(r for r in caplog.records if r.getMessage() == "CSS lint completed")
        assert record.event == "lint_complete"
        assert record.reported == 1

    def test_from_config_applies_logging(self, test_config: CSSLintConfig, restore_root_logger):
        """Test the logging section is applied when building from configuration."""
        test_config.logging = LoggingConfig(level="debug", format="json")

        CSSLinter.from_config(test_config)

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert [type(h.formatter) for h in root.handlers] == [JSONFormatter]
