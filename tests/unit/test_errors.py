"""Tests for error classes and marker formatting."""

from css_builder import decl, ruleset, stylesheet
from css_lint.knowledge import CSSDataManager
from css_lint.lint.rules import LintSettings
from css_lint.lint.visitor import LintVisitor
from css_lint.utils.errors import (
    CSSLintError,
    ConfigurationError,
    KnowledgeBaseError,
    format_markers,
    offset_to_position,
)


class TestErrors:
    def test_hierarchy(self):
        """Test error classes share the CSSLintError base."""
        assert issubclass(ConfigurationError, CSSLintError)
        assert issubclass(KnowledgeBaseError, CSSLintError)

    def test_details(self):
        """Test details are kept on the exception."""
        error = KnowledgeBaseError("bad data", details={"entry": 1})

        assert error.message == "bad data"
        assert error.details == {"entry": 1}
        assert CSSLintError("plain").details == {}


class TestFormatting:
    def test_offset_to_position(self):
        """Test conversion of offsets to line and column."""
        document = "a\nbc\ndef"

        assert offset_to_position(document, 0) == (1, 1)
        assert offset_to_position(document, 3) == (2, 2)
        assert offset_to_position(document, 5) == (3, 1)

    def test_no_markers(self):
        """Test formatting an empty marker list."""
        assert format_markers([], "") == "No problems"

    def test_format_markers(self):
        """Test formatting of markers with positions."""
        tree, text = stylesheet(ruleset(".a"), ruleset(".b", decl("colr", "red")))
        data = CSSDataManager(properties=[{"name": "color"}])
        markers = LintVisitor.entries(tree, text, LintSettings(), data)

        assert format_markers(markers, text) == (
            "Line 1, Column 1: [warning] emptyRules: Do not use empty rulesets\n"
            "Line 2, Column 6: [warning] unknownProperties: Unknown property: 'colr'"
        )
