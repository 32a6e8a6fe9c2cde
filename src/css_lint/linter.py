"""CSS linter entry point binding configuration, data and the lint visitor."""

import time
from dataclasses import dataclass
from typing import List, Optional

from .config import CSSLintConfig, LintConfig
from .knowledge import CSSDataManager, KnowledgeBase
from .lint.messages import MessageBundle
from .lint.rules import LintSettings
from .lint.visitor import LintVisitor
from .nodes import Level, Marker, Node
from .utils.logging_config import LoggerMixin, log_lint_result, setup_logging


@dataclass
class LintResult:
    """Result of linting one document."""

    markers: List[Marker]
    errors: int
    warnings: int
    summary: str
    lint_time_ms: float


class CSSLinter(LoggerMixin):
    """Lints parsed stylesheets according to a lint configuration.

    The linter itself holds only immutable inputs; every call to ``lint``
    runs a fresh ``LintVisitor``.
    """

    def __init__(
        self,
        config: Optional[LintConfig] = None,
        data_manager: Optional[KnowledgeBase] = None,
    ):
        self.config = config or LintConfig()
        self.settings: LintSettings = self.config.to_settings()
        self.messages = MessageBundle(self.config.messages)
        if data_manager is None:
            data_manager = CSSDataManager.default(self.config.custom_data)
        self.data_manager = data_manager

    @classmethod
    def from_config(cls, config: CSSLintConfig) -> "CSSLinter":
        """Create a linter from a full configuration, applying its logging section."""
        setup_logging(config.logging)
        linter = cls(config.lint)
        linter.logger.debug(
            f"Linter configured with {len(config.lint.rules)} rule overrides "
            f"and {len(config.lint.valid_properties)} valid properties"
        )
        return linter

    def lint(
        self, stylesheet: Node, document: str, entry_filter: Optional[int] = None
    ) -> LintResult:
        """
        Lint a parsed stylesheet.

        Args:
            stylesheet: Root node of the parsed document
            document: The document text the tree was parsed from
            entry_filter: Bitmask of Level values to report (warnings and errors by default)

        Returns:
            LintResult with the reported markers
        """
        start_time = time.time()

        visitor = LintVisitor(
            document,
            self.settings,
            self.data_manager,
            prefixes=self.config.vendor_prefixes,
            messages=self.messages,
        )
        stylesheet.accept(visitor.visit_node)
        visitor.complete_validations()
        markers = visitor.get_entries(entry_filter)

        duration = time.time() - start_time
        log_lint_result(len(document), len(visitor.warnings), len(markers), duration)

        return self._create_result(markers, duration * 1000)

    def _create_result(self, markers: List[Marker], lint_time_ms: float) -> LintResult:
        errors = sum(1 for marker in markers if marker.level is Level.ERROR)
        warnings = sum(1 for marker in markers if marker.level is Level.WARNING)

        if errors:
            summary = f"{errors} errors"
            if warnings:
                summary += f", {warnings} warnings"
        elif warnings:
            summary = f"{warnings} warnings"
        else:
            summary = "No problems"

        return LintResult(
            markers=markers,
            errors=errors,
            warnings=warnings,
            summary=summary,
            lint_time_ms=lint_time_ms,
        )


def lint(
    stylesheet: Node,
    document: str,
    config: Optional[LintConfig] = None,
    data_manager: Optional[KnowledgeBase] = None,
    entry_filter: Optional[int] = None,
) -> List[Marker]:
    """Lint ``stylesheet`` and return the reported markers."""
    return CSSLinter(config, data_manager).lint(stylesheet, document, entry_filter).markers
