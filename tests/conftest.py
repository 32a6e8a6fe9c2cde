"""Pytest configuration and fixtures for css-lint tests."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Generator, List, Optional

import pytest

from css_lint.config import CSSLintConfig, LintConfig
from css_lint.knowledge import CSSDataManager
from css_lint.lint.rules import LintSettings, Rules
from css_lint.lint.visitor import LintVisitor
from css_lint.nodes import Marker


ALL_RULES_AS_WARNINGS = {rule.id: "warning" for rule in Rules.all()}


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def data_manager() -> CSSDataManager:
    """Small knowledge base with a vendor-prefixed standard spelling."""
    return CSSDataManager(
        properties=[
            {"name": "color"},
            {"name": "background"},
            {"name": "width"},
            {"name": "height"},
            {"name": "display"},
            {"name": "float"},
            {"name": "vertical-align"},
            {"name": "box-sizing"},
            {"name": "border"},
            {"name": "border-left"},
            {"name": "border-right"},
            {"name": "border-top"},
            {"name": "border-bottom"},
            {"name": "border-width"},
            {"name": "padding"},
            {"name": "padding-left"},
            {"name": "padding-right"},
            {"name": "padding-top"},
            {"name": "margin"},
            {"name": "margin-left"},
            {"name": "src"},
            {"name": "font-family"},
            {"name": "font-size"},
            {"name": "foo"},
            {"name": "-s2-foo"},
            {"name": "bar"},
            {"name": "zoom", "status": "nonstandard"},
        ],
        at_directives=[
            {"name": "@media"},
            {"name": "@font-face"},
            {"name": "@keyframes"},
        ],
    )


@pytest.fixture
def all_warnings_settings() -> LintSettings:
    """Every rule enabled at warning level."""
    return LintSettings(ALL_RULES_AS_WARNINGS)


@pytest.fixture
def run_lint(
    data_manager: CSSDataManager, all_warnings_settings: LintSettings
) -> Callable[..., List[Marker]]:
    """Lint a (tree, text) pair with every rule enabled."""

    def run(
        built,
        settings: Optional[LintSettings] = None,
        entry_filter: Optional[int] = None,
        **kwargs,
    ) -> List[Marker]:
        tree, text = built
        return LintVisitor.entries(
            tree,
            text,
            settings or all_warnings_settings,
            data_manager,
            entry_filter,
            **kwargs,
        )

    return run


@pytest.fixture
def lint_config() -> LintConfig:
    return LintConfig(rules=dict(ALL_RULES_AS_WARNINGS))


@pytest.fixture
def test_config(lint_config: LintConfig) -> CSSLintConfig:
    """Test configuration."""
    return CSSLintConfig(lint=lint_config)


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Restore root logger handlers and level replaced by setup_logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level

    yield root

    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Set up test environment variables."""
    os.environ["LOG_LEVEL"] = "CRITICAL"

    yield

    os.environ.pop("LOG_LEVEL", None)

