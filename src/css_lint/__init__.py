"""css-lint - single-pass style and correctness linter for parsed CSS."""

__version__ = "0.1.0"

from .nodes import Level, Marker, NodeType
from .knowledge import CSSDataManager, KnowledgeBase
from .lint import LintSettings, LintVisitor, Rules
from .linter import CSSLinter, LintResult, lint

__all__ = [
    "CSSDataManager",
    "CSSLinter",
    "KnowledgeBase",
    "Level",
    "LintResult",
    "LintSettings",
    "LintVisitor",
    "Marker",
    "NodeType",
    "Rules",
    "lint",
    "__version__",
]
