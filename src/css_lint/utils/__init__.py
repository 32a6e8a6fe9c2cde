"""Utility modules for the CSS linter."""

from .errors import (
    CSSLintError,
    ConfigurationError,
    KnowledgeBaseError,
    format_markers,
)
from .logging_config import setup_logging

__all__ = [
    "CSSLintError",
    "ConfigurationError",
    "KnowledgeBaseError",
    "format_markers",
    "setup_logging",
]
