"""Custom error classes for the CSS linter."""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..nodes import Marker


class CSSLintError(Exception):
    """Base exception class for the CSS linter."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(CSSLintError):
    """Exception raised when configuration is invalid."""

    pass


class KnowledgeBaseError(CSSLintError):
    """Exception raised when CSS property data cannot be loaded."""

    pass


def offset_to_position(document: str, offset: int) -> Tuple[int, int]:
    """Convert a document offset into a 1-based (line, column) pair."""
    prefix = document[:offset]
    line = prefix.count("\n") + 1
    column = offset - (prefix.rfind("\n") + 1) + 1
    return line, column


def format_markers(markers: Sequence[Marker], document: str) -> str:
    """Format a list of markers into a readable string."""
    if not markers:
        return "No problems"

    formatted: List[str] = []
    for marker in markers:
        line, column = offset_to_position(document, marker.get_offset())
        formatted.append(
            f"Line {line}, Column {column}: "
            f"[{marker.level.name.lower()}] {marker.rule.id}: {marker.get_message()}"
        )

    return "\n".join(formatted)
