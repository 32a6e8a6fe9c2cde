"""Lint rules and the visitor that applies them."""

from .rules import Rule, Rules, Setting, Settings, LintSettings, to_level
from .box_model import Element, BoxModel, SideState, calculate_box_model
from .messages import MessageBundle
from .visitor import LintVisitor, NodesByRootMap, DEFAULT_ENTRY_FILTER

__all__ = [
    "Rule",
    "Rules",
    "Setting",
    "Settings",
    "LintSettings",
    "to_level",
    "Element",
    "BoxModel",
    "SideState",
    "calculate_box_model",
    "MessageBundle",
    "LintVisitor",
    "NodesByRootMap",
    "DEFAULT_ENTRY_FILTER",
]
