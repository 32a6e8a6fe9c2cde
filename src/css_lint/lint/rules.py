"""Lint rule catalogue and severity resolution."""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..nodes import Level


def to_level(value: Any) -> Level:
    """Map a configured severity string to a Level; unrecognised values mean ignore."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "warning":
            return Level.WARNING
        if lowered == "error":
            return Level.ERROR
    return Level.IGNORE


@dataclass(frozen=True)
class Rule:
    """A named, independently configurable check."""

    id: str
    message: str
    default_value: Level


@dataclass(frozen=True)
class Setting:
    """A non-severity lint option."""

    id: str
    message: str
    default_value: Any


class Rules:
    """Every rule the linter can report."""

    AllVendorPrefixes = Rule(
        "compatibleVendorPrefixes",
        "When using a vendor-specific prefix make sure to also include all other vendor-specific properties",
        Level.IGNORE,
    )
    IncludeStandardPropertyWhenUsingVendorPrefix = Rule(
        "vendorPrefix",
        "When using a vendor-specific prefix also include the standard property",
        Level.WARNING,
    )
    DuplicateDeclarations = Rule(
        "duplicateProperties", "Do not use duplicate style definitions", Level.IGNORE
    )
    EmptyRuleSet = Rule("emptyRules", "Do not use empty rulesets", Level.WARNING)
    ImportStatement = Rule(
        "importStatement", "Import statements do not load in parallel", Level.IGNORE
    )
    BewareOfBoxModelSize = Rule(
        "boxModel", "Do not use width or height when using padding or border", Level.IGNORE
    )
    UniversalSelector = Rule(
        "universalSelector", "The universal selector (*) is known to be slow", Level.IGNORE
    )
    ZeroWithUnit = Rule("zeroUnits", "No unit for zero needed", Level.IGNORE)
    RequiredPropertiesForFontFace = Rule(
        "fontFaceProperties",
        "@font-face rule must define 'src' and 'font-family' properties",
        Level.WARNING,
    )
    HexColorLength = Rule(
        "hexColorLength",
        "Hex colors must consist of three, four, six or eight hex numbers",
        Level.ERROR,
    )
    ArgsInColorFunction = Rule(
        "argumentsInColorFunction", "Invalid number of parameters", Level.ERROR
    )
    UnknownProperty = Rule("unknownProperties", "Unknown property.", Level.WARNING)
    UnknownAtRules = Rule("unknownAtRules", "Unknown at-rule.", Level.WARNING)
    IEStarHack = Rule(
        "ieHack", "IE hacks are only necessary when supporting IE7 and older", Level.IGNORE
    )
    UnknownVendorSpecificProperty = Rule(
        "unknownVendorSpecificProperties", "Unknown vendor specific property.", Level.IGNORE
    )
    PropertyIgnoredDueToDisplay = Rule(
        "propertyIgnoredDueToDisplay", "Property is ignored due to the display.", Level.WARNING
    )
    AvoidImportant = Rule(
        "important",
        "Avoid using !important. It is an indication that the specificity of the entire CSS has gotten out of control and needs to be refactored.",
        Level.IGNORE,
    )
    AvoidFloat = Rule(
        "float",
        "Avoid using 'float'. Floats lead to fragile CSS that is easy to break if one aspect of the layout changes.",
        Level.IGNORE,
    )
    AvoidIdSelector = Rule(
        "idSelector",
        "Selectors should not contain IDs because these rules are too tightly coupled with the HTML.",
        Level.IGNORE,
    )

    @classmethod
    def all(cls) -> List[Rule]:
        return [value for value in vars(cls).values() if isinstance(value, Rule)]

    @classmethod
    def get(cls, rule_id: str) -> Optional[Rule]:
        for rule in cls.all():
            if rule.id == rule_id:
                return rule
        return None


class Settings:
    ValidProperties = Setting(
        "validProperties",
        "A list of properties that are not validated against the `unknownProperties` rule.",
        [],
    )


class LintSettings:
    """Read-only view over user lint configuration.

    ``conf`` maps rule ids to severity strings and setting ids to raw values.
    """

    def __init__(self, conf: Optional[Mapping[str, Any]] = None):
        self._conf: Dict[str, Any] = dict(conf or {})

    def get_rule(self, rule: Rule) -> Level:
        if rule.id in self._conf:
            return to_level(self._conf[rule.id])
        return rule.default_value

    def get_setting(self, setting: Setting) -> Any:
        return self._conf.get(setting.id, setting.default_value)
