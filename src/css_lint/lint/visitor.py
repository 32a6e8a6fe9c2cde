"""Single-pass lint visitor over a stylesheet syntax tree."""

from typing import Callable, Dict, List, Optional, Sequence

from ..knowledge import KnowledgeBase
from ..nodes import (
    Declaration,
    Expression,
    FontFace,
    Function,
    HexColorValue,
    Keyframe,
    Level,
    Marker,
    Node,
    NodeType,
    NumericValue,
    RuleSet,
)
from ..utils.logging_config import LoggerMixin
from .box_model import Element, calculate_box_model
from .messages import MessageBundle
from .rules import LintSettings, Rule, Rules, Settings

DEFAULT_ENTRY_FILTER = Level.WARNING | Level.ERROR

LENGTH_UNITS = (
    "em", "rem", "ex", "px", "cm", "mm", "in", "pt", "pc", "ch", "vw", "vh", "vmin", "vmax",
)

COLOR_FUNCTION_ARGUMENTS = {"rgb": 3, "hsl": 3, "rgba": 4, "hsla": 4}


class NodesByRootMap:
    """Groups names, and the nodes to report on, under a shared root key."""

    def __init__(self) -> None:
        self.data: Dict[str, Dict[str, list]] = {}

    def add(self, root: str, name: str, node: Optional[Node] = None) -> None:
        entry = self.data.setdefault(root, {"nodes": [], "names": []})
        entry["names"].append(name)
        if node is not None:
            entry["nodes"].append(node)


class LintVisitor(LoggerMixin):
    """Applies the lint rules to one document.

    An instance owns the markers and grouping state of a single pass and must
    not be reused for another document.
    """

    prefixes = ("-s2-",)

    def __init__(
        self,
        document: str,
        settings: LintSettings,
        data_manager: KnowledgeBase,
        prefixes: Optional[Sequence[str]] = None,
        messages: Optional[MessageBundle] = None,
    ):
        self.settings = settings
        self.document_text = document
        self.data_manager = data_manager
        self.messages = messages or MessageBundle()
        if prefixes is not None:
            self.prefixes = tuple(prefixes)
        self.keyframes = NodesByRootMap()
        self.warnings: List[Marker] = []

        self.valid_properties: Dict[str, bool] = {}
        properties = settings.get_setting(Settings.ValidProperties)
        if isinstance(properties, (list, tuple)):
            for prop in properties:
                if isinstance(prop, str):
                    name = prop.strip().lower()
                    if name:
                        self.valid_properties[name] = True

        self._handlers: Dict[NodeType, Callable[[Node], bool]] = {
            NodeType.UNKNOWN_AT_RULE: self._visit_unknown_at_rule,
            NodeType.KEYFRAME: self._visit_keyframe,
            NodeType.FONT_FACE: self._visit_font_face,
            NodeType.RULESET: self._visit_rule_set,
            NodeType.SIMPLE_SELECTOR: self._visit_simple_selector,
            NodeType.FUNCTION: self._visit_function,
            NodeType.NUMERIC_VALUE: self._visit_numeric_value,
            NodeType.IMPORT: self._visit_import,
            NodeType.HEX_COLOR_VALUE: self._visit_hex_color_value,
            NodeType.PRIO: self._visit_prio,
            NodeType.IDENTIFIER_SELECTOR: self._visit_identifier_selector,
        }

    @classmethod
    def entries(
        cls,
        node: Node,
        document: str,
        settings: LintSettings,
        data_manager: KnowledgeBase,
        entry_filter: Optional[int] = None,
        prefixes: Optional[Sequence[str]] = None,
        messages: Optional[MessageBundle] = None,
    ) -> List[Marker]:
        """Lint ``node`` and return the markers whose level is in ``entry_filter``."""
        visitor = cls(document, settings, data_manager, prefixes, messages)
        node.accept(visitor.visit_node)
        visitor.complete_validations()
        return visitor.get_entries(entry_filter)

    def get_entries(self, entry_filter: Optional[int] = None) -> List[Marker]:
        if entry_filter is None:
            entry_filter = DEFAULT_ENTRY_FILTER
        return [entry for entry in self.warnings if entry.get_level() & entry_filter]

    def visit_node(self, node: Node) -> bool:
        handler = self._handlers.get(node.type)
        if handler is None:
            return True
        return handler(node)

    def complete_validations(self) -> None:
        self._validate_keyframes()

    def _add_entry(self, node: Node, rule: Rule, details: Optional[str] = None) -> None:
        """Record a marker at the level configured for ``rule``."""
        entry = Marker(node, rule, self.settings.get_rule(rule), details or rule.message)
        self.warnings.append(entry)

    def _is_valid_property(self, name: str) -> bool:
        return self.valid_properties.get(name, False)

    @staticmethod
    def _fetch(table: Sequence[Element], name: str) -> List[Element]:
        return [element for element in table if element.full_property_name == name]

    def _fetch_with_value(self, table: Sequence[Element], name: str, value: str) -> List[Element]:
        """Elements named ``name`` whose value contains the identifier ``value``."""
        elements = []
        for element in self._fetch(table, name):
            expression = element.node.get_value()
            if expression is not None and self._find_value_in_expression(expression, value):
                elements.append(element)
        return elements

    @staticmethod
    def _find_value_in_expression(expression: Expression, value: str) -> bool:
        found = False

        def visit(node: Node) -> bool:
            nonlocal found
            if node.type is NodeType.IDENTIFIER and node.matches(value):
                found = True
            return not found

        expression.accept(visit)
        return found

    def _get_missing_names(self, expected: Sequence[str], actual: Sequence[str]) -> Optional[str]:
        """Format the expected names absent from ``actual``, or None if none are missing."""
        remaining: List[Optional[str]] = list(expected)
        for name in actual:
            if name in remaining:
                remaining[remaining.index(name)] = None

        result: Optional[str] = None
        for name in remaining:
            if name:
                if result is None:
                    result = self.messages.localize("namelist.single", "'{0}'", name)
                else:
                    result = self.messages.localize(
                        "namelist.concatenated", "{0}, '{1}'", result, name
                    )
        return result

    @staticmethod
    def _is_css_declaration(node: Node) -> bool:
        """Whether ``node`` is a declaration the property checks can reason about."""
        if not isinstance(node, Declaration):
            return False
        if node.get_value() is None:
            return False
        prop = node.get_property()
        if prop is None:
            return False
        identifier = prop.get_identifier()
        if identifier is None or identifier.contains_interpolation():
            return False
        return True

    # -- at-rules ---------------------------------------------------------

    def _visit_unknown_at_rule(self, node: Node) -> bool:
        """Report at-rules absent from the knowledge base; never descends."""
        at_rule_name = node.get_child(0)
        if at_rule_name is None:
            return False

        text = at_rule_name.get_text()
        if not self.data_manager.get_at_directive(text):
            self._add_entry(
                at_rule_name,
                Rules.UnknownAtRules,
                self.messages.localize("atrule.unknown", "Unknown at rule {0}", text),
            )
        return False

    def _visit_keyframe(self, node: Keyframe) -> bool:
        """Group keyframes spellings by animation name."""
        keyword = node.get_keyword()
        if keyword is None:
            return False

        text = keyword.get_text()
        self.keyframes.add(node.get_name(), text, keyword if text != "@keyframes" else None)
        return True

    def _validate_keyframes(self) -> None:
        # Grouping only: spelling variants are collected per animation name,
        # no marker is defined for them yet.
        for name, entry in self.keyframes.data.items():
            actual = entry["names"]
            needs_standard = "@keyframes" not in actual
            if not needs_standard and len(actual) == 1:
                continue
            self.logger.debug(f"Keyframes '{name}' declared as {', '.join(actual)}")

    def _visit_font_face(self, node: FontFace) -> bool:
        """Check that @font-face defines both src and font-family."""
        declarations = node.get_declarations()
        if declarations is None:
            self.logger.debug(f"Skipping @font-face without declarations at {node.offset}")
            return False

        defines_src = False
        defines_font_family = False
        contains_unknowns = False
        for child in declarations.get_children():
            if self._is_css_declaration(child):
                name = child.get_property().get_name().lower()
                if name == "src":
                    defines_src = True
                if name == "font-family":
                    defines_font_family = True
            else:
                contains_unknowns = True

        if not contains_unknowns and (not defines_src or not defines_font_family):
            self._add_entry(node, Rules.RequiredPropertiesForFontFace)

        return True

    def _visit_import(self, node: Node) -> bool:
        # @import serialises downloads
        self._add_entry(node, Rules.ImportStatement)
        return True

    # -- selectors --------------------------------------------------------

    def _visit_simple_selector(self, node: Node) -> bool:
        first_char = self.document_text[node.offset : node.offset + 1]
        if node.length == 1 and first_char == "*":
            self._add_entry(node, Rules.UniversalSelector)
        return True

    def _visit_identifier_selector(self, node: Node) -> bool:
        self._add_entry(node, Rules.AvoidIdSelector)
        return True

    # -- rule sets --------------------------------------------------------

    def _visit_rule_set(self, node: RuleSet) -> bool:
        """Run the per-block checks over the declarations of a rule set."""
        declarations = node.get_declarations()
        if declarations is None:
            self.logger.debug(f"Skipping rule set without declarations at {node.offset}")
            return False

        if not declarations.has_children():
            self._add_entry(node.get_selectors(), Rules.EmptyRuleSet)

        property_table = [
            Element(child)
            for child in declarations.get_children()
            if isinstance(child, Declaration)
        ]

        self._check_box_model(property_table)
        self._check_display(property_table)
        self._check_float(property_table)
        self._check_duplicates(property_table)

        if not node.get_selectors().matches(":export"):
            self._check_properties(property_table)

        return True

    def _check_box_model(self, property_table: List[Element]) -> None:
        # width with horizontal border/padding, height with vertical ones,
        # unless box-sizing is declared
        box_model = calculate_box_model(property_table)
        for size, sides in (
            (box_model.width, (box_model.right, box_model.left)),
            (box_model.height, (box_model.top, box_model.bottom)),
        ):
            if size is None:
                continue
            properties: List[Element] = []
            for side in sides:
                if side.value:
                    properties.extend(p for p in side.properties if p not in properties)
            if properties:
                for item in properties:
                    self._add_entry(item.node, Rules.BewareOfBoxModelSize)
                self._add_entry(size.node, Rules.BewareOfBoxModelSize)

    def _check_display(self, property_table: List[Element]) -> None:
        """Properties that have no effect under the declared display value."""
        if self._fetch_with_value(property_table, "display", "inline-block"):
            for element in self._fetch(property_table, "float"):
                value = element.node.get_value()
                if value is not None and not value.matches("none"):
                    self._add_entry(
                        element.node,
                        Rules.PropertyIgnoredDueToDisplay,
                        self.messages.localize(
                            "rule.propertyIgnoredDueToDisplayInlineBlock",
                            "inline-block is ignored due to the float. If 'float' has a value "
                            "other than 'none', the box is floated and 'display' is treated as 'block'",
                        ),
                    )

        if self._fetch_with_value(property_table, "display", "block"):
            for element in self._fetch(property_table, "vertical-align"):
                self._add_entry(
                    element.node,
                    Rules.PropertyIgnoredDueToDisplay,
                    self.messages.localize(
                        "rule.propertyIgnoredDueToDisplayBlock",
                        "Property is ignored due to the display. With 'display: block', "
                        "vertical-align should not be used.",
                    ),
                )

    def _check_float(self, property_table: List[Element]) -> None:
        """Report float unless it is listed as a valid property."""
        for element in self._fetch(property_table, "float"):
            if not self._is_valid_property(element.full_property_name):
                self._add_entry(element.node, Rules.AvoidFloat)

    def _value_starts_with_dash(self, value: Node) -> bool:
        return self.document_text[value.offset : value.offset + 1] == "-"

    def _check_duplicates(self, property_table: List[Element]) -> None:
        """Report each pair of declarations sharing a property name."""
        for element in property_table:
            name = element.full_property_name
            if name == "background" or self._is_valid_property(name):
                continue
            value = element.node.get_value()
            if value is None or self._value_starts_with_dash(value):
                continue
            same = self._fetch(property_table, name)
            if len(same) < 2:
                continue
            for other in same:
                other_value = other.node.get_value()
                if (
                    other is not element
                    and other_value is not None
                    and not self._value_starts_with_dash(other_value)
                ):
                    self._add_entry(element.node, Rules.DuplicateDeclarations)

    def _check_properties(self, property_table: List[Element]) -> None:
        """Unknown properties, IE hacks and vendor prefix completeness."""
        properties_by_suffix = NodesByRootMap()
        contains_unknowns = False

        for element in property_table:
            decl = element.node
            if not self._is_css_declaration(decl):
                contains_unknowns = True
                continue

            name = element.full_property_name
            first_char = name[:1]

            if first_char == "-":
                if name[1:2] != "-":  # custom properties are exempt
                    if not self.data_manager.is_known_property(name) and not self._is_valid_property(name):
                        self._add_entry(decl.get_property(), Rules.UnknownVendorSpecificProperty)
                    properties_by_suffix.add(
                        decl.get_non_prefixed_property_name().lower(), name, decl.get_property()
                    )
            else:
                full_name = name
                if first_char in ("*", "_"):
                    self._add_entry(decl.get_property(), Rules.IEStarHack)
                    name = name[1:]

                # hacked names may be contributed through custom data
                if not self.data_manager.is_known_property(full_name) and not self.data_manager.is_known_property(name):
                    if not self._is_valid_property(name):
                        self._add_entry(
                            decl.get_property(),
                            Rules.UnknownProperty,
                            self.messages.localize(
                                "property.unknownproperty.detailed",
                                "Unknown property: '{0}'",
                                decl.get_full_property_name(),
                            ),
                        )

                properties_by_suffix.add(name, name, None)

        if contains_unknowns:
            return

        for suffix, entry in properties_by_suffix.data.items():
            actual = entry["names"]
            needs_standard = self.data_manager.is_standard_property(suffix) and suffix not in actual
            if not needs_standard and len(actual) == 1:
                continue

            expected = [
                prefix + suffix
                for prefix in self.prefixes
                if self.data_manager.is_standard_property(prefix + suffix)
            ]

            missing_vendor_specific = self._get_missing_names(expected, actual)
            if missing_vendor_specific or needs_standard:
                for node in entry["nodes"]:
                    if needs_standard:
                        self._add_entry(
                            node,
                            Rules.IncludeStandardPropertyWhenUsingVendorPrefix,
                            self.messages.localize(
                                "property.standard.missing",
                                "Also define the standard property '{0}' for compatibility",
                                suffix,
                            ),
                        )
                    if missing_vendor_specific:
                        self._add_entry(
                            node,
                            Rules.AllVendorPrefixes,
                            self.messages.localize(
                                "property.vendorspecific.missing",
                                "Always include all vendor specific properties: Missing: {0}",
                                missing_vendor_specific,
                            ),
                        )

    # -- values -----------------------------------------------------------

    def _visit_prio(self, node: Node) -> bool:
        self._add_entry(node, Rules.AvoidImportant)
        return True

    def _visit_numeric_value(self, node: NumericValue) -> bool:
        """Report zero lengths carrying a unit."""
        function = node.find_parent(NodeType.FUNCTION)
        if isinstance(function, Function) and function.get_name().lower() == "calc":
            return True

        decl = node.find_parent(NodeType.DECLARATION)
        if not isinstance(decl, Declaration) or decl.get_value() is None:
            return True

        value, unit = node.get_value()
        if not unit or unit.lower() not in LENGTH_UNITS:
            return True
        try:
            is_zero = float(value) == 0.0
        except ValueError:
            return True
        if is_zero and not self._is_valid_property(decl.get_full_property_name()):
            self._add_entry(node, Rules.ZeroWithUnit)
        return True

    def _visit_hex_color_value(self, node: HexColorValue) -> bool:
        """Check the digit count of hex colors."""
        # #rgb, #rgba, #rrggbb, #rrggbbaa
        if node.length not in (4, 5, 7, 9):
            self._add_entry(node, Rules.HexColorLength)
        return False

    def _visit_function(self, node: Function) -> bool:
        """Check the argument count of color functions."""
        expected = COLOR_FUNCTION_ARGUMENTS.get(node.get_name().lower())
        if expected is None:
            return True

        actual = 0

        def count(child: Node) -> bool:
            nonlocal actual
            if child.type is NodeType.BINARY_EXPRESSION:
                actual += 1
                return False
            return True

        node.get_arguments().accept(count)
        if actual != expected:
            self._add_entry(node, Rules.ArgsInColorFunction)
        return True
