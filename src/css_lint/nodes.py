"""Syntax tree node model consumed by the CSS linter."""

import re
from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

if TYPE_CHECKING:
    from .lint.rules import Rule


class NodeType(Enum):
    """Closed set of node kinds the linter understands."""

    UNDEFINED = "undefined"
    STYLESHEET = "stylesheet"
    NODELIST = "nodelist"
    RULESET = "ruleset"
    SELECTOR = "selector"
    SIMPLE_SELECTOR = "simple_selector"
    IDENTIFIER_SELECTOR = "identifier_selector"
    DECLARATIONS = "declarations"
    DECLARATION = "declaration"
    NESTED_PROPERTIES = "nested_properties"
    PROPERTY = "property"
    IDENTIFIER = "identifier"
    INTERPOLATION = "interpolation"
    EXPRESSION = "expression"
    BINARY_EXPRESSION = "binary_expression"
    TERM = "term"
    FUNCTION = "function"
    NUMERIC_VALUE = "numeric_value"
    HEX_COLOR_VALUE = "hex_color_value"
    PRIO = "prio"
    IMPORT = "import"
    FONT_FACE = "font_face"
    KEYFRAME = "keyframe"
    UNKNOWN_AT_RULE = "unknown_at_rule"


class Level(IntFlag):
    """Severity of a marker. Values are bit flags so they can be masked."""

    IGNORE = 1
    WARNING = 2
    ERROR = 4


Visit = Callable[["Node"], bool]

_NUMBER_RE = re.compile(r"^([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)(.*)$")


class Node:
    """A node of a parsed stylesheet.

    Offsets index into ``source``, the full document text shared by every
    node of a tree.
    """

    node_type = NodeType.UNDEFINED

    def __init__(self, source: str, offset: int, length: int):
        self.source = source
        self.offset = offset
        self.length = length
        self.parent: Optional["Node"] = None
        self.children: List["Node"] = []

    @property
    def type(self) -> NodeType:
        return self.node_type

    @property
    def end(self) -> int:
        return self.offset + self.length

    def get_text(self) -> str:
        return self.source[self.offset : self.end]

    def matches(self, text: str) -> bool:
        return self.length == len(text) and self.get_text() == text

    def add_child(self, node: Optional["Node"]) -> Optional["Node"]:
        if node is not None:
            node.parent = self
            self.children.append(node)
        return node

    def get_child(self, index: int) -> Optional["Node"]:
        if 0 <= index < len(self.children):
            return self.children[index]
        return None

    def get_children(self) -> List["Node"]:
        return list(self.children)

    def has_children(self) -> bool:
        return bool(self.children)

    def get_parent(self) -> Optional["Node"]:
        return self.parent

    def find_parent(self, node_type: NodeType) -> Optional["Node"]:
        current = self.parent
        while current is not None and current.type is not node_type:
            current = current.parent
        return current

    def accept(self, visit: Visit) -> None:
        walk(self, visit)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.get_text()!r} @{self.offset}>"


def walk(node: Node, visit: Visit) -> None:
    """Depth-first traversal in document order.

    ``visit`` is called for every node reached; returning False prunes the
    node's children.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if visit(current):
            stack.extend(reversed(current.children))


class Nodelist(Node):
    node_type = NodeType.NODELIST


class Stylesheet(Node):
    node_type = NodeType.STYLESHEET


class Identifier(Node):
    node_type = NodeType.IDENTIFIER

    def contains_interpolation(self) -> bool:
        return any(child.type is NodeType.INTERPOLATION for child in self.children)


class Interpolation(Node):
    node_type = NodeType.INTERPOLATION


class Property(Node):
    node_type = NodeType.PROPERTY

    def __init__(self, source: str, offset: int, length: int):
        super().__init__(source, offset, length)
        self.identifier: Optional[Identifier] = None

    def set_identifier(self, identifier: Optional[Identifier]) -> None:
        self.identifier = identifier
        self.add_child(identifier)

    def get_identifier(self) -> Optional[Identifier]:
        return self.identifier

    def get_name(self) -> str:
        return self.get_text().strip()


class Declarations(Node):
    node_type = NodeType.DECLARATIONS


class Declaration(Node):
    node_type = NodeType.DECLARATION

    def __init__(self, source: str, offset: int, length: int):
        super().__init__(source, offset, length)
        self.property: Optional[Property] = None
        self.value: Optional["Expression"] = None
        self.nested_properties: Optional["NestedProperties"] = None

    def set_property(self, node: Optional[Property]) -> None:
        self.property = node
        self.add_child(node)

    def set_value(self, node: Optional["Expression"]) -> None:
        self.value = node
        self.add_child(node)

    def set_nested_properties(self, node: Optional["NestedProperties"]) -> None:
        self.nested_properties = node
        self.add_child(node)

    def get_property(self) -> Optional[Property]:
        return self.property

    def get_value(self) -> Optional["Expression"]:
        return self.value

    def get_full_property_name(self) -> str:
        name = self.property.get_name() if self.property else "unknown"
        block = self.parent
        if isinstance(block, Declarations) and isinstance(block.parent, NestedProperties):
            owner = block.parent.parent
            if isinstance(owner, Declaration):
                return f"{owner.get_full_property_name()}-{name}"
        return name

    def get_non_prefixed_property_name(self) -> str:
        name = self.get_full_property_name()
        if name and name[0] == "-":
            prefix_end = name.find("-", 1)
            if prefix_end != -1:
                return name[prefix_end + 1 :]
        return name


class NestedProperties(Node):
    node_type = NodeType.NESTED_PROPERTIES

    def __init__(self, source: str, offset: int, length: int):
        super().__init__(source, offset, length)
        self.declarations: Optional[Declarations] = None

    def set_declarations(self, node: Optional[Declarations]) -> None:
        self.declarations = node
        self.add_child(node)

    def get_declarations(self) -> Optional[Declarations]:
        return self.declarations


class Selector(Node):
    node_type = NodeType.SELECTOR


class SimpleSelector(Node):
    node_type = NodeType.SIMPLE_SELECTOR


class IdentifierSelector(Node):
    node_type = NodeType.IDENTIFIER_SELECTOR


class BodyDeclaration(Node):
    """Base for nodes owning a ``{ ... }`` declarations block."""

    def __init__(self, source: str, offset: int, length: int):
        super().__init__(source, offset, length)
        self.declarations: Optional[Declarations] = None

    def set_declarations(self, node: Optional[Declarations]) -> None:
        self.declarations = node
        self.add_child(node)

    def get_declarations(self) -> Optional[Declarations]:
        return self.declarations


class RuleSet(BodyDeclaration):
    node_type = NodeType.RULESET

    def __init__(self, source: str, offset: int, length: int):
        super().__init__(source, offset, length)
        self.selectors = Nodelist(source, offset, 0)
        self.add_child(self.selectors)

    def get_selectors(self) -> Nodelist:
        return self.selectors


class FontFace(BodyDeclaration):
    node_type = NodeType.FONT_FACE


class Keyframe(BodyDeclaration):
    node_type = NodeType.KEYFRAME

    def __init__(self, source: str, offset: int, length: int):
        super().__init__(source, offset, length)
        self.keyword: Optional[Node] = None
        self.identifier: Optional[Identifier] = None

    def set_keyword(self, node: Optional[Node]) -> None:
        self.keyword = node
        self.add_child(node)

    def set_identifier(self, node: Optional[Identifier]) -> None:
        self.identifier = node
        self.add_child(node)

    def get_keyword(self) -> Optional[Node]:
        return self.keyword

    def get_name(self) -> str:
        return self.identifier.get_text() if self.identifier else ""


class UnknownAtRule(BodyDeclaration):
    node_type = NodeType.UNKNOWN_AT_RULE


class Import(Node):
    node_type = NodeType.IMPORT


class Expression(Node):
    node_type = NodeType.EXPRESSION


class BinaryExpression(Node):
    node_type = NodeType.BINARY_EXPRESSION


class Term(Node):
    node_type = NodeType.TERM


class Function(Node):
    node_type = NodeType.FUNCTION

    def __init__(self, source: str, offset: int, length: int):
        super().__init__(source, offset, length)
        self.identifier: Optional[Identifier] = None
        self.arguments = Nodelist(source, offset, 0)

    def set_identifier(self, node: Optional[Identifier]) -> None:
        self.identifier = node
        self.add_child(node)
        self.add_child(self.arguments)

    def get_name(self) -> str:
        return self.identifier.get_text() if self.identifier else ""

    def get_arguments(self) -> Nodelist:
        return self.arguments


class NumericValue(Node):
    node_type = NodeType.NUMERIC_VALUE

    def get_value(self) -> Tuple[str, Optional[str]]:
        """Split the literal into its number and unit parts."""
        match = _NUMBER_RE.match(self.get_text())
        if match is None:
            return self.get_text(), None
        return match.group(1), match.group(2) or None


class HexColorValue(Node):
    node_type = NodeType.HEX_COLOR_VALUE


class Prio(Node):
    node_type = NodeType.PRIO


@dataclass(frozen=True)
class Marker:
    """A diagnostic produced by the linter."""

    node: Node
    rule: "Rule"
    level: Level
    message: str

    def get_level(self) -> Level:
        return self.level

    def get_message(self) -> str:
        return self.message

    def get_offset(self) -> int:
        return self.node.offset

    def get_length(self) -> int:
        return self.node.length

