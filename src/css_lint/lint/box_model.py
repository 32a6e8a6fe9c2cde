"""Property elements and the box-model summary of a declarations block."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..nodes import Declaration, Node


class Element:
    """A declaration paired with its lower-cased full property name."""

    def __init__(self, decl: Declaration):
        self.full_property_name = decl.get_full_property_name().lower()
        self.node = decl

    def __repr__(self) -> str:
        return f"Element({self.full_property_name!r})"


@dataclass
class SideState:
    """Whether a side of the box has a non-zero border or padding."""

    value: bool = False
    properties: List[Element] = field(default_factory=list)


@dataclass
class BoxModel:
    top: SideState = field(default_factory=SideState)
    right: SideState = field(default_factory=SideState)
    bottom: SideState = field(default_factory=SideState)
    left: SideState = field(default_factory=SideState)
    width: Optional[Element] = None
    height: Optional[Element] = None


SIDES = ("top", "right", "bottom", "left")


def _set_side(model: BoxModel, side: str, value: bool, prop: Element) -> None:
    state: SideState = getattr(model, side)
    state.value = value
    if value and prop not in state.properties:
        state.properties.append(prop)


def _set_all_sides(model: BoxModel, value: bool, prop: Element) -> None:
    for side in SIDES:
        _set_side(model, side, value, prop)


def _update_with_value(
    model: BoxModel, side: Optional[str], value: bool, prop: Element
) -> None:
    if side in SIDES:
        _set_side(model, side, value, prop)
    else:
        _set_all_sides(model, value, prop)


def _update_with_list(model: BoxModel, values: Sequence[bool], prop: Element) -> None:
    # CSS shorthand expansion: 1 value -> all, 2 -> vertical/horizontal,
    # 3 -> top/horizontal/bottom, 4 -> clockwise from top.
    if len(values) == 1:
        _update_with_value(model, None, values[0], prop)
    elif len(values) == 2:
        _update_with_value(model, "top", values[0], prop)
        _update_with_value(model, "bottom", values[0], prop)
        _update_with_value(model, "right", values[1], prop)
        _update_with_value(model, "left", values[1], prop)
    elif len(values) == 3:
        _update_with_value(model, "top", values[0], prop)
        _update_with_value(model, "right", values[1], prop)
        _update_with_value(model, "left", values[1], prop)
        _update_with_value(model, "bottom", values[2], prop)
    elif len(values) == 4:
        _update_with_value(model, "top", values[0], prop)
        _update_with_value(model, "right", values[1], prop)
        _update_with_value(model, "bottom", values[2], prop)
        _update_with_value(model, "left", values[3], prop)


def _matches_any(value: Node, candidates: Sequence[str]) -> bool:
    return any(value.matches(candidate) for candidate in candidates)


def _parse_float(text: str) -> Optional[float]:
    """Parse the leading number of ``text`` the way CSS lengths are read."""
    end = 0
    seen_digit = False
    seen_dot = False
    for index, char in enumerate(text):
        if char in "+-" and index == 0:
            end = index + 1
        elif char.isdigit():
            seen_digit = True
            end = index + 1
        elif char == "." and not seen_dot:
            seen_dot = True
            end = index + 1
        else:
            break
    if not seen_digit:
        return None
    return float(text[:end].rstrip("."))


def check_line_width(value: Node, allows_keywords: bool = True) -> bool:
    """True when ``value`` describes a non-zero width.

    ``initial`` and ``unset`` count as zero only for properties whose initial
    value is zero.
    """
    if allows_keywords and _matches_any(value, ("initial", "unset")):
        return False
    return _parse_float(value.get_text()) != 0


def check_line_style(value: Node, allows_keywords: bool = True) -> bool:
    if _matches_any(value, ("none", "hidden")):
        return False
    if allows_keywords and _matches_any(value, ("initial", "unset")):
        return False
    return True


def check_border_shorthand(node: Node) -> bool:
    children = node.get_children()
    if len(children) == 1:
        value = children[0]
        return check_line_width(value) and check_line_style(value)
    # keywords are only valid on their own
    for child in children:
        if not check_line_width(child, False) or not check_line_style(child, False):
            return False
    return True


def calculate_box_model(property_table: Sequence[Element]) -> BoxModel:
    """Summarise which sides of the box carry border or padding.

    A ``box-sizing`` declaration means the author manages sizing explicitly;
    an empty model is returned in that case.
    """
    model = BoxModel()
    for prop in property_table:
        value = prop.node.get_value()
        if value is None:
            continue

        name = prop.full_property_name
        if name == "box-sizing":
            return BoxModel()
        if name == "width":
            model.width = prop
            continue
        if name == "height":
            model.height = prop
            continue

        segments = name.split("-")
        head = segments[0]
        side = segments[1] if len(segments) > 1 else None
        kind = segments[2] if len(segments) > 2 else None

        if head == "border":
            if side is None or side in SIDES:
                if kind is None:
                    _update_with_value(model, side, check_border_shorthand(value), prop)
                elif kind == "width":
                    _update_with_value(model, side, check_line_width(value, False), prop)
                elif kind == "style":
                    _update_with_value(model, side, check_line_style(value, True), prop)
            elif side == "width":
                _update_with_list(
                    model,
                    [check_line_width(child, False) for child in value.get_children()],
                    prop,
                )
            elif side == "style":
                _update_with_list(
                    model,
                    [check_line_style(child, True) for child in value.get_children()],
                    prop,
                )
        elif head == "padding":
            if side is None:
                _update_with_list(
                    model,
                    [check_line_width(child, True) for child in value.get_children()],
                    prop,
                )
            else:
                _update_with_value(model, side, check_line_width(value, True), prop)

    return model
