"""Tests for property elements and box-model calculation."""

from css_builder import decl, ruleset, stylesheet
from css_lint.lint.box_model import (
    Element,
    calculate_box_model,
    check_line_style,
    check_line_width,
)
from css_lint.nodes import Declaration


def property_table(*decls):
    tree, _ = stylesheet(ruleset(".a", *decls))
    declarations = tree.get_child(0).get_declarations()
    return [Element(child) for child in declarations.get_children() if isinstance(child, Declaration)]


def values_of(text_decl):
    return text_decl.node.get_value().get_children()


class TestElement:
    def test_full_property_name_is_lower_cased(self):
        """Test element names are lower-cased."""
        (element,) = property_table(decl("Border-Left", "1px"))

        assert element.full_property_name == "border-left"
        assert element.node.get_full_property_name() == "Border-Left"


class TestLineChecks:
    def test_line_width(self):
        """Test recognition of border line widths."""
        (element,) = property_table(decl("padding", "0", "1px", "initial", "thick"))
        zero, one, initial, thick = values_of(element)

        assert check_line_width(zero) is False
        assert check_line_width(one) is True
        assert check_line_width(initial) is False
        assert check_line_width(initial, allows_keywords=False) is True
        assert check_line_width(thick) is True

    def test_line_style(self):
        """Test recognition of border line styles."""
        (element,) = property_table(decl("border-style", "none", "hidden", "unset", "solid"))
        none, hidden, unset, solid = values_of(element)

        assert check_line_style(none) is False
        assert check_line_style(hidden) is False
        assert check_line_style(unset) is False
        assert check_line_style(unset, allows_keywords=False) is True
        assert check_line_style(solid) is True


class TestCalculateBoxModel:
    def test_empty_table(self):
        """Test box model of an empty property table."""
        model = calculate_box_model([])

        assert model.width is None
        assert model.height is None
        assert not any(side.value for side in (model.top, model.right, model.bottom, model.left))

    def test_width_and_height_are_recorded(self):
        """Test width and height are recorded."""
        table = property_table(decl("width", "10px"), decl("height", "5px"))
        model = calculate_box_model(table)

        assert model.width is table[0]
        assert model.height is table[1]

    def test_border_shorthand_sets_all_sides(self):
        """Test border shorthand sets every side."""
        table = property_table(decl("border", "1px", "solid"))
        model = calculate_box_model(table)

        for side in (model.top, model.right, model.bottom, model.left):
            assert side.value is True
            assert side.properties == [table[0]]

    def test_border_with_zero_width_is_no_border(self):
        """Test zero width borders do not count."""
        model = calculate_box_model(property_table(decl("border", "0", "solid")))

        assert model.left.value is False

    def test_border_side_width(self):
        """Test single side border width."""
        model = calculate_box_model(property_table(decl("border-top-width", "2px")))

        assert model.top.value is True
        assert model.bottom.value is False

    def test_border_width_three_values(self):
        """Test border-width with three values."""
        table = property_table(decl("border-width", "1px", "0", "2px"))
        model = calculate_box_model(table)

        assert model.top.value is True
        assert model.right.value is False
        assert model.left.value is False
        assert model.bottom.value is True

    def test_padding_four_values(self):
        """Test padding with four values."""
        model = calculate_box_model(property_table(decl("padding", "0", "1px", "0", "0")))

        assert (model.top.value, model.right.value, model.bottom.value, model.left.value) == (
            False,
            True,
            False,
            False,
        )

    def test_later_declaration_overrides_side(self):
        """Test later declarations override earlier sides."""
        table = property_table(decl("padding-left", "2px"), decl("padding-left", "0"))
        model = calculate_box_model(table)

        assert model.left.value is False
        assert model.left.properties == [table[0]]

    def test_box_sizing_bails_out(self):
        """Test box-sizing yields an empty box model."""
        table = property_table(
            decl("width", "10px"), decl("border", "1px", "solid"), decl("box-sizing", "border-box")
        )
        model = calculate_box_model(table)

        assert model.width is None
        assert model.left.value is False

    def test_declaration_without_value_is_skipped(self):
        """Test declarations without a value are skipped."""
        model = calculate_box_model(property_table(decl("width"), decl("box-sizing")))

        assert model.width is None
