"""Tests for shorthand expansion."""
from __future__ import annotations

import pytest

from figsync.css.shorthand import expand_properties, expand_property, is_shorthand


def _sides(template: str, top: str, right: str, bottom: str, left: str) -> dict[str, str]:
    return {
        template.format(side="top"): top,
        template.format(side="right"): right,
        template.format(side="bottom"): bottom,
        template.format(side="left"): left,
    }


# ---------------------------------------------------------------------------
# Box shorthands
# ---------------------------------------------------------------------------


class TestBox:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("4px", ("4px", "4px", "4px", "4px")),
            ("0 4px", ("0", "4px", "0", "4px")),
            ("1px 2px 3px", ("1px", "2px", "3px", "2px")),
            ("1px 2px 3px 4px", ("1px", "2px", "3px", "4px")),
        ],
    )
    def test_margin(self, value: str, expected: tuple[str, str, str, str]) -> None:
        assert expand_property("margin", value) == _sides("margin-{side}", *expected)

    def test_padding_auto_and_percent(self) -> None:
        assert expand_property("padding", "10% auto") == _sides("padding-{side}", "10%", "auto", "10%", "auto")

    def test_too_many_values_unchanged(self) -> None:
        assert expand_property("margin", "0 1px 2px 3px 4px") == {"margin": "0 1px 2px 3px 4px"}

    def test_comma_unchanged(self) -> None:
        assert expand_property("margin", "0, 1px") == {"margin": "0, 1px"}

    def test_border_color(self) -> None:
        assert expand_property("border-color", "#000 red") == _sides(
            "border-{side}-color", "#000", "red", "#000", "red"
        )


class TestBorderRadius:
    def test_two_values(self) -> None:
        assert expand_property("border-radius", "4px 8px") == {
            "border-top-left-radius": "4px",
            "border-top-right-radius": "8px",
            "border-bottom-right-radius": "4px",
            "border-bottom-left-radius": "8px",
        }

    def test_elliptical(self) -> None:
        assert expand_property("border-radius", "4px / 8px") == {
            "border-top-left-radius": "4px 8px",
            "border-top-right-radius": "4px 8px",
            "border-bottom-right-radius": "4px 8px",
            "border-bottom-left-radius": "4px 8px",
        }

    def test_equal_axes_collapse(self) -> None:
        result = expand_property("border-radius", "4px / 4px")
        assert result["border-top-left-radius"] == "4px"


# ---------------------------------------------------------------------------
# Border and outline
# ---------------------------------------------------------------------------


class TestBorder:
    def test_full_border(self) -> None:
        result = expand_property("border", "1px solid #000")
        assert result == {
            **_sides("border-{side}-width", "1px", "1px", "1px", "1px"),
            **_sides("border-{side}-style", "solid", "solid", "solid", "solid"),
            **_sides("border-{side}-color", "#000", "#000", "#000", "#000"),
        }
        assert len(result) == 12

    def test_any_order(self) -> None:
        assert expand_property("border-top", "red dashed thin") == {
            "border-top-width": "thin",
            "border-top-style": "dashed",
            "border-top-color": "red",
        }

    def test_only_given_parts(self) -> None:
        assert expand_property("border-bottom", "solid") == {"border-bottom-style": "solid"}

    def test_variable_is_a_color(self) -> None:
        assert expand_property("border-left", "2px @accent") == {
            "border-left-width": "2px",
            "border-left-color": "@accent",
        }

    def test_outline(self) -> None:
        assert expand_property("outline", "2px dotted blue") == {
            "outline-width": "2px",
            "outline-style": "dotted",
            "outline-color": "blue",
        }

    def test_two_widths_unchanged(self) -> None:
        assert expand_property("border", "1px 2px") == {"border": "1px 2px"}

    def test_unknown_word_unchanged(self) -> None:
        assert expand_property("border", "1px wiggly red") == {"border": "1px wiggly red"}


# ---------------------------------------------------------------------------
# Background and font
# ---------------------------------------------------------------------------


class TestBackground:
    def test_color_only(self) -> None:
        assert expand_property("background", "#FFFFFF") == {"background-color": "#FFFFFF"}

    def test_mixed(self) -> None:
        assert expand_property("background", "#fff url(a.png) no-repeat fixed") == {
            "background-color": "#fff",
            "background-image": "url(a.png)",
            "background-repeat": "no-repeat",
            "background-attachment": "fixed",
        }

    def test_position(self) -> None:
        assert expand_property("background", "red center top") == {
            "background-color": "red",
            "background-position": "center top",
        }

    def test_layers_unchanged(self) -> None:
        value = "url(a.png), url(b.png)"
        assert expand_property("background", value) == {"background": value}


class TestFont:
    def test_full(self) -> None:
        assert expand_property("font", "italic bold 12px/16px 'Inter', sans-serif") == {
            "font-style": "italic",
            "font-weight": "bold",
            "font-size": "12px",
            "line-height": "16px",
            "font-family": "'Inter', sans-serif",
        }

    def test_size_and_family(self) -> None:
        assert expand_property("font", "12px Inter") == {"font-size": "12px", "font-family": "Inter"}

    def test_numeric_weight(self) -> None:
        assert expand_property("font", "600 14px 'Inter'") == {
            "font-weight": "600",
            "font-size": "14px",
            "font-family": "'Inter'",
        }

    def test_normal_ignored(self) -> None:
        assert expand_property("font", "normal 14px serif") == {"font-size": "14px", "font-family": "serif"}

    def test_without_family_unchanged(self) -> None:
        assert expand_property("font", "bold 12px") == {"font": "bold 12px"}

    def test_system_font_unchanged(self) -> None:
        assert expand_property("font", "caption") == {"font": "caption"}


# ---------------------------------------------------------------------------
# General behavior
# ---------------------------------------------------------------------------


class TestExpansion:
    def test_longhand_passes_through(self) -> None:
        assert expand_property("color", "red") == {"color": "red"}

    def test_is_shorthand(self) -> None:
        assert is_shorthand("margin")
        assert is_shorthand("border-top")
        assert not is_shorthand("margin-top")

    def test_important_carried_to_longhands(self) -> None:
        result = expand_property("border", "1px solid red !important")
        assert result["border-top-width"] == "1px !important"
        assert result["border-left-color"] == "red !important"
        assert len(result) == 12

    def test_expand_properties_later_wins(self) -> None:
        result = expand_properties({"margin-top": "1px", "margin": "0"})
        assert result["margin-top"] == "0"
        assert len(result) == 4

    def test_expand_properties_records_origins(self) -> None:
        origins: dict[str, str] = {}
        expand_properties({"border-width": "1px", "color": "red"}, origins)
        assert origins["border-top-width"] == "border-width"
        assert origins["border-left-width"] == "border-width"
        assert origins["color"] == "color"
