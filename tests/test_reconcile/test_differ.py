"""Tests for style map differences."""
from __future__ import annotations

from figsync.reconcile.differ import diff_intersecting_properties, find_missing_properties


class TestFindMissing:
    def test_layer_only_property(self) -> None:
        scope = {"color": "#FFFFFF"}
        layer = {"color": "#FFFFFF", "font-size": "12px"}
        assert find_missing_properties(scope, layer) == {"font-size": "12px"}
        assert diff_intersecting_properties(scope, layer) == {}

    def test_scope_only_property_is_not_missing(self) -> None:
        assert find_missing_properties({"margin": "0"}, {}) == {}

    def test_shorthand_in_scope_covers_longhands(self) -> None:
        scope = {"border": "1px solid #000000"}
        layer = {"border-style": "solid", "border-color": "#000000", "border-width": "1px"}
        assert find_missing_properties(scope, layer) == {}
        assert diff_intersecting_properties(scope, layer) == {}

    def test_missing_reported_in_longhand(self) -> None:
        scope = {"border-style": "solid"}
        layer = {"border-style": "solid", "border-radius": "4px"}
        assert find_missing_properties(scope, layer) == {
            "border-top-left-radius": "4px",
            "border-top-right-radius": "4px",
            "border-bottom-right-radius": "4px",
            "border-bottom-left-radius": "4px",
        }


class TestDiffIntersecting:
    def test_layer_value_reported(self) -> None:
        assert diff_intersecting_properties({"font-size": "14px"}, {"font-size": "12px"}) == {"font-size": "12px"}

    def test_equivalent_colors(self) -> None:
        scope = {"color": "white", "background-color": "rgba(0, 0, 0, 0.5)"}
        layer = {"color": "#FFFFFF", "background-color": "rgba(0,0,0,0.5)"}
        assert diff_intersecting_properties(scope, layer) == {}

    def test_transparent(self) -> None:
        assert diff_intersecting_properties({"background-color": "transparent"}, {"background-color": "rgba(0,0,0,0)"}) == {}
        assert diff_intersecting_properties(
            {"background-color": "transparent"}, {"background-color": "rgba(10,10,10,0)"}
        ) == {"background-color": "rgba(10,10,10,0)"}

    def test_font_shorthand(self) -> None:
        scope = {"font": "bold 14px 'Inter'"}
        layer = {"font-family": "'Inter'", "font-size": "12px", "font-weight": "bold"}
        assert diff_intersecting_properties(scope, layer) == {"font-size": "12px"}
        assert find_missing_properties(scope, layer) == {}
