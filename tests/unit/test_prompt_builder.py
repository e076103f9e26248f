"""Tests for logocreator.core.prompt_builder — logo prompt compilation.

Tests cover:
- Style and layout phrase selection.
- Explicit fallback to the Solo layout for unknown names.
- Colour lower-casing and verbatim company name.
- Optional ``Additional info:`` fragment.
"""

from __future__ import annotations

import pytest

from logocreator.core.prompt_builder import (
    DEFAULT_LAYOUT,
    LAYOUT_LOOKUP,
    STYLE_LOOKUP,
    build_prompt,
    resolve_layout,
)


def _build(**overrides) -> str:
    kwargs = {
        "company_name": "Acme Rockets",
        "style": "Modern",
        "layout": "Solo",
        "primary_color": "Blue",
        "background_color": "White",
    }
    kwargs.update(overrides)
    return build_prompt(**kwargs)


class TestLookupTables:
    """The fixed option tables."""

    def test_six_styles_in_display_order(self):
        assert list(STYLE_LOOKUP) == ["Flashy", "Tech", "Modern", "Playful", "Abstract", "Minimal"]

    def test_three_layouts_in_display_order(self):
        assert list(LAYOUT_LOOKUP) == ["Solo", "Side", "Stack"]

    def test_default_layout_is_solo(self):
        assert DEFAULT_LAYOUT == "Solo"


class TestResolveLayout:
    """Test resolve_layout()."""

    @pytest.mark.parametrize("name", ["Solo", "Side", "Stack"])
    def test_known_layouts(self, name):
        """Known layout names return their own phrase."""
        assert resolve_layout(name) == LAYOUT_LOOKUP[name]

    @pytest.mark.parametrize("name", ["Diagonal", "", "solo", "STACK"])
    def test_unknown_layout_falls_back_to_solo(self, name):
        """Unknown names (including wrong case) fall back to Solo."""
        assert resolve_layout(name) == LAYOUT_LOOKUP["Solo"]


class TestBuildPrompt:
    """Test build_prompt()."""

    def test_starts_with_preamble(self):
        prompt = _build()
        assert prompt.startswith(
            "A single logo, high-quality, award-winning professional design, made for both "
            "digital and print media, only contains a few vector shapes, "
        )

    def test_exact_text(self):
        """The full prompt for a typical request."""
        prompt = _build(style="Playful", layout="Side", additional_info="bold font")
        assert prompt == (
            "A single logo, high-quality, award-winning professional design, made for both "
            "digital and print media, only contains a few vector shapes, "
            "playful, lighthearted, bright bold colors, rounded shapes, lively."
            "\n\n"
            "Layout style: horizontal layout with the logo symbol on the left side and company "
            "name text on the right side. Primary color is blue and background color is white. "
            "The company name is Acme Rockets, make sure to include the company name in the "
            "logo. Additional info: bold font"
        )

    def test_minimal_stack_has_only_those_phrases(self):
        """Minimal/Stack contains its phrases and no other style phrase."""
        prompt = _build(style="Minimal", layout="Stack")
        assert STYLE_LOOKUP["Minimal"] in prompt
        assert LAYOUT_LOOKUP["Stack"] in prompt
        for name, phrase in STYLE_LOOKUP.items():
            if name != "Minimal":
                assert phrase not in prompt

    def test_unknown_layout_uses_solo(self):
        prompt = _build(layout="Diagonal")
        assert f"Layout style: {LAYOUT_LOOKUP['Solo']}." in prompt

    def test_colours_are_lower_cased(self):
        prompt = _build(primary_color="Navy BLUE", background_color="Off-White")
        assert "Primary color is navy blue and background color is off-white." in prompt

    def test_company_name_is_verbatim(self):
        prompt = _build(company_name="ACME rockets, Inc.")
        assert "The company name is ACME rockets, Inc., make sure to include" in prompt

    def test_no_additional_info(self):
        """Omitted notes leave no fragment and no trailing whitespace."""
        prompt = _build()
        assert "Additional info:" not in prompt
        assert prompt.endswith("make sure to include the company name in the logo.")

    def test_empty_additional_info_is_omitted(self):
        prompt = _build(additional_info="")
        assert "Additional info:" not in prompt
        assert prompt == prompt.rstrip()

    def test_additional_info_ends_prompt(self):
        prompt = _build(additional_info="bold font")
        assert prompt.endswith("Additional info: bold font")

    def test_unknown_style_raises(self):
        with pytest.raises(KeyError):
            _build(style="Baroque")
