"""Tests for style template resolution."""
import dataclasses

import pytest

from app.services.styles import (
    DEFAULT_TEMPLATE,
    IMAGE_ERROR_TEXT,
    IMAGE_FAILED_TEXT,
    list_styles,
    resolve_style,
)


@pytest.mark.parametrize("name", ["standard", "academic", "modern", "arial", "draft"])
def test_known_templates_resolve_to_themselves(name):
    assert resolve_style(name).name == name


@pytest.mark.parametrize("name", ["fancy", "", None, "  ", 42])
def test_unknown_template_falls_back_to_default(name):
    assert resolve_style(name) == resolve_style(DEFAULT_TEMPLATE)


def test_lookup_ignores_case_and_whitespace():
    assert resolve_style("  Arial ") is resolve_style("arial")


def test_template_values():
    modern = resolve_style("modern")
    assert modern.body_font == "Arial"
    assert modern.font_size == 11
    assert (modern.heading1_size, modern.heading2_size, modern.heading3_size) == (14, 12, 11)
    assert modern.line_spacing == 200

    standard = resolve_style("standard")
    assert standard.title_font == standard.body_font == "Times New Roman"
    assert standard.margins.top == standard.margins.left == 1440


def test_draft_is_the_front_matter_variant():
    draft = resolve_style("draft")
    assert draft.include_front_matter is True
    assert draft.line_spacing == 480
    assert draft.image_failure_text == IMAGE_ERROR_TEXT

    for profile in list_styles():
        if profile.name != "draft":
            assert profile.include_front_matter is False
            assert profile.image_failure_text == IMAGE_FAILED_TEXT


def test_profiles_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        resolve_style("standard").font_size = 20


def test_list_styles_default_first():
    names = [p.name for p in list_styles()]
    assert names[0] == DEFAULT_TEMPLATE
    assert sorted(names) == ["academic", "arial", "draft", "modern", "standard"]
