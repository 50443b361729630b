"""Tests for status badge styling."""

import pytest

from pubtrack.services.status_style import (
    DEFAULT_COLOR,
    EUROPEAN_SPINE_BLUE,
    GLOW_ANIMATION,
    NEON_GREEN,
    keyword_color,
    resolve_status_style,
    should_glow,
)

GREEN = "#00B050"


def test_glow_status_without_overrides():
    style = resolve_status_style("Awaiting EIC Decision")
    assert style.glow
    assert style.background == f"{GREEN}33"
    assert style.color == NEON_GREEN
    assert style.border == f"1px solid {GREEN}aa"
    assert style.box_shadow == f"0 0 15px {GREEN}44"
    assert style.text_shadow == f"0 0 8px {NEON_GREEN}"
    assert style.animation == GLOW_ANIMATION


def test_yet_to_start_is_gray_and_static():
    style = resolve_status_style("Yet to start")
    assert style.background == "#a0aec033"
    assert style.color == "#a0aec0"
    assert style.animation == "none"
    assert style.box_shadow == "none"
    assert style.text_shadow == "none"


def test_empty_status_is_fully_populated():
    style = resolve_status_style("")
    assert style.background == f"{DEFAULT_COLOR}33"
    assert style.color == DEFAULT_COLOR
    assert all(style.as_dict().values())


def test_none_status_is_handled():
    assert resolve_status_style(None).color == DEFAULT_COLOR


@pytest.mark.parametrize(
    "status",
    ["Under DE Recommendation", "awaiting approval decision", "ALMOST PUBLISHED"],
)
def test_glow_keywords_case_insensitive(status):
    assert should_glow(status)


@pytest.mark.parametrize(
    "status, expected",
    [
        ("Submitted to Indian Journal of Orthopaedics", "#e53e3e"),
        ("GS Journal review", "#38a169"),
        ("Asian Spine Journal", "#805ad5"),
        ("Rejected", "#f56565"),
        ("Awaiting reviewer", "#ecc94b"),
        ("Drafting", DEFAULT_COLOR),
    ],
)
def test_keyword_colors(status, expected):
    assert keyword_color(status) == (expected, None)


def test_first_keyword_wins():
    # "rej" comes before "awaiting"
    assert keyword_color("Rejected, awaiting resubmission")[0] == "#f56565"


def test_fill_override_beats_keyword():
    style = resolve_status_style("Yet to start", color="#123456")
    assert style.background == "#12345633"
    assert style.color == "#123456"


def test_font_override_sets_text_color():
    style = resolve_status_style("Yet to start", font_color="#FF0000")
    assert style.background == "#a0aec033"
    assert style.color == "#FF0000"


def test_green_fill_forces_green_without_glow():
    style = resolve_status_style("Yet to start", color=GREEN, font_color="#FF0000")
    assert style.background == f"{GREEN}33"
    assert style.color == GREEN
    assert not style.glow
    assert style.animation == "none"


def test_green_font_override_forces_green_background():
    style = resolve_status_style("Rejected", color="#123456", font_color=GREEN)
    assert style.background == f"{GREEN}33"
    assert style.color == GREEN


def test_glow_beats_fill_override():
    style = resolve_status_style("EIC Decision pending", color="#123456")
    assert style.background == f"{GREEN}33"
    assert style.color == NEON_GREEN


def test_european_spine_journal_keeps_blue_text():
    style = resolve_status_style("Under review, European Spine Journal", font_color="#FF0000")
    assert style.background == f"{EUROPEAN_SPINE_BLUE}33"
    assert style.color == EUROPEAN_SPINE_BLUE


def test_empty_overrides_count_as_absent():
    assert resolve_status_style("Yet to start", color="", font_color="") == resolve_status_style(
        "Yet to start"
    )


def test_css_renders_inline_style():
    css = resolve_status_style("Yet to start").css()
    assert "background: #a0aec033" in css
    assert "animation: none" in css


def test_green_override_matches_highlight_comparison():
    # Lower-case hex is not the highlight green, so it is used as a plain fill
    style = resolve_status_style("Yet to start", color="#00b050")
    assert style.background == "#00b05033"
    assert style.color == "#00b050"
