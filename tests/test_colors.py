"""Tests for fill / font color resolution."""

import pytest
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.styles.colors import Color

from pubtrack.sheet.colors import (
    DEFAULT_PALETTE,
    DirectColor,
    NoColor,
    ThemeColor,
    ThemePalette,
    all_green,
    color_to_hex,
    decode_color,
    fill_color,
    font_color,
    hex_from_code,
    is_green,
    palette_from_theme_xml,
)


def test_argb_code_drops_alpha():
    assert color_to_hex({"argb": "FF00B050"}) == "#00B050"
    assert color_to_hex(Color(rgb="FF00B050")) == "#00B050"


def test_alpha_is_dropped_whatever_its_value():
    assert hex_from_code("0000B050") == "#00B050"
    assert hex_from_code("7FABCDEF") == "#ABCDEF"


def test_six_digit_code_is_kept():
    assert hex_from_code("A0AEC0") == "#A0AEC0"


@pytest.mark.parametrize("code", ["", "XYZXYZ", "12345", "1234567", "GG00B050", "#00B050"])
def test_invalid_codes_give_none(code):
    assert hex_from_code(code) is None


def test_theme_index_lookup():
    assert color_to_hex({"theme": 2}) == "#ED7D31"
    assert color_to_hex(Color(theme=2)) == "#ED7D31"


def test_out_of_range_theme_index_gives_fallback():
    assert color_to_hex({"theme": 99}) == "#cccccc"
    assert DEFAULT_PALETTE.lookup(-1) == "#cccccc"


def test_missing_or_unknown_colors_give_none():
    assert color_to_hex(None) is None
    assert color_to_hex({}) is None
    assert color_to_hex(Color(indexed=5)) is None


def test_decode_color_variants():
    assert decode_color(None) == NoColor()
    assert decode_color({"argb": "FF112233"}) == DirectColor(code="FF112233")
    assert decode_color({"theme": 4}) == ThemeColor(index=4)
    assert decode_color({"theme": True}) == NoColor()


def test_cell_fill_and_font():
    ws = Workbook().active
    cell = ws["A1"]
    cell.value = "x"
    cell.fill = PatternFill(fill_type="solid", fgColor="00B050")
    cell.font = Font(color="FF0000")
    assert fill_color(cell) == "#00B050"
    assert font_color(cell) == "#FF0000"


def test_unfilled_cell_has_no_fill_color():
    ws = Workbook().active
    ws["A1"] = "x"
    assert fill_color(ws["A1"]) is None
    assert fill_color(None) is None


def test_green_helpers():
    assert is_green("#00B050")
    assert not is_green("#00b050")
    assert not is_green(None)
    assert all_green(["#00B050"] * 3)
    assert not all_green(["#00B050", "#00B050", None])
    assert not all_green([])


THEME_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<a:theme xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" name="Custom">
  <a:themeElements>
    <a:clrScheme name="Custom">
      <a:dk1><a:sysClr val="windowText" lastClr="000000"/></a:dk1>
      <a:lt1><a:sysClr val="window" lastClr="FFFFFF"/></a:lt1>
      <a:dk2><a:srgbClr val="1F497D"/></a:dk2>
      <a:lt2><a:srgbClr val="EEECE1"/></a:lt2>
      <a:accent1><a:srgbClr val="112233"/></a:accent1>
      <a:accent2><a:srgbClr val="445566"/></a:accent2>
      <a:accent3><a:srgbClr val="778899"/></a:accent3>
      <a:accent4><a:srgbClr val="AABBCC"/></a:accent4>
      <a:accent5><a:srgbClr val="DDEEFF"/></a:accent5>
      <a:accent6><a:srgbClr val="010203"/></a:accent6>
    </a:clrScheme>
  </a:themeElements>
</a:theme>
"""


def test_palette_from_theme_xml():
    palette = palette_from_theme_xml(THEME_XML)
    assert palette.lookup(0) == "#FFFFFF"
    assert palette.lookup(1) == "#000000"
    assert palette.lookup(2) == "#EEECE1"
    assert palette.lookup(4) == "#112233"
    assert color_to_hex({"theme": 9}, palette) == "#010203"


@pytest.mark.parametrize("xml", [None, b"", b"<not-xml", b"<root/>"])
def test_unreadable_theme_falls_back_to_default_palette(xml):
    assert palette_from_theme_xml(xml) == DEFAULT_PALETTE


def test_custom_palette_lookup():
    palette = ThemePalette(colors=("#111111",))
    assert palette.lookup(0) == "#111111"
    assert palette.lookup(1) == "#cccccc"
