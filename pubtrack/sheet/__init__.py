"""Spreadsheet ingestion: cell values, colors, and the paper sheet."""

from pubtrack.sheet.cells import decode_cell, decode_value, extract, extract_value
from pubtrack.sheet.colors import ThemePalette, color_to_hex, fill_color, font_color
from pubtrack.sheet.workbook import SheetService

__all__ = [
    "SheetService",
    "ThemePalette",
    "color_to_hex",
    "decode_cell",
    "decode_value",
    "extract",
    "extract_value",
    "fill_color",
    "font_color",
]
