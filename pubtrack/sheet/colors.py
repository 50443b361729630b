"""Fill and font color resolution.

Only two color encodings are understood:

* a direct RGB / ARGB code (``"00B050"`` or ``"FF00B050"``), and
* a theme index into a 10-entry palette.

Everything else (indexed legacy colors, "auto") resolves to ``None``.
The output is always ``None`` or ``#`` followed by exactly six hex digits.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional, Union

from openpyxl.xml.functions import QName, fromstring

logger = logging.getLogger(__name__)

GREEN = "#00B050"
FALLBACK_THEME_COLOR = "#cccccc"

# lt1, dk1, then an approximation of the default Office accents
DEFAULT_THEME_COLORS: tuple[str, ...] = (
    "#FFFFFF",  # white
    "#000000",  # black
    "#ED7D31",  # orange
    "#4472C4",  # blue
    "#A5A5A5",  # gray
    "#FFC000",  # amber
    "#5B9BD5",  # light blue
    "#70AD47",  # green
    "#44546A",  # dark slate
    "#262626",  # near black
)

_HEX_RE = re.compile(r"^[0-9A-Fa-f]+$")

_DRAWINGML_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
_THEME_SLOTS = (
    "lt1", "dk1", "lt2", "dk2",
    "accent1", "accent2", "accent3", "accent4", "accent5", "accent6",
)


# ---------------------------------------------------------------------------
# Color descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NoColor:
    """No usable color information."""


@dataclass(frozen=True)
class DirectColor:
    """Literal RGB (6 digits) or ARGB (8 digits, alpha first) code."""

    code: str


@dataclass(frozen=True)
class ThemeColor:
    """Reference into the document theme palette."""

    index: int


ColorDescriptor = Union[NoColor, DirectColor, ThemeColor]


# ---------------------------------------------------------------------------
# Theme palette
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ThemePalette:
    """Ordered theme colors addressed by index."""

    colors: tuple[str, ...] = DEFAULT_THEME_COLORS

    def lookup(self, index: int) -> str:
        if 0 <= index < len(self.colors):
            return self.colors[index]
        return FALLBACK_THEME_COLOR


DEFAULT_PALETTE = ThemePalette()


def palette_from_theme_xml(theme_xml: Optional[Union[bytes, str]]) -> ThemePalette:
    """Build a palette from a workbook's theme part.

    Reads the first color scheme in slot order (``lt1, dk1, lt2, dk2,
    accent1..accent6``).  System colors use their ``lastClr``.  Falls back
    to :data:`DEFAULT_PALETTE` when the XML is missing or unreadable.
    """
    if not theme_xml:
        return DEFAULT_PALETTE
    try:
        root = fromstring(theme_xml)
        elements = root.find(QName(_DRAWINGML_NS, "themeElements").text)
        scheme = elements.findall(QName(_DRAWINGML_NS, "clrScheme").text)[0]
        colors = []
        for slot in _THEME_SLOTS:
            node = scheme.find(QName(_DRAWINGML_NS, slot).text)
            children = list(node) if node is not None else []
            if not children:
                colors.append("#000000")
                continue
            attrs = children[0].attrib
            value = attrs.get("lastClr") if "sysClr" in children[0].tag else attrs.get("val")
            colors.append(hex_from_code(value or "000000") or "#000000")
        return ThemePalette(colors=tuple(colors))
    except Exception as e:  # malformed theme part: keep the fixed palette
        logger.warning("Could not read workbook theme, using default palette: %s", e)
        return DEFAULT_PALETTE


def palette_for_workbook(workbook: Any) -> ThemePalette:
    """Palette sourced from an openpyxl workbook's embedded theme."""
    return palette_from_theme_xml(getattr(workbook, "loaded_theme", None))


# ---------------------------------------------------------------------------
# Decoding & resolution
# ---------------------------------------------------------------------------

def decode_color(color: Any) -> ColorDescriptor:
    """Decode an openpyxl ``Color`` or an ``{"argb"|"theme": ...}`` mapping."""
    if color is None:
        return NoColor()

    if isinstance(color, Mapping):
        argb = color.get("argb")
        if isinstance(argb, str) and argb:
            return DirectColor(code=argb)
        theme = color.get("theme")
        if isinstance(theme, int) and not isinstance(theme, bool):
            return ThemeColor(index=theme)
        return NoColor()

    # openpyxl Color: only the attribute named by ``type`` is meaningful
    kind = getattr(color, "type", None)
    if kind == "rgb":
        rgb = getattr(color, "rgb", None)
        if isinstance(rgb, str) and rgb:
            return DirectColor(code=rgb)
    elif kind == "theme":
        theme = getattr(color, "theme", None)
        if isinstance(theme, int):
            return ThemeColor(index=theme)
    return NoColor()


def hex_from_code(code: str) -> Optional[str]:
    """Normalize a 6- or 8-digit color code to ``#RRGGBB``.

    An 8-digit code is alpha first: the first two characters are dropped
    whatever their value.
    """
    if not isinstance(code, str) or not _HEX_RE.match(code):
        return None
    if len(code) == 8:
        return "#" + code[2:]
    if len(code) == 6:
        return "#" + code
    return None


def resolve_descriptor(
    descriptor: ColorDescriptor,
    palette: ThemePalette = DEFAULT_PALETTE,
) -> Optional[str]:
    """Resolve a decoded descriptor to ``#RRGGBB`` or ``None``."""
    if isinstance(descriptor, DirectColor):
        return hex_from_code(descriptor.code)
    if isinstance(descriptor, ThemeColor):
        return palette.lookup(descriptor.index)
    return None


def color_to_hex(color: Any, palette: ThemePalette = DEFAULT_PALETTE) -> Optional[str]:
    """Resolve a raw color (openpyxl ``Color`` / mapping / ``None``) to hex."""
    return resolve_descriptor(decode_color(color), palette)


def fill_color(cell: Any, palette: ThemePalette = DEFAULT_PALETTE) -> Optional[str]:
    """Background color of a cell, or ``None`` when the cell is unfilled."""
    fill = getattr(cell, "fill", None)
    if fill is None:
        return None
    # Unfilled cells still carry a default "00000000" foreground
    if getattr(fill, "fill_type", None) is None:
        return None
    return color_to_hex(getattr(fill, "fgColor", None), palette)


def font_color(cell: Any, palette: ThemePalette = DEFAULT_PALETTE) -> Optional[str]:
    """Font color of a cell, or ``None``."""
    font = getattr(cell, "font", None)
    if font is None:
        return None
    return color_to_hex(getattr(font, "color", None), palette)


def is_green(color: Optional[str]) -> bool:
    """Exact match against the highlight green, as the sheet encodes it."""
    return color == GREEN


def all_green(colors: Sequence[Optional[str]]) -> bool:
    """True when every color is exactly the highlight green."""
    return bool(colors) and all(is_green(c) for c in colors)
