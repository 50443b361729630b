"""Status badge styling.

Maps a free-text status (plus the fill / font colors read from the sheet)
to the CSS used to draw its badge.

Precedence, top to bottom:

1. Glow keywords mark the status as ``glow``.
2. A green fill *or* font override (exactly ``#00B050``, the same test
   as the row highlight), or ``glow``, forces the green background.
   The text turns neon green only when glowing.
3. Otherwise a fill override is used as is; without one the first
   matching keyword picks the color, defaulting to cyan.
4. The text color falls back to the font override, then the background.
"""

from dataclasses import dataclass
from typing import Optional

from pubtrack.sheet.colors import GREEN, is_green

NEON_GREEN = "#00ff9d"
DEFAULT_COLOR = "#00f2ff"
EUROPEAN_SPINE_BLUE = "#3182ce"

FALLBACK_BACKGROUND = "rgba(0, 242, 255, 0.1)"
FALLBACK_BORDER = "rgba(0, 242, 255, 0.4)"
GLOW_ANIMATION = "pulse-glow 2s infinite"

GLOW_KEYWORDS: tuple[str, ...] = (
    "de recommendation",
    "eic decision",
    "awaiting approval decision",
    "almost published",
)

# Order matters: first substring match wins ("rej" before "awaiting").
KEYWORD_COLORS: tuple[tuple[str, str], ...] = (
    ("european spine journal", EUROPEAN_SPINE_BLUE),
    ("indian journal", "#e53e3e"),
    ("gs journal", "#38a169"),
    ("asian spine journal", "#805ad5"),
    ("rej", "#f56565"),
    ("awaiting", "#ecc94b"),
    ("yet to start", "#a0aec0"),
)


@dataclass(frozen=True)
class StatusStyle:
    """Resolved badge style; every field is always set."""

    background: str
    color: str
    border: str
    box_shadow: str
    text_shadow: str
    animation: str
    glow: bool = False

    def as_dict(self) -> dict[str, str]:
        """CSS properties keyed by their camelCase (DOM style) names."""
        return {
            "background": self.background,
            "color": self.color,
            "border": self.border,
            "boxShadow": self.box_shadow,
            "textShadow": self.text_shadow,
            "animation": self.animation,
        }

    def css(self) -> str:
        """Inline ``style`` attribute value."""
        return "; ".join(
            [
                f"background: {self.background}",
                f"color: {self.color}",
                f"border: {self.border}",
                f"box-shadow: {self.box_shadow}",
                f"text-shadow: {self.text_shadow}",
                f"animation: {self.animation}",
            ]
        )


def should_glow(status: Optional[str]) -> bool:
    """True when the status contains one of the glow keywords."""
    s = (status or "").lower()
    return any(kw in s for kw in GLOW_KEYWORDS)


def keyword_color(status: Optional[str]) -> tuple[str, Optional[str]]:
    """Return ``(background, forced_text_color)`` for a status by keyword."""
    s = (status or "").lower()
    for keyword, color in KEYWORD_COLORS:
        if keyword in s:
            # European Spine Journal badges keep blue text even under a font override
            forced = color if color == EUROPEAN_SPINE_BLUE else None
            return color, forced
    return DEFAULT_COLOR, None


def resolve_status_style(
    status: Optional[str],
    color: Optional[str] = None,
    font_color: Optional[str] = None,
) -> StatusStyle:
    """Resolve the badge style for *status*.

    Args:
        status: Free-text status; matching is case-insensitive substring.
        color: Fill color read from the sheet (``#RRGGBB``), if any.
        font_color: Font color read from the sheet, if any.
    """
    glow = should_glow(status)

    background = color or None
    text_color = font_color or None

    if glow or is_green(color) or is_green(font_color):
        background = GREEN
        text_color = NEON_GREEN if glow else GREEN

    if not background:
        background, forced = keyword_color(status)
        if forced:
            text_color = forced

    if not text_color:
        text_color = background

    return StatusStyle(
        background=f"{background}33" if background else FALLBACK_BACKGROUND,
        color=text_color or DEFAULT_COLOR,
        border=f"1px solid {background + 'aa' if background else FALLBACK_BORDER}",
        box_shadow=f"0 0 15px {background}44" if glow else "none",
        text_shadow=f"0 0 8px {text_color}" if glow else "none",
        animation=GLOW_ANIMATION if glow else "none",
        glow=glow,
    )
