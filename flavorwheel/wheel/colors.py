"""Deterministic color assignment for wheel segments.

Categories take palette colors by position. Every descendant gets a lighter
variant of its parent, computed in HLS space by ``derive_color``:

    t  = LIGHTEN_BASE + LIGHTEN_SPREAD * sibling_index / sibling_count
    l' = l + (1 - l) * t

so a child is always lighter than its parent and later siblings are lighter
than earlier ones. Hue and saturation are kept.
"""

from __future__ import annotations

import colorsys
import re
from collections.abc import Sequence

LIGHTEN_BASE = 0.20
LIGHTEN_SPREAD = 0.30

# Aroma category colors of the tasting app, in wheel order.
DEFAULT_PALETTE: tuple[str, ...] = (
    "#ff6b6b",  # Fruit
    "#f8b4d9",  # Floral
    "#7bc96f",  # Herbal
    "#ffb347",  # Spice
    "#ffd93d",  # Sweetness
    "#8b7355",  # Earthy / Mineral
    "#90ee90",  # Vegetal / Green
    "#deb887",  # Nutty / Grain
    "#9b59b6",  # Ferment / Funky
    "#5d4e37",  # Roasted / Smoke
    "#95a5a6",  # Chemical
    "#e74c3c",  # Animal / Must
    "#e6d5a8",  # Dairy / Fatty
    "#8b4513",  # Wood / Resin
)

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def normalize_hex(color: str) -> str:
    """Return ``color`` as lowercase ``#rrggbb``. Accepts ``#rgb`` shorthand."""
    match = _HEX_RE.match(color.strip())
    if not match:
        raise ValueError(f"Invalid hex color: {color!r}")
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


def _to_rgb(color: str) -> tuple[float, float, float]:
    digits = normalize_hex(color)[1:]
    return (
        int(digits[0:2], 16) / 255.0,
        int(digits[2:4], 16) / 255.0,
        int(digits[4:6], 16) / 255.0,
    )


def _to_hex(r: float, g: float, b: float) -> str:
    return "#" + "".join(f"{round(max(0.0, min(1.0, c)) * 255):02x}" for c in (r, g, b))


def palette_color(index: int, palette: Sequence[str] = DEFAULT_PALETTE) -> str:
    """Palette color for category ``index``; indexes past the end wrap around."""
    if not palette:
        raise ValueError("Palette must contain at least one color")
    return normalize_hex(palette[index % len(palette)])


def derive_color(base_color: str, sibling_index: int, sibling_count: int) -> str:
    """Lighter variant of ``base_color`` for child ``sibling_index`` of ``sibling_count``."""
    if sibling_count < 1:
        raise ValueError(f"sibling_count must be >= 1, got {sibling_count}")
    if not 0 <= sibling_index < sibling_count:
        raise ValueError(f"sibling_index {sibling_index} out of range for {sibling_count} siblings")

    h, l, s = colorsys.rgb_to_hls(*_to_rgb(base_color))
    t = LIGHTEN_BASE + LIGHTEN_SPREAD * sibling_index / sibling_count
    lightened = l + (1.0 - l) * t
    return _to_hex(*colorsys.hls_to_rgb(h, lightened, s))
