"""SVG export and pointer hit testing for laid-out wheels.

The interactive surface lives in the client; these helpers cover the parts
of its contract that are plain geometry: drawing segments as annular sectors,
finding the segment under a pointer, and clamping zoom.
"""

from __future__ import annotations

import html
import math
from collections.abc import Sequence

from flavorwheel.config import ZOOM_MAX, ZOOM_MIN
from flavorwheel.wheel.layout import FULL_TURN, START_ANGLE
from flavorwheel.wheel.types import WheelSegment

_FULL_CIRCLE_EPS = 1e-9


def _fmt(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _point(cx: float, cy: float, radius: float, angle: float) -> str:
    return f"{_fmt(cx + radius * math.cos(angle))},{_fmt(cy + radius * math.sin(angle))}"


def _ring_path(cx: float, cy: float, inner: float, outer: float) -> str:
    # A single SVG arc cannot close on itself, so full rings use two half arcs.
    parts = [
        f"M{_fmt(cx + outer)},{_fmt(cy)}",
        f"A{_fmt(outer)},{_fmt(outer)} 0 1 1 {_fmt(cx - outer)},{_fmt(cy)}",
        f"A{_fmt(outer)},{_fmt(outer)} 0 1 1 {_fmt(cx + outer)},{_fmt(cy)}Z",
    ]
    if inner > 0:
        parts += [
            f"M{_fmt(cx + inner)},{_fmt(cy)}",
            f"A{_fmt(inner)},{_fmt(inner)} 0 1 0 {_fmt(cx - inner)},{_fmt(cy)}",
            f"A{_fmt(inner)},{_fmt(inner)} 0 1 0 {_fmt(cx + inner)},{_fmt(cy)}Z",
        ]
    return "".join(parts)


def arc_path(segment: WheelSegment, cx: float, cy: float) -> str:
    """SVG path data for ``segment`` as an annular sector around (cx, cy)."""
    inner, outer = segment.inner_radius, segment.outer_radius
    if segment.span >= FULL_TURN - _FULL_CIRCLE_EPS:
        return _ring_path(cx, cy, inner, outer)

    large_arc = 1 if segment.span > math.pi else 0
    start, end = segment.start_angle, segment.end_angle
    path = (
        f"M{_point(cx, cy, outer, start)}"
        f"A{_fmt(outer)},{_fmt(outer)} 0 {large_arc} 1 {_point(cx, cy, outer, end)}"
    )
    if inner > 0:
        path += (
            f"L{_point(cx, cy, inner, end)}"
            f"A{_fmt(inner)},{_fmt(inner)} 0 {large_arc} 0 {_point(cx, cy, inner, start)}"
        )
    else:
        path += f"L{_fmt(cx)},{_fmt(cy)}"
    return path + "Z"


def render_svg(segments: Sequence[WheelSegment], size: float, title: str = "Flavor wheel") -> str:
    """Render segments into a standalone SVG document of ``size`` x ``size``.

    The wheel is centered; each arc carries a ``<title>`` with its tooltip.
    """
    center = size / 2
    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_fmt(size)}" height="{_fmt(size)}" '
        f'viewBox="0 0 {_fmt(size)} {_fmt(size)}" role="img">',
        f"<title>{html.escape(title)}</title>",
    ]
    for segment in segments:
        lines.append(
            f'<path d="{arc_path(segment, center, center)}" fill="{segment.color}" '
            f'fill-rule="evenodd" stroke="#ffffff" stroke-width="1" '
            f'data-ring="{segment.ring_level.value}">'
            f"<title>{html.escape(segment.tooltip)}</title></path>"
        )
    lines.append("</svg>")
    return "\n".join(lines)


def to_wheel_angle(x: float, y: float, cx: float, cy: float) -> tuple[float, float]:
    """Convert a screen point to (angle, radius) in the wheel's angle convention."""
    dx, dy = x - cx, y - cy
    angle = START_ANGLE + (math.atan2(dy, dx) - START_ANGLE) % FULL_TURN
    return angle, math.hypot(dx, dy)


def segment_at(
    segments: Sequence[WheelSegment], x: float, y: float, center: tuple[float, float]
) -> WheelSegment | None:
    """Return the segment under screen point (x, y), or None."""
    angle, radius = to_wheel_angle(x, y, *center)
    for segment in segments:
        if not segment.inner_radius <= radius < segment.outer_radius:
            continue
        if segment.start_angle <= angle < segment.end_angle:
            return segment
    return None


def clamp_zoom(scale: float) -> float:
    if not math.isfinite(scale) or scale <= 0:
        raise ValueError(f"zoom scale must be a positive number, got {scale}")
    return min(ZOOM_MAX, max(ZOOM_MIN, scale))
