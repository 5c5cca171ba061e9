"""
Module: layout
Purpose: Map an aggregated FlavorWheelData tree onto three-ring sunburst
         geometry (one WheelSegment per arc).
Dependencies: flavorwheel.wheel.types, flavorwheel.wheel.colors,
              flavorwheel.wheel.aggregator (validate_hierarchy)

Angle convention: the wheel starts at -pi/2 (12 o'clock) and runs clockwise
in screen coordinates (y grows downward), covering exactly 2*pi. Children
split their parent's span in proportion to their counts, and the last child
always ends on the parent's end angle so spans add up exactly.

The descriptor ring is renormalized over the rendered (capped) descriptors
of each subcategory, so truncation never leaves a visual gap.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from flavorwheel.config import (
    CATEGORY_RING,
    DESCRIPTOR_RING,
    SUBCATEGORY_RING,
    WHEEL_RADIUS,
)
from flavorwheel.wheel.aggregator import validate_hierarchy
from flavorwheel.wheel.colors import DEFAULT_PALETTE, derive_color, palette_color
from flavorwheel.wheel.errors import EmptyWheelError
from flavorwheel.wheel.types import (
    FlavorWheelData,
    RingLevel,
    WheelCategory,
    WheelSegment,
    WheelSubcategory,
)

START_ANGLE = -math.pi / 2
FULL_TURN = 2 * math.pi


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry constants for one wheel render. Ring bands are fractions of ``radius``."""

    radius: float = WHEEL_RADIUS
    category_ring: tuple[float, float] = CATEGORY_RING
    subcategory_ring: tuple[float, float] = SUBCATEGORY_RING
    descriptor_ring: tuple[float, float] = DESCRIPTOR_RING
    palette: tuple[str, ...] = DEFAULT_PALETTE

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        bounds = [*self.category_ring, *self.subcategory_ring, *self.descriptor_ring]
        if any(not 0.0 <= b <= 1.0 for b in bounds):
            raise ValueError(f"ring fractions must lie in [0, 1], got {bounds}")
        for inner, outer in (self.category_ring, self.subcategory_ring, self.descriptor_ring):
            if inner >= outer:
                raise ValueError(f"ring inner fraction {inner} must be below outer {outer}")
        if self.category_ring[1] > self.subcategory_ring[0] or (
            self.subcategory_ring[1] > self.descriptor_ring[0]
        ):
            raise ValueError("rings must not overlap and must grow outward")

    def band(self, ring: tuple[float, float]) -> tuple[float, float]:
        return ring[0] * self.radius, ring[1] * self.radius


def _partition(start: float, end: float, counts: Sequence[int]) -> list[tuple[float, float]]:
    """Split [start, end] into consecutive spans proportional to ``counts``."""
    total = sum(counts)
    spans: list[tuple[float, float]] = []
    cursor = start
    consumed = 0
    for i, count in enumerate(counts):
        consumed += count
        # Last span snaps to ``end`` so float drift never leaves a sliver.
        stop = end if i == len(counts) - 1 else start + (end - start) * consumed / total
        spans.append((cursor, stop))
        cursor = stop
    return spans


def _subcategory_segments(
    category: WheelCategory,
    sub: WheelSubcategory,
    span: tuple[float, float],
    color: str,
    config: LayoutConfig,
) -> list[WheelSegment]:
    inner, outer = config.band(config.subcategory_ring)
    segments = [
        WheelSegment(
            start_angle=span[0],
            end_angle=span[1],
            inner_radius=inner,
            outer_radius=outer,
            color=color,
            label=sub.name,
            count=sub.count,
            ring_level=RingLevel.SUBCATEGORY,
            path=(category.name, sub.name, None),
        )
    ]

    if not sub.descriptors:
        return segments

    d_inner, d_outer = config.band(config.descriptor_ring)
    d_spans = _partition(span[0], span[1], [d.count for d in sub.descriptors])
    for index, (descriptor, d_span) in enumerate(zip(sub.descriptors, d_spans)):
        segments.append(
            WheelSegment(
                start_angle=d_span[0],
                end_angle=d_span[1],
                inner_radius=d_inner,
                outer_radius=d_outer,
                color=derive_color(color, index, len(sub.descriptors)),
                label=descriptor.text,
                count=descriptor.count,
                ring_level=RingLevel.DESCRIPTOR,
                path=(category.name, sub.name, descriptor.text),
            )
        )
    return segments


def layout_wheel(data: FlavorWheelData, config: LayoutConfig | None = None) -> list[WheelSegment]:
    """
    Lay out ``data`` as a flat, depth-first list of WheelSegment.

    Emission order is each category followed by its subcategories, each
    subcategory followed by its rendered descriptors.

    Raises:
        EmptyWheelError: ``data`` has no categories
        InvalidHierarchyError: a child count exceeds its parent's
    """
    if data.is_empty:
        raise EmptyWheelError()
    validate_hierarchy(data)

    config = config or LayoutConfig()
    inner, outer = config.band(config.category_ring)

    segments: list[WheelSegment] = []
    category_spans = _partition(
        START_ANGLE, START_ANGLE + FULL_TURN, [c.count for c in data.categories]
    )
    for index, (category, span) in enumerate(zip(data.categories, category_spans)):
        color = palette_color(index, config.palette)
        segments.append(
            WheelSegment(
                start_angle=span[0],
                end_angle=span[1],
                inner_radius=inner,
                outer_radius=outer,
                color=color,
                label=category.name,
                count=category.count,
                ring_level=RingLevel.CATEGORY,
                path=(category.name, None, None),
            )
        )

        sub_spans = _partition(span[0], span[1], [s.count for s in category.subcategories])
        for sub_index, (sub, sub_span) in enumerate(zip(category.subcategories, sub_spans)):
            sub_color = derive_color(color, sub_index, len(category.subcategories))
            segments.extend(_subcategory_segments(category, sub, sub_span, sub_color, config))

    return segments
