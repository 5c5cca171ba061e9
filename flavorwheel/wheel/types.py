"""
Module: types
Purpose: Domain types shared by the aggregator, the layout engine and the API.
Dependencies: none (leaf module)

Every type here is a frozen dataclass holding tuples, so a FlavorWheelData
handed to the layout engine cannot be mutated underneath it. ``to_dict``
produces the camelCase JSON shape the rendering layer consumes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class DescriptorType(str, Enum):
    """Sensory channel a descriptor was extracted for.

    Extends str so JSON serialization produces raw strings (e.g. "aroma").
    """

    AROMA = "aroma"
    FLAVOR = "flavor"
    TEXTURE = "texture"
    METAPHOR = "metaphor"


class WheelType(str, Enum):
    AROMA = "aroma"
    FLAVOR = "flavor"
    COMBINED = "combined"
    METAPHOR = "metaphor"


class ScopeType(str, Enum):
    """Which descriptor rows feed a wheel. Resolved by the descriptor source."""

    PERSONAL = "personal"
    UNIVERSAL = "universal"
    ITEM = "item"
    CATEGORY = "category"
    TASTING = "tasting"


class RingLevel(str, Enum):
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"
    DESCRIPTOR = "descriptor"


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Descriptor:
    """A single extracted sensory term, as emitted by the extraction service."""

    text: str
    type: DescriptorType
    category: str
    subcategory: str | None = None
    confidence: float | None = None
    intensity: float | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, DescriptorType):
            raise TypeError(f"Descriptor.type must be a DescriptorType, got {self.type!r}")
        if not self.category:
            raise ValueError("Descriptor.category must be a non-empty string")

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> Descriptor:
        """Build a descriptor from a database row or extraction payload entry.

        Unknown ``type`` values are rejected rather than coerced.
        """
        raw_type = row.get("type")
        try:
            descriptor_type = DescriptorType(raw_type)
        except ValueError as e:
            raise ValueError(f"Unknown descriptor type: {raw_type!r}") from e

        return cls(
            text=str(row.get("text") or ""),
            type=descriptor_type,
            category=str(row.get("category") or ""),
            subcategory=row.get("subcategory") or None,
            confidence=_optional_float(row.get("confidence")),
            intensity=_optional_float(row.get("intensity")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "type": self.type.value,
            "category": self.category,
            "subcategory": self.subcategory,
            "confidence": self.confidence,
            "intensity": self.intensity,
        }


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


# ---------------------------------------------------------------------------
# Aggregated hierarchy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WheelDescriptor:
    text: str
    count: int
    percentage: float = 0.0  # of the parent subcategory's uncapped count
    avg_intensity: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "count": self.count,
            "percentage": self.percentage,
            "avgIntensity": self.avg_intensity,
        }


@dataclass(frozen=True)
class WheelSubcategory:
    name: str
    count: int
    descriptors: tuple[WheelDescriptor, ...] = ()
    percentage: float = 0.0  # of the parent category

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "count": self.count,
            "percentage": self.percentage,
            "descriptors": [d.to_dict() for d in self.descriptors],
        }


@dataclass(frozen=True)
class WheelCategory:
    name: str
    count: int
    subcategories: tuple[WheelSubcategory, ...] = ()
    percentage: float = 0.0  # of totalDescriptors
    unique_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "count": self.count,
            "percentage": self.percentage,
            "uniqueCount": self.unique_count,
            "subcategories": [s.to_dict() for s in self.subcategories],
        }


@dataclass(frozen=True)
class FlavorWheelData:
    """Root of the aggregated wheel. Built fresh per request."""

    categories: tuple[WheelCategory, ...]
    total_descriptors: int
    wheel_type: WheelType
    unique_descriptors: int = 0

    @classmethod
    def empty(cls, wheel_type: WheelType) -> FlavorWheelData:
        return cls(categories=(), total_descriptors=0, wheel_type=wheel_type)

    @property
    def is_empty(self) -> bool:
        return not self.categories

    def to_dict(self) -> dict[str, Any]:
        return {
            "categories": [c.to_dict() for c in self.categories],
            "totalDescriptors": self.total_descriptors,
            "uniqueDescriptors": self.unique_descriptors,
            "wheelType": self.wheel_type.value,
        }


# ---------------------------------------------------------------------------
# Layout output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WheelSegment:
    """One renderable arc. Angles in radians, clockwise from 12 o'clock at -pi/2."""

    start_angle: float
    end_angle: float
    inner_radius: float
    outer_radius: float
    color: str
    label: str
    count: int
    ring_level: RingLevel
    path: tuple[str, str | None, str | None]

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def tooltip(self) -> str:
        return f"{self.label} ({self.count})"

    def to_dict(self) -> dict[str, Any]:
        category, subcategory, descriptor = self.path
        return {
            "startAngle": self.start_angle,
            "endAngle": self.end_angle,
            "innerRadius": self.inner_radius,
            "outerRadius": self.outer_radius,
            "color": self.color,
            "label": self.label,
            "count": self.count,
            "ringLevel": self.ring_level.value,
            "tooltip": self.tooltip,
            "path": {
                "category": category,
                "subcategory": subcategory,
                "descriptor": descriptor,
            },
        }
