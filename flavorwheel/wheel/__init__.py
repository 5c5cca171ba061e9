"""Flavor wheel aggregation and layout engine."""

from flavorwheel.wheel.types import (
    Descriptor,
    DescriptorType,
    FlavorWheelData,
    RingLevel,
    ScopeType,
    WheelCategory,
    WheelDescriptor,
    WheelSegment,
    WheelSubcategory,
    WheelType,
)
from flavorwheel.wheel.errors import (
    EmptyInputError,
    EmptyWheelError,
    FlavorWheelError,
    InvalidHierarchyError,
    InvalidScopeError,
)
from flavorwheel.wheel.aggregator import (
    aggregate_descriptors,
    filter_for_wheel_type,
    validate_hierarchy,
)
from flavorwheel.wheel.colors import DEFAULT_PALETTE, derive_color
from flavorwheel.wheel.layout import LayoutConfig, layout_wheel

__all__ = [
    "DEFAULT_PALETTE",
    "Descriptor",
    "DescriptorType",
    "EmptyInputError",
    "EmptyWheelError",
    "FlavorWheelData",
    "FlavorWheelError",
    "InvalidHierarchyError",
    "InvalidScopeError",
    "LayoutConfig",
    "RingLevel",
    "ScopeType",
    "WheelCategory",
    "WheelDescriptor",
    "WheelSegment",
    "WheelSubcategory",
    "WheelType",
    "aggregate_descriptors",
    "derive_color",
    "filter_for_wheel_type",
    "layout_wheel",
    "validate_hierarchy",
]
