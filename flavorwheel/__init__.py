"""Flavor Wheel - aggregate tasting descriptors into sunburst flavor wheels"""

from __future__ import annotations

__version__ = "1.0.0"


def __getattr__(name: str):
    """
    Lazy imports so ``import flavorwheel`` does not pull in FastAPI.
    """
    if name in ("aggregate_descriptors", "layout_wheel", "LayoutConfig"):
        from flavorwheel import wheel

        return getattr(wheel, name)

    if name in ("Descriptor", "DescriptorType", "FlavorWheelData", "WheelType"):
        from flavorwheel.wheel import types

        return getattr(types, name)

    if name == "FlavorWheelService":
        from flavorwheel.wheel.service import FlavorWheelService

        return FlavorWheelService

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "Descriptor",
    "DescriptorType",
    "FlavorWheelData",
    "FlavorWheelService",
    "LayoutConfig",
    "WheelType",
    "aggregate_descriptors",
    "layout_wheel",
]
