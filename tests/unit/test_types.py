from __future__ import annotations

import pytest

from flavorwheel.wheel.types import Descriptor, DescriptorType, FlavorWheelData, WheelType


def test_descriptor_from_dict():
    descriptor = Descriptor.from_dict(
        {"text": "cherry", "type": "flavor", "category": "Fruity", "confidence": "0.9"}
    )

    assert descriptor.type is DescriptorType.FLAVOR
    assert descriptor.subcategory is None
    assert descriptor.confidence == pytest.approx(0.9)
    assert Descriptor.from_dict(descriptor.to_dict()) == descriptor


def test_descriptor_from_dict_rejects_unknown_type():
    with pytest.raises(ValueError, match="Unknown descriptor type"):
        Descriptor.from_dict({"text": "hum", "type": "sound", "category": "Noise"})


def test_descriptor_requires_category():
    with pytest.raises(ValueError, match="category"):
        Descriptor("cherry", DescriptorType.FLAVOR, "")


def test_descriptor_requires_enum_type():
    with pytest.raises(TypeError):
        Descriptor("cherry", "flavor", "Fruity")


def test_empty_wheel_dict():
    assert FlavorWheelData.empty(WheelType.COMBINED).to_dict() == {
        "categories": [],
        "totalDescriptors": 0,
        "uniqueDescriptors": 0,
        "wheelType": "combined",
    }


def test_package_level_exports(apple_rose):
    import flavorwheel

    wheel = flavorwheel.aggregate_descriptors(apple_rose, flavorwheel.WheelType.AROMA)

    assert len(flavorwheel.layout_wheel(wheel, flavorwheel.LayoutConfig())) == 6
    assert flavorwheel.FlavorWheelService.__name__ == "FlavorWheelService"
    with pytest.raises(AttributeError):
        flavorwheel.does_not_exist  # noqa: B018
