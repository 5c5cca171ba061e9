"""Unit tests for descriptor aggregation

Tests cover:
- Count conservation at every level
- Descending-count ordering with first-seen tie breaking
- Per-subcategory truncation (counts stay uncapped)
- Default subcategory, percentages, average intensity
- Wheel-type filtering and hierarchy validation
"""

from __future__ import annotations

import pytest

from flavorwheel.wheel.aggregator import (
    aggregate_descriptors,
    filter_for_wheel_type,
    validate_hierarchy,
)
from flavorwheel.wheel.errors import EmptyInputError, InvalidHierarchyError
from flavorwheel.wheel.types import (
    Descriptor,
    DescriptorType,
    FlavorWheelData,
    WheelCategory,
    WheelDescriptor,
    WheelSubcategory,
    WheelType,
)


def _aroma(text, category, subcategory=None, intensity=None):
    return Descriptor(text, DescriptorType.AROMA, category, subcategory, intensity=intensity)


def test_apple_rose_wheel(apple_rose):
    """Two apples and a rose: Fruity first with 2, Floral second with 1"""
    wheel = aggregate_descriptors(apple_rose, WheelType.AROMA)

    assert wheel.total_descriptors == 3
    assert wheel.wheel_type is WheelType.AROMA
    assert [(c.name, c.count) for c in wheel.categories] == [("Fruity", 2), ("Floral", 1)]

    fruity = wheel.categories[0]
    assert fruity.subcategories[0].name == "Orchard"
    assert fruity.subcategories[0].descriptors == (
        WheelDescriptor(text="apple", count=2, percentage=100.0, avg_intensity=None),
    )


def test_count_conservation():
    descriptors = [
        _aroma("cherry", "Fruity", "Stone"),
        _aroma("plum", "Fruity", "Stone"),
        _aroma("cherry", "Fruity", "Stone"),
        _aroma("lemon", "Fruity", "Citrus"),
        _aroma("clove", "Spice", "Warm"),
        _aroma("pepper", "Spice"),
    ]

    wheel = aggregate_descriptors(descriptors, WheelType.AROMA)

    assert wheel.total_descriptors == len(descriptors)
    assert sum(c.count for c in wheel.categories) == wheel.total_descriptors
    for category in wheel.categories:
        assert category.count == sum(s.count for s in category.subcategories)
        for sub in category.subcategories:
            assert sub.count == sum(d.count for d in sub.descriptors)


def test_ties_keep_first_seen_order():
    descriptors = [
        _aroma("vanilla", "Sweet", "Confection"),
        _aroma("oak", "Wood", "Barrel"),
        _aroma("honey", "Sweet", "Confection"),
        _aroma("cedar", "Wood", "Barrel"),
    ]

    wheel = aggregate_descriptors(descriptors, WheelType.AROMA)

    assert [c.name for c in wheel.categories] == ["Sweet", "Wood"]
    assert [d.text for d in wheel.categories[0].subcategories[0].descriptors] == [
        "vanilla",
        "honey",
    ]


def test_higher_count_overrides_first_seen():
    descriptors = [
        _aroma("grass", "Vegetal", "Green"),
        _aroma("rose", "Floral", "Flower"),
        _aroma("violet", "Floral", "Flower"),
    ]

    wheel = aggregate_descriptors(descriptors, WheelType.AROMA)

    assert [c.name for c in wheel.categories] == ["Floral", "Vegetal"]


def test_reordering_within_group_keeps_counts():
    forward = [_aroma("fig", "Fruity", "Dried", 2.0), _aroma("fig", "Fruity", "Dried", 4.0)]
    wheel_a = aggregate_descriptors(forward, WheelType.AROMA)
    wheel_b = aggregate_descriptors(list(reversed(forward)), WheelType.AROMA)

    assert wheel_a == wheel_b


def test_same_input_gives_identical_output(apple_rose):
    first = aggregate_descriptors(apple_rose, WheelType.AROMA)
    second = aggregate_descriptors(list(apple_rose), WheelType.AROMA)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_truncation_keeps_top_five_of_eight():
    texts = ["a", "b", "c", "d", "e", "f", "g", "h"]
    descriptors = [_aroma(t, "Fruity", "Berry") for t in texts]
    # Give the last three extra weight so they sort to the front.
    descriptors += [_aroma("h", "Fruity", "Berry"), _aroma("g", "Fruity", "Berry")]
    descriptors += [_aroma("h", "Fruity", "Berry")]

    wheel = aggregate_descriptors(descriptors, WheelType.AROMA, max_descriptors_per_subcategory=5)
    sub = wheel.categories[0].subcategories[0]

    assert len(sub.descriptors) == 5
    assert [d.text for d in sub.descriptors] == ["h", "g", "a", "b", "c"]
    assert sub.count == 11
    assert sum(d.count for d in sub.descriptors) <= sub.count
    # Percentages use the uncapped subcategory count.
    assert sub.descriptors[0].percentage == pytest.approx(300 / 11)


def test_missing_subcategory_uses_default():
    wheel = aggregate_descriptors([_aroma("musk", "Animal")], WheelType.AROMA)

    assert wheel.categories[0].subcategories[0].name == "General"


def test_custom_default_subcategory():
    wheel = aggregate_descriptors(
        [_aroma("musk", "Animal")], WheelType.AROMA, default_subcategory="Other"
    )

    assert wheel.categories[0].subcategories[0].name == "Other"


def test_grouping_is_case_sensitive():
    wheel = aggregate_descriptors(
        [_aroma("Apple", "Fruity", "Orchard"), _aroma("apple", "Fruity", "Orchard")],
        WheelType.AROMA,
    )

    texts = [d.text for d in wheel.categories[0].subcategories[0].descriptors]
    assert texts == ["Apple", "apple"]


def test_percentages_and_unique_counts():
    descriptors = [
        _aroma("cherry", "Fruity", "Stone"),
        _aroma("cherry", "Fruity", "Stone"),
        _aroma("lime", "Fruity", "Citrus"),
        _aroma("mint", "Herbal", "Fresh"),
    ]

    wheel = aggregate_descriptors(descriptors, WheelType.AROMA)
    fruity, herbal = wheel.categories

    assert fruity.percentage == pytest.approx(75.0)
    assert herbal.percentage == pytest.approx(25.0)
    assert fruity.unique_count == 2
    assert wheel.unique_descriptors == 3
    assert fruity.subcategories[0].percentage == pytest.approx(200 / 3)


def test_average_intensity_ignores_missing_values():
    descriptors = [
        _aroma("smoke", "Roasted", "Smoke", intensity=2.0),
        _aroma("smoke", "Roasted", "Smoke", intensity=4.0),
        _aroma("smoke", "Roasted", "Smoke"),
        _aroma("tar", "Roasted", "Smoke"),
    ]

    wheel = aggregate_descriptors(descriptors, WheelType.AROMA)
    smoke, tar = wheel.categories[0].subcategories[0].descriptors

    assert smoke.avg_intensity == pytest.approx(3.0)
    assert tar.avg_intensity is None


def test_empty_input_raises():
    with pytest.raises(EmptyInputError):
        aggregate_descriptors([], WheelType.FLAVOR)


def test_cap_below_one_rejected(apple_rose):
    with pytest.raises(ValueError, match="max_descriptors_per_subcategory"):
        aggregate_descriptors(apple_rose, WheelType.AROMA, max_descriptors_per_subcategory=0)


def test_accepts_generator(apple_rose):
    wheel = aggregate_descriptors((d for d in apple_rose), WheelType.AROMA)

    assert wheel.total_descriptors == 3


def test_wheel_type_filter():
    descriptors = [
        Descriptor("smoke", DescriptorType.AROMA, "Roasted"),
        Descriptor("salt", DescriptorType.FLAVOR, "Mineral"),
        Descriptor("silky", DescriptorType.TEXTURE, "Mouthfeel"),
        Descriptor("a campfire", DescriptorType.METAPHOR, "Place"),
    ]

    def texts(wheel_type):
        return [d.text for d in filter_for_wheel_type(descriptors, wheel_type)]

    assert texts(WheelType.AROMA) == ["smoke"]
    assert texts(WheelType.FLAVOR) == ["salt"]
    assert texts(WheelType.METAPHOR) == ["a campfire"]
    assert texts(WheelType.COMBINED) == ["smoke", "salt", "silky"]


class TestValidateHierarchy:
    def test_aggregated_wheel_is_valid(self, apple_rose):
        validate_hierarchy(aggregate_descriptors(apple_rose, WheelType.AROMA))

    def test_category_sum_must_match_total(self):
        data = FlavorWheelData(
            categories=(WheelCategory("Fruity", 2, (WheelSubcategory("Orchard", 2),)),),
            total_descriptors=3,
            wheel_type=WheelType.AROMA,
        )
        with pytest.raises(InvalidHierarchyError, match="Categories sum"):
            validate_hierarchy(data)

    def test_subcategory_larger_than_category(self):
        data = FlavorWheelData(
            categories=(WheelCategory("Fruity", 2, (WheelSubcategory("Orchard", 3),)),),
            total_descriptors=2,
            wheel_type=WheelType.AROMA,
        )
        with pytest.raises(InvalidHierarchyError, match="exceeds category count"):
            validate_hierarchy(data)

    def test_descriptors_above_subcategory_count(self):
        sub = WheelSubcategory(
            "Orchard", 3, (WheelDescriptor("apple", 2), WheelDescriptor("pear", 2))
        )
        data = FlavorWheelData(
            categories=(WheelCategory("Fruity", 3, (sub,)),),
            total_descriptors=3,
            wheel_type=WheelType.AROMA,
        )
        with pytest.raises(InvalidHierarchyError, match="above subcategory count"):
            validate_hierarchy(data)

    def test_truncated_descriptors_are_allowed(self):
        sub = WheelSubcategory("Orchard", 5, (WheelDescriptor("apple", 2),))
        data = FlavorWheelData(
            categories=(WheelCategory("Fruity", 5, (sub,)),),
            total_descriptors=5,
            wheel_type=WheelType.AROMA,
        )
        validate_hierarchy(data)

    def test_non_positive_count(self):
        data = FlavorWheelData(
            categories=(WheelCategory("Fruity", 0),),
            total_descriptors=0,
            wheel_type=WheelType.AROMA,
        )
        with pytest.raises(InvalidHierarchyError, match="non-positive"):
            validate_hierarchy(data)

    def test_category_without_subcategories_rejected(self):
        data = FlavorWheelData(
            categories=(WheelCategory("Fruity", 3, ()),),
            total_descriptors=3,
            wheel_type=WheelType.AROMA,
        )
        with pytest.raises(InvalidHierarchyError, match="Subcategories of 'Fruity' sum to 0"):
            validate_hierarchy(data)
