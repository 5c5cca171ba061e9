"""
Module: aggregator
Purpose: Turn a flat list of descriptor records into the three-level
         category -> subcategory -> descriptor hierarchy of a flavor wheel.
Dependencies: flavorwheel.wheel.types, flavorwheel.config

Grouping is exact and case-sensitive at every level. Normalization and
fuzzy matching belong to the extraction/classification service upstream.

Ordering at every level is descending count with ties broken by first-seen
order in the input. Python's sort is stable and dicts keep insertion order,
so sorting the grouped nodes by ``-count`` is enough.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from flavorwheel.config import DEFAULT_SUBCATEGORY, MAX_DESCRIPTORS_PER_SUBCATEGORY
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

_Node = TypeVar("_Node", WheelCategory, WheelSubcategory, WheelDescriptor)

WHEEL_TYPE_DESCRIPTORS: dict[WheelType, frozenset[DescriptorType]] = {
    WheelType.AROMA: frozenset({DescriptorType.AROMA}),
    WheelType.FLAVOR: frozenset({DescriptorType.FLAVOR}),
    WheelType.METAPHOR: frozenset({DescriptorType.METAPHOR}),
    WheelType.COMBINED: frozenset(
        {DescriptorType.AROMA, DescriptorType.FLAVOR, DescriptorType.TEXTURE}
    ),
}


@dataclass
class _TextGroup:
    """Running tally for one descriptor text inside a subcategory."""

    count: int = 0
    intensity_total: float = 0.0
    intensity_samples: int = 0

    def add(self, descriptor: Descriptor) -> None:
        self.count += 1
        if descriptor.intensity is not None:
            self.intensity_total += descriptor.intensity
            self.intensity_samples += 1

    @property
    def avg_intensity(self) -> float | None:
        if not self.intensity_samples:
            return None
        return self.intensity_total / self.intensity_samples


def filter_for_wheel_type(
    descriptors: Iterable[Descriptor], wheel_type: WheelType
) -> list[Descriptor]:
    """Keep only the descriptor records that belong on a wheel of ``wheel_type``."""
    allowed = WHEEL_TYPE_DESCRIPTORS[wheel_type]
    return [d for d in descriptors if d.type in allowed]


def _by_count(nodes: Iterable[_Node]) -> list[_Node]:
    return sorted(nodes, key=lambda node: -node.count)


def _percent(part: int, whole: int) -> float:
    return part * 100.0 / whole


def _build_subcategory(
    name: str, texts: dict[str, _TextGroup], category_count: int, cap: int
) -> WheelSubcategory:
    count = sum(group.count for group in texts.values())
    descriptors = _by_count(
        WheelDescriptor(
            text=text,
            count=group.count,
            percentage=_percent(group.count, count),
            avg_intensity=group.avg_intensity,
        )
        for text, group in texts.items()
    )
    return WheelSubcategory(
        name=name,
        count=count,
        descriptors=tuple(descriptors[:cap]),
        percentage=_percent(count, category_count),
    )


def _build_category(
    name: str, subcategories: dict[str, dict[str, _TextGroup]], total: int, cap: int
) -> WheelCategory:
    count = sum(group.count for texts in subcategories.values() for group in texts.values())
    unique_texts = {text for texts in subcategories.values() for text in texts}
    subs = _by_count(
        _build_subcategory(sub_name, texts, count, cap)
        for sub_name, texts in subcategories.items()
    )
    return WheelCategory(
        name=name,
        count=count,
        subcategories=tuple(subs),
        percentage=_percent(count, total),
        unique_count=len(unique_texts),
    )


def aggregate_descriptors(
    descriptors: Iterable[Descriptor],
    wheel_type: WheelType,
    max_descriptors_per_subcategory: int = MAX_DESCRIPTORS_PER_SUBCATEGORY,
    default_subcategory: str = DEFAULT_SUBCATEGORY,
) -> FlavorWheelData:
    """
    Group descriptor records into a FlavorWheelData tree.

    Counts are record counts (not confidence-weighted). Subcategory counts
    and percentages cover every descriptor text; only the top
    ``max_descriptors_per_subcategory`` texts are kept in the output.
    Records without a subcategory land in ``default_subcategory``.

    Raises:
        EmptyInputError: ``descriptors`` is empty
        ValueError: ``max_descriptors_per_subcategory`` is below 1
    """
    if max_descriptors_per_subcategory < 1:
        raise ValueError(
            f"max_descriptors_per_subcategory must be >= 1, got {max_descriptors_per_subcategory}"
        )

    records: Sequence[Descriptor] = list(descriptors)
    if not records:
        raise EmptyInputError()

    tree: dict[str, dict[str, dict[str, _TextGroup]]] = {}
    for descriptor in records:
        subcategory = descriptor.subcategory or default_subcategory
        texts = tree.setdefault(descriptor.category, {}).setdefault(subcategory, {})
        texts.setdefault(descriptor.text, _TextGroup()).add(descriptor)

    total = len(records)
    categories = _by_count(
        _build_category(name, subcategories, total, max_descriptors_per_subcategory)
        for name, subcategories in tree.items()
    )

    return FlavorWheelData(
        categories=tuple(categories),
        total_descriptors=total,
        wheel_type=wheel_type,
        unique_descriptors=sum(category.unique_count for category in categories),
    )


def validate_hierarchy(data: FlavorWheelData) -> None:
    """
    Check the count invariants of a wheel tree.

    Descriptor lists may be truncated, so only ``sum <= parent`` is required
    at the descriptor level; the category and root sums must be exact.

    Raises:
        InvalidHierarchyError: on the first violated invariant
    """
    category_total = 0
    for category in data.categories:
        if category.count <= 0:
            raise InvalidHierarchyError(f"Category {category.name!r} has non-positive count")
        category_total += category.count

        subcategory_total = 0
        for sub in category.subcategories:
            if sub.count <= 0:
                raise InvalidHierarchyError(
                    f"Subcategory {category.name}/{sub.name} has non-positive count"
                )
            if sub.count > category.count:
                raise InvalidHierarchyError(
                    f"Subcategory {category.name}/{sub.name} count {sub.count} "
                    f"exceeds category count {category.count}"
                )
            subcategory_total += sub.count

            descriptor_total = 0
            for descriptor in sub.descriptors:
                if descriptor.count <= 0 or descriptor.count > sub.count:
                    raise InvalidHierarchyError(
                        f"Descriptor {descriptor.text!r} count {descriptor.count} "
                        f"out of range for subcategory {category.name}/{sub.name}"
                    )
                descriptor_total += descriptor.count
            if descriptor_total > sub.count:
                raise InvalidHierarchyError(
                    f"Descriptors of {category.name}/{sub.name} sum to {descriptor_total}, "
                    f"above subcategory count {sub.count}"
                )

        if subcategory_total != category.count:
            raise InvalidHierarchyError(
                f"Subcategories of {category.name!r} sum to {subcategory_total}, "
                f"expected {category.count}"
            )

    if category_total != data.total_descriptors:
        raise InvalidHierarchyError(
            f"Categories sum to {category_total}, expected {data.total_descriptors}"
        )
