"""
Pytest configuration for flavor wheel tests

Provides descriptor fixtures and a clean telemetry state for every test.
"""

from __future__ import annotations

import pytest

from flavorwheel.contracts import ScopeTags
from flavorwheel.observability.telemetry import reset_latencies
from flavorwheel.storage import InMemoryDescriptorSource
from flavorwheel.wheel.types import Descriptor, DescriptorType

USER_A = "11111111-1111-4111-8111-111111111111"
USER_B = "22222222-2222-4222-8222-222222222222"
TASTING_A = "33333333-3333-4333-8333-333333333333"

ARDBEG_TASTING = ScopeTags(
    user_id=USER_A, tasting_id=TASTING_A, item_name="Ardbeg 10", item_category="whisky"
)
ARDBEG_NOTE = ScopeTags(user_id=USER_A, item_name="Ardbeg 10", item_category="whisky")
COFFEE_NOTE = ScopeTags(user_id=USER_B, item_name="Yirgacheffe", item_category="coffee")


@pytest.fixture(autouse=True)
def clean_telemetry():
    """Counters and latencies are module-level; start every test from zero."""
    reset_latencies()
    yield
    reset_latencies()


@pytest.fixture
def apple_rose():
    """Two apples and a rose: the smallest wheel with an uneven split."""
    return [
        Descriptor("apple", DescriptorType.AROMA, "Fruity", "Orchard"),
        Descriptor("apple", DescriptorType.AROMA, "Fruity", "Orchard"),
        Descriptor("rose", DescriptorType.AROMA, "Floral", "Flower"),
    ]


@pytest.fixture
def mixed_rows():
    """Descriptors of every type from two users across two items."""
    return [
        (
            ARDBEG_TASTING,
            Descriptor("peat smoke", DescriptorType.AROMA, "Roasted", "Smoke", intensity=4.0),
        ),
        (ARDBEG_TASTING, Descriptor("brine", DescriptorType.FLAVOR, "Mineral", "Sea")),
        (ARDBEG_NOTE, Descriptor("oily", DescriptorType.TEXTURE, "Mouthfeel", "Weight")),
        (COFFEE_NOTE, Descriptor("jasmine", DescriptorType.AROMA, "Floral", "Flower")),
        (
            COFFEE_NOTE,
            Descriptor("a spring morning", DescriptorType.METAPHOR, "Place", "Outdoors"),
        ),
    ]


@pytest.fixture
def store(mixed_rows):
    return InMemoryDescriptorSource(mixed_rows)
