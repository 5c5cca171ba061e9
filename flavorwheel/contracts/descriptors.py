"""
Descriptor Source Protocols

Defines the boundary between the wheel service and whatever stores
descriptor rows (a database query, a cache, the in-memory store used in
development and tests).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from flavorwheel.wheel.types import Descriptor, ScopeType


@dataclass(frozen=True)
class ScopeFilter:
    """Optional narrowing applied on top of a scope type."""

    user_id: str | None = None
    item_name: str | None = None
    item_category: str | None = None
    tasting_id: str | None = None

    def cache_key(self) -> tuple[str | None, ...]:
        return (self.user_id, self.item_name, self.item_category, self.tasting_id)


@dataclass(frozen=True)
class ScopeTags:
    """Where a stored descriptor row came from. Matched against a ScopeFilter."""

    user_id: str | None = None
    tasting_id: str | None = None
    item_name: str | None = None
    item_category: str | None = None


# Which ScopeFilter field each scope type requires.
REQUIRED_SCOPE_FIELD: dict[ScopeType, str | None] = {
    ScopeType.PERSONAL: "user_id",
    ScopeType.UNIVERSAL: None,
    ScopeType.ITEM: "item_name",
    ScopeType.CATEGORY: "item_category",
    ScopeType.TASTING: "tasting_id",
}


class DescriptorSource(Protocol):
    """Protocol for fetching the descriptor rows that feed a wheel."""

    def fetch(self, scope_type: ScopeType, scope_filter: ScopeFilter) -> list[Descriptor]:
        """Return descriptor rows for a scope, in stable insertion order."""
        ...
