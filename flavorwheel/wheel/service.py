"""Flavor wheel service layer: facade between API routes and the engine.

Resolves a wheel request into descriptor rows through an injected
DescriptorSource, runs the aggregator, and caches the resulting tree per
(wheel type, scope, filter) in a TTL cache. Empty scopes come back as an
empty wheel with a warning and are never cached.
"""

from __future__ import annotations

import hashlib
import threading
from dataclasses import dataclass, field

from cachetools import TTLCache

from flavorwheel.config import (
    MAX_DESCRIPTORS_PER_SUBCATEGORY,
    WHEEL_CACHE_MAX_ENTRIES,
    WHEEL_CACHE_TTL_SECONDS,
)
from flavorwheel.contracts import REQUIRED_SCOPE_FIELD, DescriptorSource, ScopeFilter
from flavorwheel.observability.logging import get_logger
from flavorwheel.observability.telemetry import counter, log_event, time_block
from flavorwheel.wheel.aggregator import aggregate_descriptors, filter_for_wheel_type
from flavorwheel.wheel.errors import EmptyInputError, InvalidScopeError
from flavorwheel.wheel.layout import LayoutConfig, layout_wheel
from flavorwheel.wheel.types import FlavorWheelData, ScopeType, WheelSegment, WheelType

logger = get_logger(__name__)

NO_DATA_WARNING = (
    "No flavor descriptors found for the specified scope. "
    "Try adding some tasting notes or reviews first."
)

_CacheKey = tuple[str, str, tuple[str | None, ...], int]


@dataclass(frozen=True)
class WheelRequest:
    wheel_type: WheelType
    scope_type: ScopeType
    scope_filter: ScopeFilter = field(default_factory=ScopeFilter)
    force_regenerate: bool = False


@dataclass(frozen=True)
class WheelResult:
    wheel_data: FlavorWheelData
    wheel_id: str
    cached: bool
    warning: str | None = None


class FlavorWheelService:
    """Generates and caches flavor wheels for a descriptor source.

    Safe to share between request handlers: the cache is guarded by a lock
    and the engine itself is pure.
    """

    def __init__(
        self,
        source: DescriptorSource,
        max_descriptors_per_subcategory: int = MAX_DESCRIPTORS_PER_SUBCATEGORY,
        cache_ttl_seconds: int = WHEEL_CACHE_TTL_SECONDS,
        cache_max_entries: int = WHEEL_CACHE_MAX_ENTRIES,
    ) -> None:
        self.source = source
        self.max_descriptors_per_subcategory = max_descriptors_per_subcategory
        self._cache: TTLCache[_CacheKey, FlavorWheelData] = TTLCache(
            maxsize=cache_max_entries, ttl=cache_ttl_seconds
        )
        self._lock = threading.Lock()
        # Bumped by invalidate(); a generation that started before a bump is not cached.
        self._generation = 0

    @staticmethod
    def check_scope(request: WheelRequest) -> None:
        """Raise InvalidScopeError if the scope type's required filter is missing."""
        field_name = REQUIRED_SCOPE_FIELD[request.scope_type]
        if field_name and getattr(request.scope_filter, field_name) is None:
            raise InvalidScopeError(
                f"scope '{request.scope_type.value}' requires scope filter '{field_name}'"
            )

    def _cache_key(self, request: WheelRequest) -> _CacheKey:
        return (
            request.wheel_type.value,
            request.scope_type.value,
            request.scope_filter.cache_key(),
            self.max_descriptors_per_subcategory,
        )

    @staticmethod
    def wheel_id(key: _CacheKey) -> str:
        """Stable id for a cache key, so the same scope always maps to the same wheel."""
        digest = hashlib.sha256(repr(key).encode("utf-8")).hexdigest()
        return f"wheel-{digest[:16]}"

    def get_or_generate(self, request: WheelRequest) -> WheelResult:
        """
        Return the cached wheel for ``request`` or build a new one.

        Side Effects:
            - Reads descriptor rows from the injected source
            - Writes/evicts entries in the in-memory wheel cache
            - Increments wheel.cache.* counters
        """
        self.check_scope(request)
        key = self._cache_key(request)
        wheel_id = self.wheel_id(key)

        with self._lock:
            if request.force_regenerate:
                self._cache.pop(key, None)
            cached = self._cache.get(key)
            generation = self._generation
        if cached is not None:
            counter("wheel.cache.hit")
            return WheelResult(wheel_data=cached, wheel_id=wheel_id, cached=True)

        counter("wheel.cache.miss")
        with time_block("wheel.generate.latency"):
            rows = self.source.fetch(request.scope_type, request.scope_filter)
            descriptors = filter_for_wheel_type(rows, request.wheel_type)
            try:
                wheel_data = aggregate_descriptors(
                    descriptors,
                    request.wheel_type,
                    max_descriptors_per_subcategory=self.max_descriptors_per_subcategory,
                )
            except EmptyInputError:
                logger.info(
                    "No descriptors for %s wheel in scope %s",
                    request.wheel_type.value,
                    request.scope_type.value,
                )
                return WheelResult(
                    wheel_data=FlavorWheelData.empty(request.wheel_type),
                    wheel_id=wheel_id,
                    cached=False,
                    warning=NO_DATA_WARNING,
                )

        with self._lock:
            if generation == self._generation:
                self._cache[key] = wheel_data
        log_event(
            "wheel.generated",
            wheel_id=wheel_id,
            wheel_type=request.wheel_type.value,
            scope_type=request.scope_type.value,
            categories=len(wheel_data.categories),
            total=wheel_data.total_descriptors,
        )
        return WheelResult(wheel_data=wheel_data, wheel_id=wheel_id, cached=False)

    def get_layout(
        self, request: WheelRequest, config: LayoutConfig | None = None
    ) -> tuple[WheelResult, list[WheelSegment]]:
        """Generate (or fetch) the wheel and lay it out. Empty wheels yield no segments."""
        result = self.get_or_generate(request)
        if result.wheel_data.is_empty:
            return result, []
        return result, layout_wheel(result.wheel_data, config)

    def invalidate(self) -> None:
        """Drop every cached wheel (new descriptor rows arrived)."""
        with self._lock:
            self._generation += 1
            self._cache.clear()
        counter("wheel.cache.invalidated")
