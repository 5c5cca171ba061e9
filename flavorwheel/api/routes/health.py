"""Health check endpoint for the flavor wheel API."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request

from flavorwheel.config import APP_VERSION
from flavorwheel.observability.telemetry import get_counter, get_latency_stats

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """Service status, version, and descriptor store size (no PII)."""
    store = getattr(request.app.state, "descriptor_store", None)

    return {
        "status": "healthy",
        "service": "Flavor Wheel API",
        "version": APP_VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
        "descriptors": len(store) if store is not None else None,
        "cache": {
            "hits": get_counter("wheel.cache.hit"),
            "misses": get_counter("wheel.cache.miss"),
        },
        "generate_latency": get_latency_stats("wheel.generate.latency"),
    }
