"""Flavor wheel endpoints.

- POST /api/flavor-wheels/generate - Aggregated wheel tree (cached per scope)
- POST /api/flavor-wheels/layout - Sunburst segments for the wheel
- POST /api/flavor-wheels/svg - Standalone SVG export of the wheel
- POST /api/flavor-wheels/descriptors - Store extraction-service output
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from flavorwheel.api.models import (
    ErrorResponse,
    GenerateWheelRequest,
    IngestDescriptorsRequest,
    LayoutWheelRequest,
)
from flavorwheel.observability.logging import get_logger
from flavorwheel.observability.telemetry import counter, log_event
from flavorwheel.storage import InMemoryDescriptorSource
from flavorwheel.utils.error_sanitizer import sanitize_error_message
from flavorwheel.wheel.errors import InvalidScopeError
from flavorwheel.wheel.layout import LayoutConfig
from flavorwheel.wheel.render import render_svg
from flavorwheel.wheel.service import FlavorWheelService, WheelResult

router = APIRouter(
    prefix="/api/flavor-wheels",
    tags=["flavor-wheels"],
    responses={422: {"model": ErrorResponse}},
)
logger = get_logger(__name__)


def get_wheel_service(request: Request) -> FlavorWheelService:
    service = getattr(request.app.state, "wheel_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Flavor wheel service not initialized")
    return service


def get_descriptor_store(request: Request) -> InMemoryDescriptorSource:
    store = getattr(request.app.state, "descriptor_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Descriptor ingestion not available")
    return store


def _result_envelope(result: WheelResult) -> dict[str, Any]:
    body: dict[str, Any] = {
        "success": True,
        "wheelId": result.wheel_id,
        "cached": result.cached,
        "message": (
            "Flavor wheel retrieved from cache"
            if result.cached
            else "Flavor wheel generated successfully"
        ),
    }
    if result.warning:
        body["warning"] = result.warning
    return body


def _server_error(event: str, error: Exception) -> HTTPException:
    logger.exception("%s failed", event)
    log_event(f"{event}.error", error=type(error).__name__)
    return HTTPException(status_code=500, detail=sanitize_error_message(str(error), 500))


@router.post("/generate")
async def generate_wheel(
    body: GenerateWheelRequest,
    service: FlavorWheelService = Depends(get_wheel_service),
) -> dict[str, Any]:
    """Generate (or fetch the cached) flavor wheel for a scope."""
    try:
        result = service.get_or_generate(body.to_wheel_request())
    except InvalidScopeError as e:
        raise HTTPException(status_code=400, detail=sanitize_error_message(str(e), 400)) from e
    except Exception as e:
        raise _server_error("api.flavor_wheels.generate", e) from e

    counter("api.flavor_wheels.generate")
    return {**_result_envelope(result), "wheelData": result.wheel_data.to_dict()}


@router.post("/layout")
async def get_wheel_layout(
    body: LayoutWheelRequest,
    service: FlavorWheelService = Depends(get_wheel_service),
) -> dict[str, Any]:
    """Sunburst segments for a scope's wheel. An empty scope returns no segments."""
    try:
        result, segments = service.get_layout(
            body.to_wheel_request(), LayoutConfig(radius=body.radius)
        )
    except InvalidScopeError as e:
        raise HTTPException(status_code=400, detail=sanitize_error_message(str(e), 400)) from e
    except Exception as e:
        raise _server_error("api.flavor_wheels.layout", e) from e

    return {
        **_result_envelope(result),
        "radius": body.radius,
        "segments": [segment.to_dict() for segment in segments],
    }


@router.post("/svg")
async def export_svg(
    body: LayoutWheelRequest,
    service: FlavorWheelService = Depends(get_wheel_service),
) -> Response:
    """Render a scope's wheel as an SVG document sized to fit the wheel."""
    try:
        result, segments = service.get_layout(
            body.to_wheel_request(), LayoutConfig(radius=body.radius)
        )
    except InvalidScopeError as e:
        raise HTTPException(status_code=400, detail=sanitize_error_message(str(e), 400)) from e
    except Exception as e:
        raise _server_error("api.flavor_wheels.svg", e) from e

    if not segments:
        raise HTTPException(status_code=404, detail=result.warning or "No flavor wheel data yet")

    title = f"{result.wheel_data.wheel_type.value.title()} flavor wheel"
    svg = render_svg(segments, size=body.radius * 2, title=title)
    return Response(
        content=svg,
        media_type="image/svg+xml",
        headers={"X-Wheel-Id": result.wheel_id},
    )


@router.post("/descriptors")
async def ingest_descriptors(
    body: IngestDescriptorsRequest,
    store: InMemoryDescriptorSource = Depends(get_descriptor_store),
    service: FlavorWheelService = Depends(get_wheel_service),
) -> dict[str, Any]:
    """Store extraction-service descriptors and drop cached wheels.

    Side Effects:
        - Appends rows to the in-memory descriptor store
        - Clears the wheel cache
    """
    stored = store.add((d.to_descriptor() for d in body.descriptors), body.to_scope_tags())
    service.invalidate()
    log_event(
        "api.flavor_wheels.descriptors_stored",
        stored=stored,
        tokens_used=body.tokens_used,
        processing_time_ms=body.processing_time_ms,
    )
    return {"success": True, "stored": stored}
