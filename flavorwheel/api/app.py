"""FastAPI server for flavor wheel generation"""

from __future__ import annotations

import os
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from flavorwheel.api.middleware.rate_limit import RateLimitMiddleware
from flavorwheel.api.routes.flavor_wheels import router as flavor_wheels_router
from flavorwheel.api.routes.health import router as health_router
from flavorwheel.config import (
    ALLOWED_ORIGINS,
    APP_VERSION,
    DESCRIPTOR_SEED_FILE,
    RATE_LIMIT_RPH,
    RATE_LIMIT_RPM,
)
from flavorwheel.observability.logging import get_logger
from flavorwheel.observability.telemetry import counter
from flavorwheel.storage import InMemoryDescriptorSource, load_descriptor_file
from flavorwheel.wheel.service import FlavorWheelService

logger = get_logger(__name__)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Return a sanitized 422 that names the invalid fields but not the rules.

    Side Effects:
        - Logs detailed validation errors for debugging
        - Increments api.validation_errors counter
    """
    errors = exc.errors()
    logger.warning("Validation error on %s: %s", request.url.path, errors)
    counter("api.validation_errors")

    return JSONResponse(
        status_code=422,
        content={
            "detail": "Invalid request format. Please check your request and try again.",
            "error_count": len(errors),
            "invalid_fields": [str(err["loc"][-1]) for err in errors if err.get("loc")],
        },
    )


def _default_store() -> InMemoryDescriptorSource:
    if not DESCRIPTOR_SEED_FILE:
        logger.info("No descriptor seed file configured; starting with an empty store")
        return InMemoryDescriptorSource()
    try:
        return load_descriptor_file(DESCRIPTOR_SEED_FILE)
    except FileNotFoundError as e:
        logger.critical("Descriptor seed file not found: %s", e)
        raise RuntimeError(f"Descriptor store initialization failed: {e}") from e
    except ValueError as e:
        logger.critical("Descriptor seed file is invalid: %s", e)
        raise RuntimeError(f"Descriptor store initialization failed: {e}") from e


def create_app(
    service: FlavorWheelService | None = None,
    store: InMemoryDescriptorSource | None = None,
    requests_per_minute: int = RATE_LIMIT_RPM,
    requests_per_hour: int = RATE_LIMIT_RPH,
) -> FastAPI:
    """
    Build the API with its services attached to ``app.state``.

    With no arguments an in-memory store is created (seeded from
    FLAVORWHEEL_DESCRIPTOR_FILE when set) and a service is built on top of it.
    A caller-supplied ``service`` without ``store`` disables ingestion.
    """
    if service is None:
        store = store if store is not None else _default_store()
        service = FlavorWheelService(store)

    app = FastAPI(title="Flavor Wheel API", version=APP_VERSION)
    app.state.wheel_service = service
    app.state.descriptor_store = store

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_minute=requests_per_minute,
        requests_per_hour=requests_per_hour,
    )

    app.include_router(health_router)
    app.include_router(flavor_wheels_router)

    @app.get("/")
    def root() -> dict[str, Any]:
        return {
            "service": "Flavor Wheel API",
            "version": APP_VERSION,
            "endpoints": [route.path for route in flavor_wheels_router.routes],
        }

    return app


app = create_app()


def main() -> None:
    """Console entry point: serve the API with uvicorn."""
    host = os.getenv("FLAVORWHEEL_HOST", "127.0.0.1")
    port = int(os.getenv("FLAVORWHEEL_PORT", "8000"))
    uvicorn.run("flavorwheel.api.app:app", host=host, port=port)


if __name__ == "__main__":
    main()
