"""Centralized configuration for the flavor wheel service.

Typed constants for the aggregation engine, the sunburst layout, the wheel
cache, rate limiting and the API. Environment variable overrides use safe
defaults so the app starts without extra env configuration.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# --- App ---
APP_VERSION: str = "1.0.0"
APP_ENV: str = os.getenv("FLAVORWHEEL_ENV", "development")

# --- Aggregation ---
MAX_DESCRIPTORS_PER_SUBCATEGORY: int = int(
    os.getenv("FLAVORWHEEL_MAX_DESCRIPTORS_PER_SUBCATEGORY", "5")
)
DEFAULT_SUBCATEGORY: str = os.getenv("FLAVORWHEEL_DEFAULT_SUBCATEGORY", "General")

# --- Layout (fractions of the overall radius) ---
CATEGORY_RING: tuple[float, float] = (0.30, 0.50)
SUBCATEGORY_RING: tuple[float, float] = (0.50, 0.70)
DESCRIPTOR_RING: tuple[float, float] = (0.70, 0.95)
WHEEL_RADIUS: float = float(os.getenv("FLAVORWHEEL_RADIUS", "300"))

# --- Interaction ---
ZOOM_MIN: float = 0.5
ZOOM_MAX: float = 4.0

# --- Wheel cache ---
WHEEL_CACHE_TTL_SECONDS: int = int(os.getenv("FLAVORWHEEL_CACHE_TTL", "3600"))
WHEEL_CACHE_MAX_ENTRIES: int = int(os.getenv("FLAVORWHEEL_CACHE_MAX_ENTRIES", "256"))

# --- Descriptor source ---
DESCRIPTOR_SEED_FILE: str | None = os.getenv("FLAVORWHEEL_DESCRIPTOR_FILE") or None

# --- Rate Limiting ---
RATE_LIMIT_RPM: int = int(os.getenv("FLAVORWHEEL_RATE_LIMIT_RPM", "60"))
RATE_LIMIT_RPH: int = int(os.getenv("FLAVORWHEEL_RATE_LIMIT_RPH", "1000"))
RATE_LIMIT_MAX_IPS: int = 10000

# --- API ---
API_ITEM_NAME_MAX_LEN: int = 200
API_INGEST_BATCH_MAX: int = 500
API_RADIUS_MAX: float = 5000.0

ALLOWED_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv("FLAVORWHEEL_ALLOWED_ORIGINS", "").split(",")
    if origin.strip()
]
if APP_ENV == "development":
    ALLOWED_ORIGINS.extend(
        [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    )
