"""Rate limiting middleware for the flavor wheel API

Per-IP sliding windows (one per minute, one per hour). Timestamps live in
TTLCaches so memory stays bounded as new client IPs show up.
"""

from __future__ import annotations

import ipaddress
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from cachetools import TTLCache
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from flavorwheel.config import APP_ENV, RATE_LIMIT_MAX_IPS
from flavorwheel.observability.telemetry import log_event

EXEMPT_PATHS = frozenset({"/health", "/"})


@dataclass
class _Window:
    """Sliding window of request timestamps per client IP."""

    name: str
    seconds: int
    limit: int
    max_tracked_ips: int
    hits: TTLCache = field(init=False)

    def __post_init__(self) -> None:
        # An idle IP is forgotten after two windows.
        self.hits = TTLCache(maxsize=self.max_tracked_ips, ttl=self.seconds * 2)

    def recent(self, client_ip: str, now: float) -> list[float]:
        return [ts for ts in self.hits.get(client_ip, ()) if now - ts < self.seconds]

    def remaining(self, used: int) -> int:
        return max(0, self.limit - used)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Sliding-window rate limiter keyed by client IP.

    State is per process; running several workers multiplies the effective limit.
    """

    def __init__(
        self,
        app: Any,
        requests_per_minute: int = 60,
        requests_per_hour: int = 1000,
        max_tracked_ips: int = RATE_LIMIT_MAX_IPS,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour
        self.minute = _Window("minute", 60, requests_per_minute, max_tracked_ips)
        self.hour = _Window("hour", 3600, requests_per_hour, max_tracked_ips)

    @staticmethod
    def _parse_ip(value: str) -> str | None:
        try:
            return str(ipaddress.ip_address(value.strip()))
        except ValueError:
            return None

    def _client_ip(self, request: Request) -> str:
        """Socket peer address. X-Forwarded-For is only trusted in development."""
        forwarded = request.headers.get("X-Forwarded-For")
        if APP_ENV == "development" and forwarded:
            ip = self._parse_ip(forwarded.split(",")[0])
            if ip:
                return ip
        return request.client.host if request.client else "unknown"

    @staticmethod
    def _too_many(client_ip: str, window: _Window) -> JSONResponse:
        log_event("api.rate_limit.request_exceeded", ip=client_ip, limit=window.name)
        return JSONResponse(
            status_code=429,
            content={
                "detail": (
                    f"Rate limit exceeded. Maximum {window.limit} requests per {window.name}."
                ),
                "retry_after": window.seconds,
            },
            headers={"Retry-After": str(window.seconds)},
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        client_ip = self._client_ip(request)
        now = time.time()

        counted: list[tuple[_Window, list[float]]] = []
        for window in (self.minute, self.hour):
            recent = window.recent(client_ip, now)
            if len(recent) >= window.limit:
                return self._too_many(client_ip, window)
            counted.append((window, recent))

        for window, recent in counted:
            recent.append(now)
            window.hits[client_ip] = recent

        response = await call_next(request)
        for window, recent in counted:
            label = window.name.capitalize()
            response.headers[f"X-RateLimit-Limit-{label}"] = str(window.limit)
            response.headers[f"X-RateLimit-Remaining-{label}"] = str(window.remaining(len(recent)))
        return response
