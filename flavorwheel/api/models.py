"""Pydantic request models for the flavor wheel API.

Field names follow the client's camelCase JSON (``wheelType``,
``scopeFilter``...) through aliases; Python code uses snake_case.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from flavorwheel.config import (
    API_INGEST_BATCH_MAX,
    API_ITEM_NAME_MAX_LEN,
    API_RADIUS_MAX,
    WHEEL_RADIUS,
)
from flavorwheel.contracts import REQUIRED_SCOPE_FIELD, ScopeFilter, ScopeTags
from flavorwheel.wheel.service import WheelRequest
from flavorwheel.wheel.types import Descriptor, DescriptorType, ScopeType, WheelType


def _optional_str(value: object | None) -> str | None:
    return None if value is None else str(value)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ScopeFilterIn(_CamelModel):
    user_id: UUID | None = Field(default=None, alias="userId")
    item_name: str | None = Field(
        default=None, alias="itemName", min_length=1, max_length=API_ITEM_NAME_MAX_LEN
    )
    item_category: str | None = Field(
        default=None, alias="itemCategory", min_length=1, max_length=100
    )
    tasting_id: UUID | None = Field(default=None, alias="tastingId")

    def to_scope_filter(self) -> ScopeFilter:
        return ScopeFilter(
            user_id=_optional_str(self.user_id),
            item_name=self.item_name,
            item_category=self.item_category,
            tasting_id=_optional_str(self.tasting_id),
        )


class GenerateWheelRequest(_CamelModel):
    """Body of POST /api/flavor-wheels/generate."""

    wheel_type: WheelType = Field(alias="wheelType")
    scope_type: ScopeType = Field(alias="scopeType")
    scope_filter: ScopeFilterIn = Field(default_factory=ScopeFilterIn, alias="scopeFilter")
    force_regenerate: bool = Field(default=False, alias="forceRegenerate")

    @model_validator(mode="after")
    def check_scope_filter(self) -> GenerateWheelRequest:
        """Each narrowed scope needs its filter field (personal -> userId, ...)."""
        field_name = REQUIRED_SCOPE_FIELD[self.scope_type]
        if field_name and getattr(self.scope_filter, field_name) is None:
            alias = ScopeFilterIn.model_fields[field_name].alias
            raise ValueError(
                f"Scope type '{self.scope_type.value}' requires scopeFilter.{alias}"
            )
        return self

    def to_wheel_request(self) -> WheelRequest:
        return WheelRequest(
            wheel_type=self.wheel_type,
            scope_type=self.scope_type,
            scope_filter=self.scope_filter.to_scope_filter(),
            force_regenerate=self.force_regenerate,
        )


class LayoutWheelRequest(GenerateWheelRequest):
    """Generate body plus the overall wheel radius used for ring bands."""

    radius: float = Field(default=WHEEL_RADIUS, gt=0, le=API_RADIUS_MAX)


class DescriptorIn(_CamelModel):
    text: str = Field(min_length=1, max_length=200)
    type: DescriptorType
    category: str = Field(min_length=1, max_length=100)
    subcategory: str | None = Field(default=None, max_length=100)
    confidence: float | None = Field(default=None, ge=0, le=1)
    intensity: float | None = Field(default=None, ge=0)

    def to_descriptor(self) -> Descriptor:
        return Descriptor(
            text=self.text,
            type=self.type,
            category=self.category,
            subcategory=self.subcategory or None,
            confidence=self.confidence,
            intensity=self.intensity,
        )


class IngestDescriptorsRequest(_CamelModel):
    """Extraction-service output plus the scope tags to store it under."""

    descriptors: list[DescriptorIn] = Field(min_length=1, max_length=API_INGEST_BATCH_MAX)
    tokens_used: int | None = Field(default=None, alias="tokensUsed", ge=0)
    processing_time_ms: int | None = Field(default=None, alias="processingTimeMs", ge=0)
    user_id: UUID | None = Field(default=None, alias="userId")
    tasting_id: UUID | None = Field(default=None, alias="tastingId")
    item_name: str | None = Field(default=None, alias="itemName", max_length=API_ITEM_NAME_MAX_LEN)
    item_category: str | None = Field(default=None, alias="itemCategory", max_length=100)

    def to_scope_tags(self) -> ScopeTags:
        return ScopeTags(
            user_id=_optional_str(self.user_id),
            tasting_id=_optional_str(self.tasting_id),
            item_name=self.item_name,
            item_category=self.item_category,
        )


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    error_count: int = 1
    invalid_fields: list[str] = []
