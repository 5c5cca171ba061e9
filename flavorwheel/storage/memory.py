"""In-memory descriptor store.

Backs the API in development and tests. Rows keep insertion order so the
aggregator's first-seen tie breaking is reproducible across calls.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from flavorwheel.contracts import REQUIRED_SCOPE_FIELD, ScopeFilter, ScopeTags
from flavorwheel.observability.logging import get_logger
from flavorwheel.wheel.errors import InvalidScopeError
from flavorwheel.wheel.types import Descriptor, ScopeType

logger = get_logger(__name__)


class InMemoryDescriptorSource:
    """Thread-safe list of (ScopeTags, Descriptor) rows implementing DescriptorSource."""

    def __init__(self, rows: Iterable[tuple[ScopeTags, Descriptor]] = ()) -> None:
        self._rows: list[tuple[ScopeTags, Descriptor]] = list(rows)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._rows)

    def add(self, descriptors: Iterable[Descriptor], tags: ScopeTags) -> int:
        """Append descriptors under ``tags``. Returns the number stored."""
        new_rows = [(tags, d) for d in descriptors]
        with self._lock:
            self._rows.extend(new_rows)
        return len(new_rows)

    def fetch(self, scope_type: ScopeType, scope_filter: ScopeFilter) -> list[Descriptor]:
        field_name = REQUIRED_SCOPE_FIELD[scope_type]
        with self._lock:
            rows = list(self._rows)

        if field_name is None:
            return [descriptor for _, descriptor in rows]

        wanted = getattr(scope_filter, field_name)
        if wanted is None:
            raise InvalidScopeError(
                f"scope '{scope_type.value}' requires scope filter '{field_name}'"
            )
        return [descriptor for tags, descriptor in rows if getattr(tags, field_name) == wanted]


def _tags_from_row(row: dict[str, Any]) -> ScopeTags:
    return ScopeTags(
        user_id=row.get("userId"),
        tasting_id=row.get("tastingId"),
        item_name=row.get("itemName"),
        item_category=row.get("itemCategory"),
    )


def load_descriptor_file(path: str | Path) -> InMemoryDescriptorSource:
    """
    Seed a store from a JSON file: a list of descriptor rows, each optionally
    carrying ``userId``/``tastingId``/``itemName``/``itemCategory`` tags.

    Raises:
        FileNotFoundError: ``path`` does not exist
        ValueError: the file is not a JSON list or a row is invalid
    """
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"Descriptor file {path} must contain a JSON list")

    rows = [(_tags_from_row(row), Descriptor.from_dict(row)) for row in payload]
    logger.info("Loaded %d descriptor rows from %s", len(rows), path)
    return InMemoryDescriptorSource(rows)
