from __future__ import annotations

from typing import Callable

import pytest

from hexlayout.layout.models import Item
from hexlayout.storage.position_storage import MemoryPositionStore


@pytest.fixture
def make_item() -> Callable[..., Item]:
    def _make(
        key: str,
        usage_count: int = 0,
        last_used_at: int = 0,
        bucket_id: int = 0,
        label: str | None = None,
        notification_count: int = 0,
    ) -> Item:
        return Item(
            key=key,
            label=label if label is not None else key,
            usage_count=usage_count,
            last_used_at=last_used_at,
            bucket_id=bucket_id,
            notification_count=notification_count,
        )

    return _make


@pytest.fixture
def memory_store() -> MemoryPositionStore:
    return MemoryPositionStore()
