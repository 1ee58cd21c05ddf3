"""Interfaces of the external collaborators feeding the placement core.

Item discovery, icon colors and usage history live outside the placement
core. Callers plug implementations of these protocols into :class:`LayoutSession`.
"""

from __future__ import annotations

from typing import Any, Protocol

from hexlayout.layout.models import Item

RGB = tuple[int, int, int]


class ItemSource(Protocol):
    def load_items(self) -> list[Item]:
        """Identity, usage stats and color bucket for every launchable item."""
        ...


class ColorClassifier(Protocol):
    def classify(self, icon: Any) -> tuple[RGB, int]:
        """Representative color and bucket id in ``[0, bucket_count)``."""
        ...


class UsageStore(Protocol):
    def get(self, item_key: str) -> tuple[int, int]:
        """``(usage_count, last_used_at)`` for ``item_key``; ``(0, 0)`` if unknown."""
        ...
