from __future__ import annotations

from typing import Any, Iterable, Mapping

from loguru import logger
import numpy as np

from hexlayout.collaborators import ColorClassifier, ItemSource, UsageStore
from hexlayout.config.models import LayoutConfig, default_max_rings
from hexlayout.geometry.projector import CoordinateProjector
from hexlayout.layout.models import Item
from hexlayout.layout.placement import PlacementEngine, PlacementResult
from hexlayout.layout.stabilizer import PositionStabilizer
from hexlayout.storage.position_storage import MemoryPositionStore, PositionStore


def apply_usage(items: Iterable[Item], usage: UsageStore) -> list[Item]:
    """Copy of ``items`` with usage counters refreshed from ``usage``."""
    refreshed = []
    for item in items:
        count, last_used_at = usage.get(item.key)
        refreshed.append(
            item.model_copy(update={"usage_count": count, "last_used_at": last_used_at})
        )
    return refreshed


def apply_buckets(
    items: Iterable[Item],
    icons: Mapping[str, Any],
    classifier: ColorClassifier,
) -> list[Item]:
    """Copy of ``items`` with bucket ids taken from each icon's dominant color.

    Items without an entry in ``icons`` keep their current bucket.
    """
    classified = []
    for item in items:
        icon = icons.get(item.key)
        if icon is None:
            classified.append(item)
            continue
        _, bucket_id = classifier.classify(icon)
        classified.append(item.model_copy(update={"bucket_id": bucket_id}))
    return classified


class LayoutSession:
    """Owns the item list, hidden set and position state of one launcher grid.

    Every refresh filters hidden items and the active search query, runs a
    placement pass and records bounded positions through the stabilizer.
    Nothing here is process-wide: independent sessions never share state.
    """

    def __init__(
        self,
        config: LayoutConfig | None = None,
        store: PositionStore | None = None,
        source: ItemSource | None = None,
    ):
        self.config = config or LayoutConfig()
        self.engine = PlacementEngine(self.config)
        self.projector = CoordinateProjector(
            self.config.tile_radius, self.config.orientation
        )
        self.stabilizer = PositionStabilizer(
            store or MemoryPositionStore(),
            namespace=self.config.position_namespace,
            max_move=self.config.max_move_per_pass,
        )
        self.source = source
        self.hidden_keys: set[str] = set(self.config.hidden_keys)
        self.query = ""
        self.committed_indices: dict[str, int] = {}
        self._all_items: list[Item] = []
        self._result = PlacementResult()

    # -------------------------- Item list --------------------------

    @property
    def result(self) -> PlacementResult:
        return self._result

    def load(self) -> PlacementResult:
        """Pull a fresh item list from the source and place it."""
        if self.source is None:
            raise RuntimeError("LayoutSession has no ItemSource to load from")
        return self.set_items(self.source.load_items())

    def set_items(self, items: Iterable[Item]) -> PlacementResult:
        self._all_items = list(items)
        logger.info("LayoutSession: {} items loaded", len(self._all_items))
        return self.refresh()

    def visible_items(self) -> list[Item]:
        query = self.query.casefold()
        return [
            item
            for item in self._all_items
            if item.key not in self.hidden_keys
            and (not query or query in item.label.casefold())
        ]

    def refresh(self) -> PlacementResult:
        visible = self.visible_items()
        slots = self.engine.generate_slots(
            max(self.config.max_rings, default_max_rings(len(visible)))
        )
        self._result = self.engine.place(visible, slots)
        self.committed_indices = self.stabilizer.adjust_result(self._result)
        logger.debug(
            "LayoutSession: refresh -> {} ({} hidden, query='{}')",
            self._result.stats.to_dict(),
            len(self.hidden_keys),
            self.query,
        )
        return self._result

    # -------------------------- Filters --------------------------

    def search(self, query: str) -> PlacementResult:
        self.query = query.strip()
        return self.refresh()

    def hide(self, key: str) -> PlacementResult:
        self.hidden_keys.add(key)
        return self.refresh()

    def unhide(self, key: str) -> PlacementResult:
        self.hidden_keys.discard(key)
        return self.refresh()

    # -------------------------- Geometry --------------------------

    def pixel_positions(self, origin_x: float = 0.0, origin_y: float = 0.0) -> np.ndarray:
        """Pixel centers of every result index, as an ``(N, 2)`` array."""
        return self.projector.to_pixels(
            (slot.coordinate for slot in self._result.slots), origin_x, origin_y
        )

    def item_at(
        self,
        x: float,
        y: float,
        origin_x: float = 0.0,
        origin_y: float = 0.0,
    ) -> Item | None:
        """Hit-test a tap; None when it lands on empty space or a placeholder."""
        coord = self.projector.to_hex(x, y, origin_x, origin_y)
        return self._result.item_at(coord)

    # -------------------------- Persistence --------------------------

    def commit(self) -> None:
        self.stabilizer.commit()

    def reset_positions(self) -> None:
        self.stabilizer.reset()
        self.committed_indices = {}
