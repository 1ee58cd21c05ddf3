from __future__ import annotations

from collections import deque
from typing import Sequence

from loguru import logger
from pydantic import BaseModel, Field, PrivateAttr

from hexlayout.config.models import LayoutConfig
from hexlayout.exceptions import BucketContractError, PlacementError
from hexlayout.geometry.coordinate import AxialCoordinate
from hexlayout.layout.models import Item, PlacementStats
from hexlayout.layout.ranking import Ranker, RankKey, build_ranker
from hexlayout.layout.spiral import SpiralEnumerator, SpiralSlot, spiral_length

# Each extension doubles the spiral depth, so this bound is never reached by
# realistic item counts.
MAX_SPIRAL_EXTENSIONS = 16


class PlacementResult(BaseModel):
    """Items in spiral order; ``items[i]`` occupies ``slots[i]``."""

    items: list[Item] = Field(default_factory=list)
    slots: list[SpiralSlot] = Field(default_factory=list)
    stats: PlacementStats = Field(default_factory=PlacementStats)

    _by_coordinate: dict[AxialCoordinate, int] | None = PrivateAttr(default=None)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Item:
        return self.items[index]

    def real_items(self) -> list[Item]:
        return [item for item in self.items if not item.is_placeholder]

    def keys(self) -> list[str]:
        return [item.key for item in self.real_items()]

    def coordinate_of(self, index: int) -> AxialCoordinate:
        return self.slots[index].coordinate

    def index_of(self, key: str) -> int | None:
        for i, item in enumerate(self.items):
            if not item.is_placeholder and item.key == key:
                return i
        return None

    def index_at(self, coord: AxialCoordinate) -> int | None:
        """Result index occupying ``coord``, or None for empty space."""
        if self._by_coordinate is None:
            self._by_coordinate = {
                slot.coordinate: i for i, slot in enumerate(self.slots)
            }
        return self._by_coordinate.get(coord)

    def item_at(self, coord: AxialCoordinate) -> Item | None:
        """Real item at ``coord``; None for placeholders and misses."""
        index = self.index_at(coord)
        if index is None:
            return None
        item = self.items[index]
        return None if item.is_placeholder else item


class PlacementEngine:
    """Assigns ranked items to spiral slots.

    The top ``inner_size`` items fill the core in rank order. Everything else
    is queued per color bucket and consumed by the spiral sector that serves
    that bucket; sectors whose queue is exhausted receive placeholders. Once
    every queue is empty the current ring is padded out and the pass stops.
    """

    def __init__(
        self,
        config: LayoutConfig | None = None,
        enumerator: SpiralEnumerator | None = None,
    ):
        self.config = config or LayoutConfig()
        self.enumerator = enumerator or SpiralEnumerator(self.config.partition)
        self._ranker = build_ranker(self.config.rank_key)
        # Generated spirals keyed by (max_rings, bucket_count).
        self._slot_cache: dict[tuple[int, int], list[SpiralSlot]] = {}

    # -------------------------- Public API --------------------------

    def generate_slots(self, max_rings: int | None = None) -> list[SpiralSlot]:
        key = (max_rings or self.config.max_rings, self.config.bucket_count)
        slots = self._slot_cache.get(key)
        if slots is None:
            slots = self.enumerator.generate(*key)
            self._slot_cache[key] = slots
        return list(slots)

    def place(
        self,
        items: Sequence[Item],
        slots: Sequence[SpiralSlot] | None = None,
        rank: RankKey | Ranker | None = None,
    ) -> PlacementResult:
        real = [item for item in items if not item.is_placeholder]
        if not real:
            logger.debug("PlacementEngine: no items, nothing placed")
            return PlacementResult()

        bucket_count = self.config.bucket_count
        inner_size = self.config.inner_size
        ranker = self._resolve_ranker(rank)
        stats = PlacementStats()

        ranked = ranker(real)
        inner = ranked[:inner_size]
        outer = ranked[inner_size:]

        queues: list[deque[Item]] = [deque() for _ in range(bucket_count)]
        for item in outer:
            bucket = self._bucket_of(item, stats)
            queues[bucket].append(item)
        # Inner items ignore buckets; only in-range ids are counted.
        for item in inner:
            if 0 <= item.bucket_id < bucket_count:
                bucket = item.bucket_id
                stats.bucket_sizes[bucket] = stats.bucket_sizes.get(bucket, 0) + 1
        for bucket, queue in enumerate(queues):
            if queue:
                stats.bucket_sizes[bucket] = stats.bucket_sizes.get(bucket, 0) + len(queue)

        slot_list = list(slots) if slots is not None else self.generate_slots()
        placeholder = Item.placeholder()
        placed: list[Item] = []

        for item in inner:
            slot_list = self._ensure_slot(slot_list, len(placed), stats)
            placed.append(item)

        remaining = len(outer)
        while remaining:
            slot_list = self._ensure_slot(slot_list, len(placed), stats)
            label = slot_list[len(placed)].sector_label
            if 0 <= label < bucket_count and queues[label]:
                placed.append(queues[label].popleft())
                remaining -= 1
            else:
                placed.append(placeholder)

        # Never leave a ring partially populated.
        last_ring = slot_list[len(placed) - 1].ring
        ring_end = spiral_length(last_ring)
        while len(placed) < ring_end:
            slot_list = self._ensure_slot(slot_list, len(placed), stats)
            placed.append(placeholder)

        stats.real_items = len(real)
        stats.placeholders = len(placed) - len(real)
        stats.rings_used = last_ring + 1

        logger.debug(
            "PlacementEngine: placed {} items in {} slots ({} rings, {} placeholders, {} buckets)",
            stats.real_items,
            len(placed),
            stats.rings_used,
            stats.placeholders,
            bucket_count,
        )
        return PlacementResult(
            items=placed, slots=slot_list[: len(placed)], stats=stats
        )

    # -------------------------- Helpers --------------------------

    def _resolve_ranker(self, rank: RankKey | Ranker | None) -> Ranker:
        if rank is None:
            return self._ranker
        if isinstance(rank, RankKey):
            return build_ranker(rank)
        return rank

    def _bucket_of(self, item: Item, stats: PlacementStats) -> int:
        bucket_count = self.config.bucket_count
        bucket = item.bucket_id
        if 0 <= bucket < bucket_count:
            return bucket

        if self.config.strict_buckets:
            raise BucketContractError(
                f"Item {item.key} has bucket {bucket}, expected [0, {bucket_count})"
            )
        clamped = max(0, min(bucket, bucket_count - 1))
        stats.clamped_buckets += 1
        logger.warning(
            "PlacementEngine: item {} bucket {} out of range [0, {}), clamped to {}",
            item.key,
            bucket,
            bucket_count,
            clamped,
        )
        return clamped

    def _ensure_slot(
        self,
        slot_list: list[SpiralSlot],
        index: int,
        stats: PlacementStats,
    ) -> list[SpiralSlot]:
        """Return a slot list long enough to hold ``index``, extending the spiral."""
        while index >= len(slot_list):
            if stats.spiral_extensions >= MAX_SPIRAL_EXTENSIONS:
                raise PlacementError(
                    f"Spiral exhausted after {stats.spiral_extensions} extensions"
                )
            current_rings = slot_list[-1].ring if slot_list else 0
            rings = max(current_rings * 2, self.config.max_rings, 1)
            deeper = self.generate_slots(rings)
            slot_list = slot_list + deeper[len(slot_list) :]
            stats.spiral_extensions += 1
            logger.debug(
                "PlacementEngine: spiral extended from {} to {} rings ({} slots)",
                current_rings,
                rings,
                len(slot_list),
            )
        return slot_list
