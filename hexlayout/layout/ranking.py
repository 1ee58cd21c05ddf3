from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable

from loguru import logger

from hexlayout.layout.models import Item


class RankKey(Enum):
    """Orderings available for the placement pass."""

    LABEL = "label"
    USAGE_FREQUENCY = "usage_frequency"
    USAGE_TIME = "usage_time"
    NOTIFICATION_COUNT = "notification_count"
    HYBRID = "hybrid"  # Most used at the center, then most recent, then usage


class Ranker(ABC):
    """Orders real items best-first. Ties keep their input order."""

    @abstractmethod
    def __call__(self, items: list[Item]) -> list[Item]:
        pass


class KeyRanker(Ranker):
    """Stable sort on a single sort key (smaller key = better)."""

    def __init__(self, name: str, sort_key: Callable[[Item], Any]):
        self.name = name
        self.sort_key = sort_key

    def __call__(self, items: list[Item]) -> list[Item]:
        ranked = sorted(items, key=self.sort_key)
        logger.debug("KeyRanker[{}]: ranked {} items", self.name, len(ranked))
        return ranked


class LabelRanker(KeyRanker):
    def __init__(self):
        super().__init__("label", lambda item: item.label.casefold())


class UsageFrequencyRanker(KeyRanker):
    def __init__(self):
        super().__init__("usage_frequency", lambda item: -item.usage_count)


class UsageTimeRanker(KeyRanker):
    def __init__(self):
        super().__init__("usage_time", lambda item: -item.last_used_at)


class NotificationCountRanker(KeyRanker):
    def __init__(self):
        super().__init__("notification_count", lambda item: -item.notification_count)


class HybridRanker(Ranker):
    """Usage/recency blend.

    The ``head`` most used items come first, followed by the ``recent`` most
    recently used of the rest; everything else follows by usage.
    """

    def __init__(self, head: int = 1, recent: int = 18):
        if head < 0 or recent < 0:
            raise ValueError(f"head and recent must be >= 0, got {head}, {recent}")
        self.head = head
        self.recent = recent
        self._by_usage = UsageFrequencyRanker()
        self._by_time = UsageTimeRanker()

    def __call__(self, items: list[Item]) -> list[Item]:
        by_usage = self._by_usage(items)
        head = by_usage[: self.head]
        rest = by_usage[self.head :]

        # Restore input order before the recency sort so ties stay stable.
        position = {id(item): i for i, item in enumerate(items)}
        rest_in_input_order = sorted(rest, key=lambda item: position[id(item)])
        recent = self._by_time(rest_in_input_order)[: self.recent]
        recent_ids = {id(item) for item in recent}
        tail = [item for item in rest if id(item) not in recent_ids]

        logger.debug(
            "HybridRanker: head={} recent={} tail={}",
            len(head),
            len(recent),
            len(tail),
        )
        return head + recent + tail


def build_ranker(rank_key: RankKey) -> Ranker:
    if rank_key == RankKey.LABEL:
        return LabelRanker()
    if rank_key == RankKey.USAGE_FREQUENCY:
        return UsageFrequencyRanker()
    if rank_key == RankKey.USAGE_TIME:
        return UsageTimeRanker()
    if rank_key == RankKey.NOTIFICATION_COUNT:
        return NotificationCountRanker()
    if rank_key == RankKey.HYBRID:
        return HybridRanker()
    raise ValueError(f"Unknown rank key: {rank_key}")
