from __future__ import annotations

import time
from typing import Callable, Optional

from loguru import logger

from hexlayout.layout.models import PositionState
from hexlayout.layout.placement import PlacementResult
from hexlayout.storage.position_storage import PositionStore

DEFAULT_MAX_MOVE = 2

PreviousIndexLookup = Callable[[str], Optional[int]]


class PositionStabilizer:
    """Bounds how far an item's slot index may drift between passes.

    Each pass moves an item at most ``max_move`` slots toward its freshly
    ranked target. Indices live in memory until :meth:`commit` writes them to
    the store.
    """

    def __init__(
        self,
        store: PositionStore,
        namespace: str = "default",
        max_move: int = DEFAULT_MAX_MOVE,
    ):
        if max_move < 0:
            raise ValueError(f"max_move must be >= 0, got {max_move}")
        self.store = store
        self.namespace = namespace
        self.max_move = max_move
        self._indices: dict[str, int] | None = None

    @property
    def indices(self) -> dict[str, int]:
        """Tracked indices, loaded from the store on first access."""
        if self._indices is None:
            state = self.store.load(self.namespace)
            self._indices = dict(state.indices)
            logger.debug(
                "PositionStabilizer[{}]: loaded {} tracked positions",
                self.namespace,
                len(self._indices),
            )
        return self._indices

    def adjust(
        self,
        item_key: str,
        raw_target_index: int,
        previous_index_lookup: PreviousIndexLookup | None = None,
    ) -> int:
        """Committed index for ``item_key`` given its raw target this pass."""
        lookup = previous_index_lookup or self.indices.get
        previous = lookup(item_key)
        if previous is None:
            previous = raw_target_index

        delta = raw_target_index - previous
        clamped = max(-self.max_move, min(delta, self.max_move))
        committed = previous + clamped

        self.indices[item_key] = committed
        if clamped != delta:
            logger.debug(
                "PositionStabilizer[{}]: {} {} -> {} (target {})",
                self.namespace,
                item_key,
                previous,
                committed,
                raw_target_index,
            )
        return committed

    def adjust_result(self, result: PlacementResult) -> dict[str, int]:
        """Adjust every real item of ``result``; returns key -> committed index."""
        return {
            item.key: self.adjust(item.key, index)
            for index, item in enumerate(result.items)
            if not item.is_placeholder
        }

    def snapshot(self) -> PositionState:
        return PositionState(
            namespace=self.namespace,
            indices=dict(self.indices),
            updated_at=int(time.time() * 1000),
        )

    def commit(self) -> None:
        state = self.snapshot()
        self.store.save(self.namespace, state)
        logger.debug(
            "PositionStabilizer[{}]: committed {} positions",
            self.namespace,
            len(state.indices),
        )

    def reset(self) -> None:
        self._indices = {}
        self.store.delete(self.namespace)
        logger.info("PositionStabilizer[{}]: positions reset", self.namespace)
