from __future__ import annotations

from enum import Enum
import math

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from hexlayout.exceptions import LayoutConfigError
from hexlayout.geometry.coordinate import ORIGIN, AxialCoordinate
from hexlayout.geometry.projector import CoordinateProjector, Orientation

CORE_LABEL = -1

# Counter-clockwise edge walk starting from the rightmost hex (n, 0).
RING_DIRECTIONS: tuple[AxialCoordinate, ...] = (
    AxialCoordinate(q=-1, r=1),  # down-left
    AxialCoordinate(q=-1, r=0),  # left
    AxialCoordinate(q=0, r=-1),  # up-left
    AxialCoordinate(q=1, r=-1),  # up-right
    AxialCoordinate(q=1, r=0),  # right
    AxialCoordinate(q=0, r=1),  # down-right
)


class PartitionStrategy(Enum):
    """How each ring is divided into bucket sectors."""

    WINDMILL = "windmill"  # Contiguous arcs proportional to ring size
    ROUND_ROBIN = "round_robin"  # Buckets interleaved hex by hex
    ANGULAR = "angular"  # Fixed angular wedges, uneven per ring


class SpiralSlot(BaseModel):
    """One position of the spiral visiting order."""

    index: int = Field(ge=0)
    coordinate: AxialCoordinate
    sector_label: int = Field(
        ge=CORE_LABEL, description="Bucket served by this slot, -1 for the core"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def ring(self) -> int:
        return self.coordinate.ring


def spiral_length(max_rings: int) -> int:
    """Number of slots in rings ``0..max_rings``."""
    return 1 + 3 * max_rings * (max_rings + 1)


class SpiralEnumerator:
    """Canonical ring-by-ring visiting order of the hex lattice.

    Every ring from 1 outward is split among ``bucket_count`` sectors by the
    chosen :class:`PartitionStrategy`. Generation is prefix-stable: a deeper
    spiral always starts with the shallower one.
    """

    def __init__(self, strategy: PartitionStrategy = PartitionStrategy.WINDMILL):
        self.strategy = strategy
        # Unit projector for angular sectors; any radius gives the same angles.
        self._projector = CoordinateProjector(1.0, Orientation.POINTY_TOP)

    def generate(self, max_rings: int, bucket_count: int) -> list[SpiralSlot]:
        if max_rings <= 0:
            raise LayoutConfigError(f"max_rings must be positive, got {max_rings}")
        if bucket_count <= 0:
            raise LayoutConfigError(
                f"bucket_count must be positive, got {bucket_count}"
            )

        slots = [SpiralSlot(index=0, coordinate=ORIGIN, sector_label=CORE_LABEL)]

        for ring in range(1, max_rings + 1):
            hex_ = AxialCoordinate(q=ring, r=0)
            position_in_ring = 0
            for direction in RING_DIRECTIONS:
                for _ in range(ring):
                    label = self.sector_label(hex_, ring, position_in_ring, bucket_count)
                    slots.append(
                        SpiralSlot(index=len(slots), coordinate=hex_, sector_label=label)
                    )
                    hex_ = hex_ + direction
                    position_in_ring += 1

        logger.debug(
            "SpiralEnumerator: {} rings, {} buckets, strategy={} -> {} slots",
            max_rings,
            bucket_count,
            self.strategy.value,
            len(slots),
        )
        return slots

    def sector_label(
        self,
        coord: AxialCoordinate,
        ring: int,
        position_in_ring: int,
        bucket_count: int,
    ) -> int:
        if ring == 0:
            return CORE_LABEL
        if self.strategy == PartitionStrategy.WINDMILL:
            return (position_in_ring * bucket_count) // (ring * 6) % bucket_count
        if self.strategy == PartitionStrategy.ROUND_ROBIN:
            return position_in_ring % bucket_count
        if self.strategy == PartitionStrategy.ANGULAR:
            return self._angular_label(coord, bucket_count)
        raise LayoutConfigError(f"Unknown partition strategy {self.strategy}")

    def _angular_label(self, coord: AxialCoordinate, bucket_count: int) -> int:
        x, y = self._projector.to_pixel(coord)
        theta = math.atan2(y, x) % (2.0 * math.pi)
        # Nudge so hexes lying exactly on a wedge boundary open the next wedge.
        return int(theta * bucket_count / (2.0 * math.pi) + 1e-9) % bucket_count
