from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from hexlayout.geometry.projector import Orientation
from hexlayout.layout.ranking import RankKey
from hexlayout.layout.spiral import PartitionStrategy

# Bucket counts observed in the field: 6 hue sectors, or 8 hues + white,
# black and a vendor bucket.
BUCKET_COUNT_HUES = 6
BUCKET_COUNT_EXTENDED = 11


def default_max_rings(item_count: int) -> int:
    """Spiral depth that comfortably holds ``item_count`` items."""
    return max(25, item_count // 6 + 5)


class LayoutConfig(BaseModel):
    """Configuration options controlling a placement pass."""

    bucket_count: int = Field(
        default=BUCKET_COUNT_HUES, gt=0, description="Number of angular sectors"
    )
    inner_size: int = Field(
        default=7, ge=0, description="Top-ranked items exempt from bucketing"
    )
    max_rings: int = Field(default=25, gt=0, description="Initial spiral depth")
    rank_key: RankKey = Field(default=RankKey.USAGE_FREQUENCY)
    partition: PartitionStrategy = Field(default=PartitionStrategy.WINDMILL)
    strict_buckets: bool = Field(
        default=False,
        description="Reject out-of-range bucket ids instead of clamping them",
    )
    max_move_per_pass: int = Field(
        default=2, ge=0, description="Max slots an item may move between passes"
    )
    tile_radius: float = Field(default=96.0, gt=0)
    orientation: Orientation = Field(default=Orientation.POINTY_TOP)
    position_namespace: str = Field(
        default="default", min_length=1, pattern=r"^[a-zA-Z0-9_.-]+$"
    )
    hidden_keys: frozenset[str] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True, extra="forbid")

