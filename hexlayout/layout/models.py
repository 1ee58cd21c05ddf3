from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

PLACEHOLDER_KEY = "_empty_"


class Item(BaseModel):
    """A launchable shortcut as seen by the placement engine."""

    key: str = Field(min_length=1, description="Stable identity (package or shortcut id)")
    label: str = Field(default="", description="Human-readable name")
    usage_count: int = Field(default=0, ge=0, description="Launches in the usage window")
    last_used_at: int = Field(
        default=0, ge=0, description="Monotonic last-use timestamp, 0 = never"
    )
    bucket_id: int = Field(default=0, description="Color bucket from the classifier")
    notification_count: int = Field(default=0, ge=0, description="Active notifications")
    is_placeholder: bool = Field(default=False, description="Sentinel for an empty slot")

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @classmethod
    def placeholder(cls) -> Item:
        return cls(key=PLACEHOLDER_KEY, is_placeholder=True)


class PlacementStats(BaseModel):
    """Summary of a single placement pass."""

    real_items: int = Field(default=0, ge=0)
    placeholders: int = Field(default=0, ge=0)
    rings_used: int = Field(default=0, ge=0)
    spiral_extensions: int = Field(
        default=0, ge=0, description="Times the spiral had to be regenerated deeper"
    )
    clamped_buckets: int = Field(
        default=0, ge=0, description="Items whose bucket id was out of range"
    )
    bucket_sizes: dict[int, int] = Field(default_factory=dict)

    @computed_field
    @property
    def total_slots(self) -> int:
        return self.real_items + self.placeholders

    @computed_field
    @property
    def fill_ratio(self) -> float:
        if self.total_slots == 0:
            return 0.0
        return self.real_items / self.total_slots

    def to_dict(self) -> dict[str, Any]:
        return {
            "real_items": self.real_items,
            "placeholders": self.placeholders,
            "rings_used": self.rings_used,
            "fill_ratio": round(self.fill_ratio, 3),
            "spiral_extensions": self.spiral_extensions,
            "clamped_buckets": self.clamped_buckets,
            "bucket_sizes": dict(self.bucket_sizes),
        }


class PositionState(BaseModel):
    """Last committed slot index per item key, persisted between passes."""

    namespace: str = Field(default="default", min_length=1)
    indices: dict[str, int] = Field(default_factory=dict)
    updated_at: int = Field(default=0, ge=0, description="Commit time, epoch ms")

    def get(self, key: str) -> int | None:
        return self.indices.get(key)
