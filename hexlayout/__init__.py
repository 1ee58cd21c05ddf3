"""hexlayout – spiral placement of launcher items on a hexagonal grid."""

from hexlayout.config.loader import build_layout_config, load_layout_config
from hexlayout.config.models import LayoutConfig, default_max_rings
from hexlayout.exceptions import (
    BucketContractError,
    HexLayoutError,
    LayoutConfigError,
    PlacementError,
    StorageError,
)
from hexlayout.geometry.coordinate import ORIGIN, AxialCoordinate
from hexlayout.geometry.projector import CoordinateProjector, Orientation, cube_round
from hexlayout.layout.models import Item, PlacementStats, PositionState
from hexlayout.layout.placement import PlacementEngine, PlacementResult
from hexlayout.layout.ranking import RankKey, build_ranker
from hexlayout.layout.spiral import PartitionStrategy, SpiralEnumerator, SpiralSlot
from hexlayout.layout.stabilizer import PositionStabilizer
from hexlayout.runner.session import LayoutSession, apply_buckets, apply_usage
from hexlayout.storage.position_storage import (
    JsonFilePositionStore,
    MemoryPositionStore,
    PositionStore,
)

__version__ = "0.1.0"

__all__ = [
    "AxialCoordinate",
    "BucketContractError",
    "CoordinateProjector",
    "HexLayoutError",
    "Item",
    "JsonFilePositionStore",
    "LayoutConfig",
    "LayoutConfigError",
    "LayoutSession",
    "MemoryPositionStore",
    "ORIGIN",
    "Orientation",
    "PartitionStrategy",
    "PlacementEngine",
    "PlacementError",
    "PlacementResult",
    "PlacementStats",
    "PositionStabilizer",
    "PositionState",
    "PositionStore",
    "RankKey",
    "SpiralEnumerator",
    "SpiralSlot",
    "StorageError",
    "apply_buckets",
    "apply_usage",
    "build_layout_config",
    "build_ranker",
    "cube_round",
    "default_max_rings",
    "load_layout_config",
]
