from hexlayout.geometry.coordinate import NEIGHBOR_DELTAS, ORIGIN, AxialCoordinate
from hexlayout.geometry.projector import CoordinateProjector, Orientation, cube_round

__all__ = [
    "AxialCoordinate",
    "CoordinateProjector",
    "NEIGHBOR_DELTAS",
    "ORIGIN",
    "Orientation",
    "cube_round",
]
