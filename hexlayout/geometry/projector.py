from __future__ import annotations

from enum import Enum
import math
from typing import Iterable

from loguru import logger
import numpy as np

from hexlayout.exceptions import LayoutConfigError
from hexlayout.geometry.coordinate import AxialCoordinate

SQRT3 = math.sqrt(3.0)


class Orientation(Enum):
    """Hexagon orientation on screen."""

    POINTY_TOP = "pointy_top"  # Vertex at top
    FLAT_TOP = "flat_top"  # Edge at top (30 degree rotation)


# Axial (q, r) -> pixel (x, y) for a unit tiling radius.
_FORWARD = {
    Orientation.POINTY_TOP: np.array([[SQRT3, SQRT3 / 2.0], [0.0, 1.5]]),
    Orientation.FLAT_TOP: np.array([[1.5, 0.0], [SQRT3 / 2.0, SQRT3]]),
}

# Pixel (x, y) -> fractional axial (q, r) for a unit tiling radius.
_INVERSE = {
    Orientation.POINTY_TOP: np.array([[SQRT3 / 3.0, -1.0 / 3.0], [0.0, 2.0 / 3.0]]),
    Orientation.FLAT_TOP: np.array([[2.0 / 3.0, 0.0], [-1.0 / 3.0, SQRT3 / 3.0]]),
}

# First corner angle in degrees; corners follow every 60 degrees.
_CORNER_OFFSET = {
    Orientation.POINTY_TOP: -30.0,
    Orientation.FLAT_TOP: 0.0,
}


def cube_round(q: float, r: float, s: float | None = None) -> AxialCoordinate:
    """Round fractional cube coordinates to the containing hex.

    Each component is rounded on its own, then the component with the
    largest rounding error is recomputed from the other two so that
    ``q + r + s == 0`` holds exactly.
    """
    if s is None:
        s = -q - r

    rq = int(round(q))
    rr = int(round(r))
    rs = int(round(s))

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs
    # else: s absorbs the error and is implicit in the axial result

    return AxialCoordinate(q=rq, r=rr)


class CoordinateProjector:
    """Bidirectional mapping between axial hexes and screen pixels.

    ``radius`` is the pixel distance from a hex center to one of its vertices.
    """

    def __init__(
        self,
        radius: float,
        orientation: Orientation = Orientation.POINTY_TOP,
    ):
        if radius <= 0:
            raise LayoutConfigError(f"Tiling radius must be positive, got {radius}")
        self.radius = float(radius)
        self.orientation = orientation
        self._forward = _FORWARD[orientation] * self.radius
        self._inverse = _INVERSE[orientation] / self.radius
        logger.debug(
            "CoordinateProjector: radius={} orientation={}",
            self.radius,
            orientation.value,
        )

    @property
    def hex_width(self) -> float:
        """Extent across the flat sides."""
        return SQRT3 * self.radius

    @property
    def hex_height(self) -> float:
        """Extent across opposite vertices."""
        return 2.0 * self.radius

    def to_pixel(
        self,
        coord: AxialCoordinate,
        origin_x: float = 0.0,
        origin_y: float = 0.0,
    ) -> tuple[float, float]:
        x, y = self._forward @ np.array([coord.q, coord.r], dtype=float)
        return (origin_x + float(x), origin_y + float(y))

    def to_pixels(
        self,
        coords: Iterable[AxialCoordinate],
        origin_x: float = 0.0,
        origin_y: float = 0.0,
    ) -> np.ndarray:
        """Project many coordinates at once; returns an ``(N, 2)`` array."""
        axial = np.array([[c.q, c.r] for c in coords], dtype=float).reshape(-1, 2)
        return axial @ self._forward.T + np.array([origin_x, origin_y])

    def to_hex(
        self,
        x: float,
        y: float,
        origin_x: float = 0.0,
        origin_y: float = 0.0,
    ) -> AxialCoordinate:
        """Nearest hex to the pixel ``(x, y)``."""
        q, r = self._inverse @ np.array([x - origin_x, y - origin_y], dtype=float)
        return cube_round(float(q), float(r))

    def corners(
        self,
        coord: AxialCoordinate,
        origin_x: float = 0.0,
        origin_y: float = 0.0,
    ) -> np.ndarray:
        """The 6 polygon vertices of ``coord`` as a ``(6, 2)`` array."""
        cx, cy = self.to_pixel(coord, origin_x, origin_y)
        angles = np.radians(60.0 * np.arange(6) + _CORNER_OFFSET[self.orientation])
        x = cx + self.radius * np.cos(angles)
        y = cy + self.radius * np.sin(angles)
        return np.stack([x, y], axis=-1)
