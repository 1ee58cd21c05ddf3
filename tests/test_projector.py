import math

import numpy as np
import pytest

from hexlayout.exceptions import LayoutConfigError
from hexlayout.geometry.coordinate import ORIGIN, AxialCoordinate
from hexlayout.geometry.projector import CoordinateProjector, Orientation, cube_round
from hexlayout.layout.spiral import SpiralEnumerator

ORIENTATIONS = [Orientation.POINTY_TOP, Orientation.FLAT_TOP]


def test_pointy_top_to_pixel():
    projector = CoordinateProjector(2.0, Orientation.POINTY_TOP)
    x, y = projector.to_pixel(AxialCoordinate(q=1, r=0))
    assert x == pytest.approx(2.0 * math.sqrt(3))
    assert y == pytest.approx(0.0)

    x, y = projector.to_pixel(AxialCoordinate(q=0, r=2), origin_x=10.0, origin_y=5.0)
    assert x == pytest.approx(10.0 + 2.0 * math.sqrt(3))
    assert y == pytest.approx(5.0 + 6.0)


def test_flat_top_to_pixel():
    projector = CoordinateProjector(2.0, Orientation.FLAT_TOP)
    x, y = projector.to_pixel(AxialCoordinate(q=1, r=0))
    assert x == pytest.approx(3.0)
    assert y == pytest.approx(math.sqrt(3))


@pytest.mark.parametrize("orientation", ORIENTATIONS)
def test_slot_centers_map_back_to_their_hex(orientation):
    projector = CoordinateProjector(10.0, orientation)
    for slot in SpiralEnumerator().generate(5, 6):
        x, y = projector.to_pixel(slot.coordinate, 3.0, -7.0)
        assert projector.to_hex(x, y, 3.0, -7.0) == slot.coordinate


@pytest.mark.parametrize("orientation", ORIENTATIONS)
def test_random_pixels_land_in_nearest_hex(orientation):
    radius = 12.5
    projector = CoordinateProjector(radius, orientation)
    rng = np.random.default_rng(7)

    for x, y in rng.uniform(-300.0, 300.0, size=(500, 2)):
        hex_ = projector.to_hex(x, y)
        cx, cy = projector.to_pixel(hex_)
        own = math.hypot(x - cx, y - cy)
        assert own <= radius + 1e-9
        for neighbor in hex_.neighbors():
            nx, ny = projector.to_pixel(neighbor)
            assert own <= math.hypot(x - nx, y - ny) + 1e-9


def test_cube_round_keeps_integer_points():
    for q, r in [(0, 0), (3, -2), (-4, 1)]:
        assert cube_round(float(q), float(r)) == AxialCoordinate(q=q, r=r)


def test_cube_round_recomputes_component_with_largest_error():
    # Naive rounding gives (0, 0, -1), which is not a lattice point.
    assert cube_round(0.45, 0.3) == AxialCoordinate(q=1, r=0)
    assert cube_round(0.3, 0.45) == AxialCoordinate(q=0, r=1)


def test_cube_round_lets_s_absorb_error():
    assert cube_round(2.1, -0.9) == AxialCoordinate(q=2, r=-1)
    assert cube_round(0.6, -0.1) == AxialCoordinate(q=1, r=0)


def test_cube_round_accepts_explicit_s():
    assert cube_round(0.45, 0.3, -0.75) == cube_round(0.45, 0.3)


@pytest.mark.parametrize("radius", [0.0, -1.0])
def test_non_positive_radius_rejected(radius):
    with pytest.raises(LayoutConfigError):
        CoordinateProjector(radius)


def test_to_pixels_matches_to_pixel():
    projector = CoordinateProjector(8.0, Orientation.FLAT_TOP)
    coords = [ORIGIN, AxialCoordinate(q=2, r=-1), AxialCoordinate(q=-3, r=3)]
    pixels = projector.to_pixels(coords, 1.0, 2.0)

    assert pixels.shape == (3, 2)
    for coord, (x, y) in zip(coords, pixels):
        assert (x, y) == pytest.approx(projector.to_pixel(coord, 1.0, 2.0))


def test_to_pixels_empty():
    assert CoordinateProjector(8.0).to_pixels([]).shape == (0, 2)


@pytest.mark.parametrize(
    "orientation,first_angle", [(Orientation.POINTY_TOP, -30.0), (Orientation.FLAT_TOP, 0.0)]
)
def test_corners_lie_on_circumradius(orientation, first_angle):
    projector = CoordinateProjector(10.0, orientation)
    coord = AxialCoordinate(q=1, r=-2)
    cx, cy = projector.to_pixel(coord)
    corners = projector.corners(coord)

    assert corners.shape == (6, 2)
    distances = np.hypot(corners[:, 0] - cx, corners[:, 1] - cy)
    assert np.allclose(distances, 10.0)
    angle = math.degrees(math.atan2(corners[0, 1] - cy, corners[0, 0] - cx))
    assert angle == pytest.approx(first_angle)


def test_hex_extents():
    projector = CoordinateProjector(10.0)
    assert projector.hex_width == pytest.approx(10.0 * math.sqrt(3))
    assert projector.hex_height == pytest.approx(20.0)
