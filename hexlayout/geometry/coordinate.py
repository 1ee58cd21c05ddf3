from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Axial deltas of the six edge-sharing neighbors.
NEIGHBOR_DELTAS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, -1),
    (-1, 1),
)


class AxialCoordinate(BaseModel):
    """Point on the axial hex lattice.

    ``s`` is the implicit third cube coordinate, so ``q + r + s == 0`` always
    holds. Equality and hashing are structural on ``(q, r)``.
    """

    q: int = Field(description="Column axis")
    r: int = Field(description="Row axis")

    model_config = ConfigDict(frozen=True)

    @property
    def s(self) -> int:
        return -self.q - self.r

    @property
    def ring(self) -> int:
        """Cube distance from the origin; ring 0 is the origin itself."""
        return max(abs(self.q), abs(self.r), abs(self.s))

    def neighbors(self) -> list[AxialCoordinate]:
        return [AxialCoordinate(q=self.q + dq, r=self.r + dr) for dq, dr in NEIGHBOR_DELTAS]

    def distance_to(self, other: AxialCoordinate) -> int:
        return (self - other).ring

    def as_tuple(self) -> tuple[int, int]:
        return (self.q, self.r)

    def __add__(self, other: AxialCoordinate) -> AxialCoordinate:
        return AxialCoordinate(q=self.q + other.q, r=self.r + other.r)

    def __sub__(self, other: AxialCoordinate) -> AxialCoordinate:
        return AxialCoordinate(q=self.q - other.q, r=self.r - other.r)

    def __repr__(self) -> str:
        return f"AxialCoordinate(q={self.q}, r={self.r})"


ORIGIN = AxialCoordinate(q=0, r=0)
