from dataclasses import dataclass, field
from typing import Iterable, Iterator, Tuple

from shapely.geometry import LineString

Coordinate = Tuple[float, float]


@dataclass(frozen=True)
class Polyline:
    """
    Ordered sequence of (x, y) pairs backing a trajectory.
    Frozen once built; empty and single-point polylines are valid values.
    """
    coords: Tuple[Coordinate, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable of pairs but always store a tuple of float tuples
        object.__setattr__(
            self, "coords", tuple((float(x), float(y)) for x, y in self.coords)
        )

    def __len__(self) -> int:
        return len(self.coords)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.coords)

    def __getitem__(self, index):
        return self.coords[index]

    @property
    def xs(self) -> Tuple[float, ...]:
        return tuple(c[0] for c in self.coords)

    @property
    def ys(self) -> Tuple[float, ...]:
        return tuple(c[1] for c in self.coords)

    @property
    def is_degenerate(self) -> bool:
        return len(self.coords) < 2

    @classmethod
    def from_coords(cls, coords: Iterable[Coordinate]) -> "Polyline":
        return cls(tuple(coords))

    @classmethod
    def from_linestring(cls, geometry: LineString) -> "Polyline":
        """Drops any Z/M ordinate; only x and y are kept."""
        return cls(tuple((c[0], c[1]) for c in geometry.coords))

    def to_linestring(self) -> LineString:
        if len(self.coords) == 1:
            raise ValueError("A single-point polyline has no LineString representation")
        return LineString(self.coords)
