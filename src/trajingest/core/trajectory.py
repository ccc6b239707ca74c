from dataclasses import dataclass, field
from typing import Tuple

from .polyline import Polyline


@dataclass(frozen=True)
class Trajectory:
    """
    An identified path. Ids are assigned by the source and are not
    required to be unique across reads.
    """
    id: int
    path: Polyline = field(default_factory=Polyline)

    def __len__(self) -> int:
        return len(self.path)


@dataclass(frozen=True)
class TemporalTrajectory:
    """
    A trajectory with one timestamp per point, or no timestamps at all
    when the source does not know them.
    """
    id: int
    path: Polyline = field(default_factory=Polyline)
    timestamps: Tuple[float, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "timestamps", tuple(float(t) for t in self.timestamps))
        if self.timestamps and len(self.timestamps) != len(self.path):
            raise ValueError(
                f"Trajectory {self.id} has {len(self.path)} points "
                f"but {len(self.timestamps)} timestamps"
            )

    def __len__(self) -> int:
        return len(self.path)

    @property
    def has_timestamps(self) -> bool:
        return bool(self.timestamps)

    def to_trajectory(self) -> Trajectory:
        return Trajectory(id=self.id, path=self.path)
