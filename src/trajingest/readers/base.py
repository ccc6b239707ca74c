import abc
from typing import Iterator, List

from trajingest.core.trajectory import TemporalTrajectory, Trajectory


class TrajectorySource(abc.ABC):
    """
    Forward-only source of trajectories.

    Backends implement has_next, read_next, reset and close; batch reads,
    iteration and context management are derived from them. The base
    class holds no state.
    """

    @abc.abstractmethod
    def has_next(self) -> bool:
        """True iff at least one more trajectory can be read."""

    @abc.abstractmethod
    def read_next(self) -> Trajectory:
        """
        Reads the next trajectory.
        Raises SourceExhaustedError if has_next() is False.
        """

    @abc.abstractmethod
    def reset(self):
        """Rewinds to the first record."""

    @abc.abstractmethod
    def close(self):
        """Releases the underlying resource."""

    def read_next_n(self, n: int) -> List[Trajectory]:
        trajectories = []
        while len(trajectories) < n and self.has_next():
            trajectories.append(self.read_next())
        return trajectories

    def read_all(self) -> List[Trajectory]:
        trajectories = []
        while self.has_next():
            trajectories.append(self.read_next())
        return trajectories

    def __iter__(self) -> Iterator[Trajectory]:
        while self.has_next():
            yield self.read_next()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class TemporalTrajectorySource(TrajectorySource):
    """A source that can also attach per-point timestamps."""

    @abc.abstractmethod
    def has_time_stamp(self) -> bool:
        """False when the time column could not be resolved."""

    @abc.abstractmethod
    def read_next_temporal(self) -> TemporalTrajectory:
        """
        Reads the next trajectory with its timestamps. The timestamps are
        empty when has_time_stamp() is False.
        """

    def read_next_n_temporal(self, n: int) -> List[TemporalTrajectory]:
        trajectories = []
        while len(trajectories) < n and self.has_next():
            trajectories.append(self.read_next_temporal())
        return trajectories

    def read_all_temporal(self) -> List[TemporalTrajectory]:
        trajectories = []
        while self.has_next():
            trajectories.append(self.read_next_temporal())
        return trajectories
