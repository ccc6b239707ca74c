"""
trajingest - incremental trajectory readers for map-matching pipelines.

Reads trajectories from vector datasets, from delimited files with one
trajectory per row, and from flat GPS point logs grouped by consecutive id,
all behind the same has_next / read_next contract.
"""
import logging

from trajingest.config import TrajectorySourceConfig
from trajingest.core import (
    ConfigurationError,
    DecodeError,
    GeometryTypeError,
    MissingColumnError,
    Polyline,
    SourceExhaustedError,
    SourceOpenError,
    TemporalTrajectory,
    Trajectory,
    TrajectoryReaderError,
)
from trajingest.readers import (
    CSVPointTrajectorySource,
    CSVTrajectorySource,
    FeatureTrajectorySource,
    TemporalTrajectorySource,
    TrajectorySource,
    open_trajectory_source,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "TrajectorySourceConfig",
    "ConfigurationError",
    "DecodeError",
    "GeometryTypeError",
    "MissingColumnError",
    "Polyline",
    "SourceExhaustedError",
    "SourceOpenError",
    "TemporalTrajectory",
    "Trajectory",
    "TrajectoryReaderError",
    "CSVPointTrajectorySource",
    "CSVTrajectorySource",
    "FeatureTrajectorySource",
    "TemporalTrajectorySource",
    "TrajectorySource",
    "open_trajectory_source",
]
