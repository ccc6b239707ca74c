from .errors import (
    ConfigurationError,
    DecodeError,
    GeometryTypeError,
    MissingColumnError,
    SourceExhaustedError,
    SourceOpenError,
    TrajectoryReaderError,
)
from .polyline import Polyline
from .trajectory import TemporalTrajectory, Trajectory
