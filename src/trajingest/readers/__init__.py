from .base import TemporalTrajectorySource, TrajectorySource
from .columns import ABSENT, ColumnMap, resolve_columns
from .decoder import PointRecord, RecordDecoder, RowRecord
from .feature_source import FeatureTrajectorySource
from .point_source import CSVPointTrajectorySource
from .row_source import CSVTrajectorySource
from .factory import open_trajectory_source
