import logging

from trajingest.config import TrajectorySourceConfig
from trajingest.readers.base import TrajectorySource
from trajingest.readers.feature_source import FeatureTrajectorySource
from trajingest.readers.point_source import CSVPointTrajectorySource
from trajingest.readers.row_source import CSVTrajectorySource

logger = logging.getLogger(__name__)


def open_trajectory_source(config: TrajectorySourceConfig) -> TrajectorySource:
    """
    Validates the configuration and opens the matching reader.
    Configuration problems surface as ConfigurationError subclasses.
    """
    config.validate()
    if config.point_mode:
        logger.info("Opening %s as a GPS point log", config.file)
        return CSVPointTrajectorySource(
            config.file,
            id_name=config.id_name,
            x_name=config.x_name,
            y_name=config.y_name,
            time_name=config.time_name,
            delimiter=config.delimiter,
            chunksize=config.chunksize,
            on_error=config.on_error,
        )
    if config.is_csv_format():
        logger.info("Opening %s as delimited trajectories", config.file)
        return CSVTrajectorySource(
            config.file,
            id_name=config.id_name,
            geometry_name=config.geometry_name,
            time_name=config.time_name,
            delimiter=config.delimiter,
            chunksize=config.chunksize,
            on_error=config.on_error,
        )
    logger.info("Opening %s as a vector dataset", config.file)
    return FeatureTrajectorySource(
        config.file,
        id_name=config.id_name,
        layer=config.layer,
        chunksize=config.chunksize,
    )
