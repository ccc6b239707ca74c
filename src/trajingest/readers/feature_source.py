import logging
from collections import deque
from pathlib import Path
from typing import Deque, Optional

import geopandas as gpd
import pyogrio
from pyogrio.errors import DataSourceError, DataLayerError
from shapely.geometry import LineString

from trajingest.core.errors import (
    DecodeError,
    GeometryTypeError,
    MissingColumnError,
    SourceExhaustedError,
    SourceOpenError,
)
from trajingest.core.polyline import Polyline
from trajingest.core.trajectory import Trajectory
from trajingest.readers.base import TrajectorySource
from trajingest.readers.columns import ABSENT, find_column
from trajingest.readers.decoder import parse_id

logger = logging.getLogger(__name__)


def flatten_geometry_type(geometry_type: Optional[str]) -> Optional[str]:
    """'LineString Z', '2.5D LineString' and 'LineString M' all flatten to 'LineString'."""
    if geometry_type is None:
        return None
    parts = [p for p in geometry_type.split() if p not in ("Z", "M", "ZM", "2.5D")]
    return " ".join(parts)


class FeatureTrajectorySource(TrajectorySource):
    """
    Reads trajectories from a vector dataset (shapefile, GeoPackage,
    GeoJSON, ...) where every feature is one LineString trajectory.

    Metadata (feature count, fields, geometry type) is validated when the
    source is opened. Features are then fetched lazily in chunks of
    `chunksize` rows.
    """

    def __init__(
        self,
        filepath: str | Path,
        id_name: str = 'id',
        layer: Optional[str | int] = None,
        chunksize: int = 1000,
    ):
        """
        Args:
            filepath: Path to the vector dataset.
            id_name: Name of the attribute holding the trajectory id.
            layer: Layer name or index; the first layer if None.
            chunksize: Features read from disk per chunk.
        """
        self.filepath = Path(filepath)
        self.layer = layer
        self.chunksize = chunksize
        self.id_name = id_name
        logger.info("Read trajectory from file %s with id column %s", self.filepath, id_name)

        try:
            info = pyogrio.read_info(self.filepath, layer=layer, force_feature_count=True)
        except (DataSourceError, DataLayerError, OSError) as e:
            logger.critical("Open data source %s failed", self.filepath)
            raise SourceOpenError(self.filepath, str(e)) from e

        fields = [str(name) for name in info["fields"]]
        if find_column(fields, id_name) == ABSENT:
            logger.critical("Id column %s not found", id_name)
            raise MissingColumnError([("id", id_name)])

        geometry_type = info["geometry_type"]
        if flatten_geometry_type(geometry_type) != "LineString":
            logger.critical("Geometry type is %s, which should be linestring", geometry_type)
            raise GeometryTypeError(geometry_type)
        logger.info("Geometry type is %s", geometry_type)

        self._num_features = int(info["features"])
        self._cursor = 0
        self._buffer: Deque[tuple] = deque()
        self._closed = False
        logger.info("Total number of trajectories %d", self._num_features)

    def get_num_trajectories(self) -> int:
        return self._num_features

    def has_next(self) -> bool:
        return not self._closed and self._cursor < self._num_features

    def read_next(self) -> Trajectory:
        if not self.has_next():
            raise SourceExhaustedError(f"No more trajectories in {self.filepath}")
        if not self._buffer:
            self._load_chunk()
        if not self._buffer:
            # fewer features on disk than the layer reported
            self._num_features = self._cursor
            raise SourceExhaustedError(f"No more trajectories in {self.filepath}")
        value, geometry = self._buffer.popleft()
        self._cursor += 1

        # Record numbers are 1-based like the delimited readers
        row_number = self._cursor
        obj_id = parse_id(str(value), row_number)
        if geometry is None or not isinstance(geometry, LineString):
            geom_type = None if geometry is None else geometry.geom_type
            raise DecodeError(row_number, "geometry", geom_type, "feature geometry is not a LineString")
        return Trajectory(id=obj_id, path=Polyline.from_linestring(geometry))

    def _load_chunk(self):
        stop = min(self._cursor + self.chunksize, self._num_features)
        kwargs = {"layer": self.layer} if self.layer is not None else {}
        frame = gpd.read_file(
            self.filepath,
            rows=slice(self._cursor, stop),
            columns=[self.id_name],
            engine="pyogrio",
            **kwargs,
        )
        self._buffer.extend(zip(frame[self.id_name].tolist(), frame.geometry.tolist()))

    def reset(self):
        logger.debug("Rewinding %s to feature 0", self.filepath)
        self._cursor = 0
        self._buffer.clear()
        self._closed = False

    def close(self):
        logger.debug("Closing %s", self.filepath)
        self._buffer.clear()
        self._closed = True
