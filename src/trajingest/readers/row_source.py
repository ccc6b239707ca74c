import logging
from pathlib import Path
from typing import Optional

from trajingest.config import check_on_error
from trajingest.core.errors import ConfigurationError, DecodeError, SourceExhaustedError
from trajingest.core.stream import RecordStream
from trajingest.core.trajectory import TemporalTrajectory, Trajectory
from trajingest.readers.base import TemporalTrajectorySource
from trajingest.readers.columns import resolve_columns
from trajingest.readers.decoder import RecordDecoder, RowRecord

logger = logging.getLogger(__name__)


class CSVTrajectorySource(TemporalTrajectorySource):
    """
    Reads a delimited file where every row is a whole trajectory:

        id;geom;timestamp
        1;LINESTRING(0 0,1 1,2 2);0,10,20

    The timestamp column is optional and holds one comma separated value
    per point of the geometry.
    """

    def __init__(
        self,
        filepath: str | Path,
        id_name: str = 'id',
        geometry_name: str = 'geom',
        time_name: Optional[str] = None,
        delimiter: str = ';',
        chunksize: int = 1000,
        on_error: str = 'raise',
    ):
        self.on_error = check_on_error(on_error)
        logger.info("Read trajectories from file %s", filepath)
        self._stream = RecordStream(filepath, sep=delimiter, chunksize=chunksize)
        try:
            self.columns = resolve_columns(
                self._stream.header,
                id_name=id_name,
                geometry_name=geometry_name,
                time_name=time_name,
            )
        except ConfigurationError:
            self._stream.close()
            raise
        self._decoder = RecordDecoder(self.columns)
        self._pending: Optional[RowRecord] = None

    @property
    def filepath(self) -> Path:
        return self._stream.filepath

    def has_time_stamp(self) -> bool:
        return self.columns.has_time

    def has_next(self) -> bool:
        if self._pending is not None:
            return True
        if self.on_error == 'skip':
            self._pending = self._decode_next()
            return self._pending is not None
        return self._stream.has_next()

    def read_next(self) -> Trajectory:
        record = self._take_record()
        return Trajectory(id=record.id, path=record.path)

    def read_next_temporal(self) -> TemporalTrajectory:
        record = self._take_record()
        return TemporalTrajectory(id=record.id, path=record.path, timestamps=record.timestamps)

    def reset(self):
        self._stream.reset()
        self._pending = None

    def close(self):
        logger.debug("Closing %s", self.filepath)
        self._stream.close()
        self._pending = None

    def _take_record(self) -> RowRecord:
        if self._pending is not None:
            record, self._pending = self._pending, None
            return record
        record = self._decode_next()
        if record is None:
            raise SourceExhaustedError(f"No more trajectories in {self.filepath}")
        return record

    def _decode_next(self) -> Optional[RowRecord]:
        while self._stream.has_next():
            row_number, fields = self._stream.next_row()
            try:
                return self._decoder.decode_row(fields, row_number)
            except DecodeError as e:
                if self.on_error == 'raise':
                    raise
                logger.warning("Skipping malformed row in %s: %s", self.filepath, e)
        return None
