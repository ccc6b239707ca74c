"""
Point-log reader.

The input is a flat delimited file with one GPS point per row and no
explicit trajectory boundary:

    id;x;y;timestamp
    1;0.0;0.0;0
    1;1.0;0.5;10
    2;5.0;5.0;0

A maximal run of consecutive rows sharing the same id is one trajectory.
Grouping is by contiguous runs only: the id sequence 1,1,2,2,1 gives three
trajectories. The row that ends a run is kept in a one-record lookahead
buffer and becomes the first point of the next trajectory, so no row is
read twice and none is lost.

A malformed row met in the middle of a run does not cost the rows already
collected: the partial run stays in the cursor and the next read carries
on with it.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from trajingest.config import check_on_error
from trajingest.core.errors import ConfigurationError, DecodeError, SourceExhaustedError
from trajingest.core.polyline import Polyline
from trajingest.core.stream import RecordStream
from trajingest.core.trajectory import TemporalTrajectory, Trajectory
from trajingest.readers.base import TemporalTrajectorySource
from trajingest.readers.columns import resolve_columns
from trajingest.readers.decoder import PointRecord, RecordDecoder

logger = logging.getLogger(__name__)


@dataclass
class GrouperCursor:
    """
    pending: decoded record that belongs to the next trajectory.
    run: records of the trajectory being assembled, kept across a
         read aborted by a DecodeError.
    exhausted: the underlying stream has no more rows.
    """
    pending: Optional[PointRecord] = None
    run: List[PointRecord] = field(default_factory=list)
    exhausted: bool = False


class CSVPointTrajectorySource(TemporalTrajectorySource):
    """
    Reassembles trajectories from a point-per-row delimited file.
    """

    def __init__(
        self,
        filepath: str | Path,
        id_name: str = 'id',
        x_name: str = 'x',
        y_name: str = 'y',
        time_name: Optional[str] = None,
        delimiter: str = ';',
        chunksize: int = 1000,
        on_error: str = 'raise',
    ):
        """
        Args:
            filepath: Path to the point log.
            id_name, x_name, y_name: Mandatory column names.
            time_name: Optional timestamp column. If it is not in the header,
                       trajectories are produced without timestamps.
            delimiter: Field delimiter.
            chunksize: Rows fetched from disk per chunk.
            on_error: 'raise' aborts the current read with DecodeError on a
                      malformed row, 'skip' logs and drops the row.
        """
        self.on_error = check_on_error(on_error)
        logger.info("Read GPS points from file %s", filepath)
        self._stream = RecordStream(filepath, sep=delimiter, chunksize=chunksize)
        try:
            self.columns = resolve_columns(
                self._stream.header,
                id_name=id_name,
                x_name=x_name,
                y_name=y_name,
                time_name=time_name,
            )
        except ConfigurationError:
            self._stream.close()
            raise
        self._decoder = RecordDecoder(self.columns)
        self._cursor = GrouperCursor()

    @property
    def filepath(self) -> Path:
        return self._stream.filepath

    def has_time_stamp(self) -> bool:
        return self.columns.has_time

    def has_next(self) -> bool:
        if self._cursor.pending is not None or self._cursor.run:
            return True
        if self._cursor.exhausted:
            return False
        if self.on_error == 'skip':
            # Prefetch so that trailing malformed rows do not count as data
            self._cursor.pending = self._decode_next()
            return self._cursor.pending is not None
        return self._stream.has_next()

    def read_next(self) -> Trajectory:
        run = self._read_group()
        return Trajectory(id=run[0].id, path=Polyline(tuple((r.x, r.y) for r in run)))

    def read_next_temporal(self) -> TemporalTrajectory:
        run = self._read_group()
        timestamps = tuple(r.timestamp for r in run) if self.has_time_stamp() else ()
        return TemporalTrajectory(
            id=run[0].id,
            path=Polyline(tuple((r.x, r.y) for r in run)),
            timestamps=timestamps,
        )

    def reset(self):
        self._stream.reset()
        self._cursor = GrouperCursor()

    def close(self):
        logger.debug("Closing %s", self.filepath)
        self._stream.close()
        self._cursor = GrouperCursor(exhausted=True)

    def _read_group(self) -> List[PointRecord]:
        run = self._cursor.run
        while True:
            # A DecodeError leaves the partial run in the cursor
            record = self._take_record()
            if record is None:
                break
            if run and record.id != run[0].id:
                self._cursor.pending = record
                break
            run.append(record)

        if not run:
            raise SourceExhaustedError(f"No more trajectories in {self.filepath}")
        self._cursor.run = []
        return run

    def _take_record(self) -> Optional[PointRecord]:
        if self._cursor.pending is not None:
            record = self._cursor.pending
            self._cursor.pending = None
            return record
        return self._decode_next()

    def _decode_next(self) -> Optional[PointRecord]:
        """
        Next well-formed record from the stream, or None at the end.
        Under 'raise' a malformed row is consumed before the error propagates.
        """
        while self._stream.has_next():
            row_number, fields = self._stream.next_row()
            try:
                return self._decoder.decode_point(fields, row_number)
            except DecodeError as e:
                if self.on_error == 'raise':
                    raise
                logger.warning("Skipping malformed row in %s: %s", self.filepath, e)
        self._cursor.exhausted = True
        return None
