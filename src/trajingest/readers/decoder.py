import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from shapely import wkt
from shapely.errors import ShapelyError
from shapely.geometry import LineString

from trajingest.core.errors import DecodeError
from trajingest.core.polyline import Polyline
from trajingest.readers.columns import ColumnMap


@dataclass(frozen=True)
class PointRecord:
    """One row of a point log."""
    id: int
    x: float
    y: float
    timestamp: Optional[float]
    row_number: int


@dataclass(frozen=True)
class RowRecord:
    """One row holding a whole trajectory."""
    id: int
    path: Polyline
    timestamps: Tuple[float, ...]
    row_number: int


def parse_id(value: str, row_number: int) -> int:
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    # integral float literals such as "7.0"
    try:
        number = float(text)
    except ValueError:
        raise DecodeError(row_number, "id", value, "not an integer") from None
    if not number.is_integer():
        raise DecodeError(row_number, "id", value, "not an integer")
    return int(number)


def parse_float(value: str, row_number: int, role: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise DecodeError(row_number, role, value, "not a number") from None
    if not math.isfinite(number):
        raise DecodeError(row_number, role, value, "not a finite number")
    return number


def parse_timestamps(value: str, row_number: int) -> List[float]:
    """Comma separated list; empty tokens are ignored."""
    return [
        parse_float(token, row_number, "time")
        for token in value.split(",")
        if token.strip()
    ]


def parse_linestring(value: str, row_number: int) -> Polyline:
    try:
        geometry = wkt.loads(value)
    except ShapelyError as e:
        raise DecodeError(row_number, "geometry", value, str(e)) from None
    if not isinstance(geometry, LineString):
        raise DecodeError(row_number, "geometry", value, f"{geometry.geom_type} is not a LineString")
    return Polyline.from_linestring(geometry)


class RecordDecoder:
    """
    Turns the raw fields of one row into a typed record.

    Each position is visited once and compared against the ColumnMap;
    unmapped positions are ignored. Any failure raises DecodeError.
    """

    def __init__(self, columns: ColumnMap):
        self.columns = columns

    def decode_point(self, fields: Sequence[Optional[str]], row_number: int) -> PointRecord:
        cols = self.columns
        obj_id = x = y = None
        timestamp = None
        for index, value in enumerate(fields):
            if value is None:
                continue
            if index == cols.id_index:
                obj_id = parse_id(value, row_number)
            if index == cols.x_index:
                x = parse_float(value, row_number, "x")
            if index == cols.y_index:
                y = parse_float(value, row_number, "y")
            if index == cols.time_index:
                timestamp = parse_float(value, row_number, "time")

        self._require(obj_id, "id", row_number)
        self._require(x, "x", row_number)
        self._require(y, "y", row_number)
        if cols.has_time:
            self._require(timestamp, "time", row_number)
        return PointRecord(id=obj_id, x=x, y=y, timestamp=timestamp, row_number=row_number)

    def decode_row(
        self,
        fields: Sequence[Optional[str]],
        row_number: int,
        with_time: bool = True,
    ) -> RowRecord:
        cols = self.columns
        obj_id = None
        path = None
        timestamps: List[float] = []
        for index, value in enumerate(fields):
            if value is None:
                continue
            if index == cols.id_index:
                obj_id = parse_id(value, row_number)
            if index == cols.geometry_index:
                path = parse_linestring(value, row_number)
            if with_time and index == cols.time_index:
                timestamps = parse_timestamps(value, row_number)

        self._require(obj_id, "id", row_number)
        self._require(path, "geometry", row_number)
        if timestamps and len(timestamps) != len(path):
            raise DecodeError(
                row_number,
                "time",
                fields[cols.time_index],
                f"{len(timestamps)} timestamps for {len(path)} points",
            )
        return RowRecord(id=obj_id, path=path, timestamps=tuple(timestamps), row_number=row_number)

    @staticmethod
    def _require(value, role: str, row_number: int):
        if value is None:
            raise DecodeError(row_number, role, None, "field is missing")
