"""
Column resolution: maps semantic roles (id, geometry, x, y, time) to
positions in a delimited row or a feature's attribute table.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from trajingest.core.errors import ConfigurationError, MissingColumnError

logger = logging.getLogger(__name__)

ABSENT = -1


@dataclass(frozen=True)
class ColumnMap:
    id_index: int
    geometry_index: int = ABSENT
    x_index: int = ABSENT
    y_index: int = ABSENT
    time_index: int = ABSENT

    @property
    def has_geometry(self) -> bool:
        return self.geometry_index != ABSENT

    @property
    def has_coordinates(self) -> bool:
        return self.x_index != ABSENT and self.y_index != ABSENT

    @property
    def has_time(self) -> bool:
        return self.time_index != ABSENT


def split_header(line: str, delimiter: str = ';') -> List[str]:
    return line.rstrip("\r\n").split(delimiter)


def find_column(header: Sequence[str], name: Optional[str]) -> int:
    """
    Index of the left-most header field equal to `name`, or ABSENT.
    """
    if name is None:
        return ABSENT
    for index, field_name in enumerate(header):
        if str(field_name).strip() == name:
            return index
    return ABSENT


def resolve_columns(
    header: Sequence[str],
    id_name: str,
    geometry_name: Optional[str] = None,
    x_name: Optional[str] = None,
    y_name: Optional[str] = None,
    time_name: Optional[str] = None,
) -> ColumnMap:
    """
    Resolves the requested role names against a header row.

    Args:
        header: Field names in physical order.
        id_name: Name of the trajectory id column (mandatory).
        geometry_name: Name of the WKT geometry column. Either this or
                       both x_name and y_name must be given.
        x_name, y_name: Names of the coordinate columns.
        time_name: Name of the optional time column.

    Returns:
        The resolved ColumnMap. A missing time column resolves to ABSENT
        and is only logged as a warning.

    Raises:
        MissingColumnError: a requested mandatory column is not in the header.
        ConfigurationError: neither a geometry nor an x/y pair was requested.
    """
    if geometry_name is None and (x_name is None or y_name is None):
        raise ConfigurationError(
            "Either a geometry column or both x and y columns must be requested"
        )

    requested = [("id", id_name)]
    if geometry_name is not None:
        requested.append(("geometry", geometry_name))
    else:
        requested.extend([("x", x_name), ("y", y_name)])

    indices = {}
    missing = []
    for role, name in requested:
        index = find_column(header, name)
        if index == ABSENT:
            logger.critical("%s column %s not found", role.capitalize(), name)
            missing.append((role, name))
        indices[role] = index
    if missing:
        raise MissingColumnError(missing)

    time_index = find_column(header, time_name)
    if time_name is not None and time_index == ABSENT:
        logger.warning("Time stamp column %s not found, timestamps unknown", time_name)

    columns = ColumnMap(
        id_index=indices["id"],
        geometry_index=indices.get("geometry", ABSENT),
        x_index=indices.get("x", ABSENT),
        y_index=indices.get("y", ABSENT),
        time_index=time_index,
    )
    logger.info(
        "Id index %d geometry index %d x index %d y index %d time index %d",
        columns.id_index,
        columns.geometry_index,
        columns.x_index,
        columns.y_index,
        columns.time_index,
    )
    return columns
