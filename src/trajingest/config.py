from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from trajingest.core.errors import ConfigurationError, SourceOpenError

CSV_SUFFIXES = (".csv", ".txt")
ON_ERROR_POLICIES = ("raise", "skip")


def check_on_error(on_error: str) -> str:
    if on_error not in ON_ERROR_POLICIES:
        raise ConfigurationError(
            f"on_error must be one of {ON_ERROR_POLICIES}, got {on_error!r}"
        )
    return on_error


@dataclass
class TrajectorySourceConfig:
    """
    Describes where trajectories come from and how their columns are named.

    point_mode selects the point-log reader (one GPS point per row, grouped
    by consecutive id). Otherwise the file suffix decides between the
    delimited whole-row reader and the vector dataset reader.
    """
    file: str | Path
    id_name: str = "id"
    geometry_name: str = "geom"
    x_name: str = "x"
    y_name: str = "y"
    time_name: Optional[str] = "timestamp"
    point_mode: bool = False
    delimiter: str = ";"
    layer: Optional[str | int] = None
    chunksize: int = 1000
    on_error: str = "raise"

    @classmethod
    def from_dict(cls, mapping: Mapping[str, Any]) -> "TrajectorySourceConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ConfigurationError(f"Unknown trajectory source option(s): {', '.join(unknown)}")
        if "file" not in mapping:
            raise ConfigurationError("Trajectory source option 'file' is required")
        return cls(**mapping)

    def is_csv_format(self) -> bool:
        return Path(self.file).suffix.lower() in CSV_SUFFIXES

    def validate(self):
        check_on_error(self.on_error)
        if self.chunksize <= 0:
            raise ConfigurationError(f"chunksize must be positive, got {self.chunksize}")
        if len(self.delimiter) != 1:
            raise ConfigurationError(f"delimiter must be a single character, got {self.delimiter!r}")
        if self.point_mode and not self.is_csv_format():
            raise ConfigurationError(f"Point mode needs a delimited text file, got {self.file}")
        if not Path(self.file).exists():
            raise SourceOpenError(self.file, "file not found")
