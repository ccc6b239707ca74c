class TrajectoryReaderError(Exception):
    """Base class for every error raised while reading trajectories."""


class ConfigurationError(TrajectoryReaderError):
    """
    Raised while constructing a source. The instance is unusable;
    nothing falls back to an empty source.
    """


class MissingColumnError(ConfigurationError):
    def __init__(self, missing):
        # missing: sequence of (role, requested name) pairs
        self.missing = tuple(missing)
        details = ", ".join(f"{role} column '{name}'" for role, name in self.missing)
        super().__init__(f"Required column(s) not found: {details}")


class SourceOpenError(ConfigurationError):
    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open trajectory source {path}: {reason}")


class GeometryTypeError(ConfigurationError):
    def __init__(self, geometry_type):
        self.geometry_type = geometry_type
        super().__init__(f"Geometry type is {geometry_type}, which should be LineString")


class DecodeError(TrajectoryReaderError, ValueError):
    """
    A single record could not be decoded. Local to one read call.
    """

    def __init__(self, row_number: int, role: str, value, reason: str):
        self.row_number = row_number
        self.role = role
        self.value = value
        self.reason = reason
        super().__init__(f"Record {row_number}: cannot decode {role} field {value!r} ({reason})")


class SourceExhaustedError(TrajectoryReaderError):
    """A read was attempted while has_next() is False."""
