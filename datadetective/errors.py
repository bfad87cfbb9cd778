class DataDetectiveError(Exception):
    """Base class for errors raised at the edges of the engine."""


class LoadError(DataDetectiveError):
    """A file could not be read or parsed into a table."""


class ValidationError(DataDetectiveError):
    """Input rows do not have the shape a table requires."""
