"""Exception types raised by the planner core.

None of these are fatal: callers log them and surface a short notice, the
in-memory store stays the recoverable source of truth.
"""


class CalplanError(Exception):
    """Base class for planner errors."""
    pass


class PersistError(CalplanError):
    """Writing the serialized store to the backing key-value store failed."""

    def __init__(self, message: str, key: str = ""):
        super().__init__(message)
        self.key = key


class ImportParseError(CalplanError):
    """A backup file could not be parsed as a plan store."""
    pass


class InvalidStoreShape(CalplanError):
    """A replacement store value is not mapping-shaped."""
    pass
