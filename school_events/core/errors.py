class SchoolEventsError(Exception):
    """Base class for errors surfaced to API callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SchoolEventsError):
    pass


class ValidationError(SchoolEventsError):
    """A field constraint was violated. ``field`` names the offending field."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class ConflictError(SchoolEventsError):
    """Deletion blocked by existing dependent records."""


class ConcurrencyConflictError(SchoolEventsError):
    """The target changed between read and write; the caller should retry."""
