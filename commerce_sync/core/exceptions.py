class MappingError(ValueError):
    """Raised when a data-field mapping table is malformed."""


class PathSyntaxError(MappingError):
    """Raised when a source path cannot be resolved by its structure alone."""


class SyncValidationError(ValueError):
    """Raised for missing or invalid invocation input. Surfaced as a 400 result."""

    status = 400
