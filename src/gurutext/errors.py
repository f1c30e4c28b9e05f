"""Fatal error types.

Anything raised from here aborts the run. Problems that only affect a single
call site are reported as diagnostics instead and never raise.
"""


class ExtractionError(Exception):
    """Base class for errors that stop extraction."""


class PositionFormatError(ExtractionError):
    """Raised when a position is not in `path:line:column` form."""


class GoSyntaxError(ExtractionError):
    """Raised when a Go source file does not parse."""


class InternalConsistencyError(ExtractionError):
    """Raised when an argument selected for decoding cannot be decoded."""


class SourceUnavailableError(ExtractionError):
    """Raised when a source file cannot be read."""


class CallerQueryError(ExtractionError):
    """Raised when the caller analysis output cannot be understood."""
