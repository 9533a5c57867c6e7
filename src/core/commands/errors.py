# src/core/commands/errors.py
"""Error types raised by the command store and the parameter engine.

All errors are local and recoverable. They are raised before any
mutation happens, so a caller can report them and carry on.
"""


class HoardError(Exception):
    """Base class for all hoard errors."""


class InvalidEntityError(HoardError):
    """Raised when a command fails validation."""


class NotFoundError(HoardError):
    """Raised when a command or namespace to act on does not exist."""

    def __init__(self, kind: str, key: str):
        super().__init__(f"No {kind} found with name: {key}")
        self.kind = kind
        self.key = key


class InvalidTokenError(HoardError):
    """Raised when a parameter token configuration is malformed."""


class TroveFileError(HoardError):
    """Raised when a trove file cannot be parsed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class MissingValueError(HoardError, ValueError):
    """Raised when a value source has no value left for a parameter."""
