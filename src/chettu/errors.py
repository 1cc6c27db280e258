"""
Exceptions raised by chettu.
"""


class ChettuError(Exception):
    """Base exception for chettu errors."""
    pass


class ConfigError(ChettuError):
    """Raised when the run configuration is inconsistent."""
    pass


class PatternSourceError(ChettuError):
    """Raised when an existing ignore file cannot be read."""
    pass


class InvalidRootError(ChettuError):
    """Raised when a root directory cannot be opened."""
    pass


class OutputError(ChettuError):
    """Raised when an output sink fails."""
    pass


class ClipboardSizeError(OutputError):
    """Raised when the document is larger than the clipboard limit."""

    def __init__(self, size: int, max_size: int) -> None:
        super().__init__(
            f"Output size ({size}) exceeds the maximum clipboard size ({max_size})"
        )
        self.size = size
        self.max_size = max_size
