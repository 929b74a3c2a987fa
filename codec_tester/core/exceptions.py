"""Custom exceptions for codec testing operations.

This module defines the exception hierarchy for the codec tester. Codec
failures and verification mismatches are test outcomes, not exceptions;
only conditions that stop a file (or the whole run) from starting raise.
"""

from typing import Any


class CodecTesterError(Exception):
    """Base exception for codec testing operations.

    Attributes:
        message: Human-readable error description
        error_code: Optional error code for categorization
        context: Additional context information

    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class SetupError(CodecTesterError):
    """Raised when an input file cannot be prepared for testing.

    The file is skipped and the run continues.
    """

    pass


class FileOpenError(SetupError):
    """Raised when an input file cannot be opened."""

    pass


class FileSizeError(SetupError):
    """Raised when a file's size is zero or cannot be determined."""

    pass


class FileTooLargeError(SetupError):
    """Raised when a file exceeds the configured size limit."""

    pass


class AllocationError(SetupError):
    """Raised when buffers for a file cannot be allocated."""

    pass


class FileReadError(SetupError):
    """Raised when fewer bytes are read than the file's size."""

    pass


class CodecLoadError(CodecTesterError):
    """Raised when a codec name or import path cannot be resolved."""

    pass
