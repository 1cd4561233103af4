"""
pgp-encrypt exception hierarchy.

All exceptions inherit from PgpEncryptError for easy catching. Each concrete
kind carries the process exit code the CLI reports for it.
"""

from pathlib import Path
from typing import Any

EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_KEY_ERROR = 2
EXIT_ENCRYPTION_ERROR = 3
EXIT_IO_ERROR = 4


class PgpEncryptError(Exception):
    """Base exception for all pgp_encrypt errors."""

    exit_code: int = EXIT_IO_ERROR

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class InvalidInputError(PgpEncryptError):
    """Missing or wrong-type path, or conflicting arguments."""

    exit_code = EXIT_INVALID_INPUT

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path


class PgpKeyError(PgpEncryptError):
    """Certificate cannot be parsed or holds no usable encryption key."""

    exit_code = EXIT_KEY_ERROR


class EncryptionError(PgpEncryptError):
    """Building or finalizing the encrypted message failed."""

    exit_code = EXIT_ENCRYPTION_ERROR

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path


class FileIOError(PgpEncryptError):
    """Reading, writing, creating a directory or renaming failed."""

    exit_code = EXIT_IO_ERROR

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path
