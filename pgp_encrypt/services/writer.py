"""
Ciphertext placement: mirrored output tree or atomic in-place replace.
"""

import os
import shutil
import tempfile
from pathlib import Path

import structlog

from pgp_encrypt.exceptions import FileIOError

logger = structlog.get_logger(__name__)


def write_mirrored(destination: Path, payload: bytes) -> None:
    """
    Write ciphertext into the output tree, creating parent directories.

    Raises:
        FileIOError: If a directory cannot be created or the file written.
    """
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Failed to create output directories: {e}"
        raise FileIOError(msg, path=destination.parent) from e
    try:
        destination.write_bytes(payload)
    except OSError as e:
        msg = f"Failed to write encrypted file {destination}: {e}"
        raise FileIOError(msg, path=destination) from e


def create_temp_file(target: Path, encrypted_suffix: str, temp_suffix: str) -> Path:
    """
    Create a new, empty sibling file to stage the ciphertext of ``target``.

    The name is ``<name><encrypted_suffix>.<random><temp_suffix>`` and the
    file is created exclusively, so existing files are never reused.

    Raises:
        FileIOError: If the file cannot be created.
    """
    try:
        fd, name = tempfile.mkstemp(
            dir=target.parent,
            prefix=f"{target.name}{encrypted_suffix}.",
            suffix=temp_suffix,
        )
    except OSError as e:
        msg = f"Failed to create temporary file next to {target}: {e}"
        raise FileIOError(msg, path=target) from e
    os.close(fd)
    return Path(name)


def write_in_place(
    target: Path, payload: bytes, *, encrypted_suffix: str, temp_suffix: str
) -> None:
    """
    Replace ``target`` with ciphertext atomically.

    The payload is written to a fresh sibling temp file, which takes the
    original's permission bits and is then renamed over the original. If
    writing or renaming fails the temp file is removed and the original is
    left untouched.

    Raises:
        FileIOError: If creating, writing or renaming fails.
    """
    temp_path = create_temp_file(target, encrypted_suffix, temp_suffix)
    try:
        temp_path.write_bytes(payload)
        shutil.copymode(target, temp_path)
    except OSError as e:
        _remove_temp(temp_path)
        msg = f"Failed to write temporary file {temp_path}: {e}"
        raise FileIOError(msg, path=temp_path) from e

    try:
        os.replace(temp_path, target)
    except OSError as e:
        _remove_temp(temp_path)
        msg = f"Failed to replace {target}: {e}"
        raise FileIOError(msg, path=target) from e
    logger.debug("Replaced file in place", path=str(target))


def _remove_temp(temp_path: Path) -> None:
    try:
        temp_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(
            "Failed to remove temporary file", path=str(temp_path), error_type=type(e).__name__
        )
