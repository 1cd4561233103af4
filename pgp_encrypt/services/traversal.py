"""
Input tree traversal and output path planning.
"""

import os
from pathlib import Path

import structlog

from pgp_encrypt.config import EncryptConfig, OutputMode, OutputNaming
from pgp_encrypt.exceptions import FileIOError, InvalidInputError
from pgp_encrypt.models.tasks import FileTask

logger = structlog.get_logger(__name__)


def is_encrypted(path: Path, suffix: str) -> bool:
    """Return True if the file extension marks it as already encrypted (case-sensitive)."""
    return path.suffix == suffix


def walk_files(root: Path) -> list[Path]:
    """
    List every regular file below ``root``, sorted by path.

    Symlinks are neither followed nor returned.

    Raises:
        FileIOError: If a directory cannot be listed.
    """
    files: list[Path] = []
    for dirpath, _, filenames in os.walk(root, onerror=_raise_walk_error):
        for name in filenames:
            path = Path(dirpath) / name
            if path.is_symlink() or not path.is_file():
                continue
            files.append(path)
    return sorted(files)


def output_path(config: EncryptConfig, source: Path, relative: Path) -> Path:
    """Compute where the ciphertext of ``source`` is written."""
    if config.mode is OutputMode.IN_PLACE:
        return source
    if config.output_dir is None:
        msg = "output_dir is required in mirror mode"
        raise ValueError(msg)
    target = config.output_dir / relative
    if config.naming is OutputNaming.APPEND:
        return target.with_name(target.name + config.encrypted_suffix)
    return target.with_suffix(config.encrypted_suffix)


def plan_tasks(config: EncryptConfig) -> tuple[list[FileTask], int]:
    """
    Walk the input tree and build the list of files to encrypt.

    The whole list is built before anything is written, so outputs landing
    inside the input tree are never picked up again, and two sources that
    map to the same output (e.g. ``a.txt`` and ``a.md`` with REPLACE naming)
    are rejected up front.

    Returns:
        The tasks in processing order and the number of skipped files.

    Raises:
        InvalidInputError: If two files would be written to the same path.
        FileIOError: If a directory cannot be listed.
    """
    tasks: list[FileTask] = []
    claimed: dict[Path, Path] = {}
    skipped = 0
    for source in walk_files(config.input_dir):
        if is_encrypted(source, config.encrypted_suffix):
            logger.debug("Skipping encrypted file", path=str(source))
            skipped += 1
            continue
        relative = source.relative_to(config.input_dir)
        destination = output_path(config, source, relative)
        if destination in claimed:
            msg = (
                f"Both '{claimed[destination]}' and '{relative}' would be written to "
                f"'{destination}'; use --keep-extension to keep original extensions"
            )
            raise InvalidInputError(msg, path=destination)
        claimed[destination] = relative
        tasks.append(FileTask(source=source, relative=relative, destination=destination))
    return tasks, skipped


def _raise_walk_error(error: OSError) -> None:
    msg = f"Failed to read directory {error.filename}: {error.strerror or error}"
    raise FileIOError(msg, path=error.filename) from error
