"""
Folder encryption service.

Validates the run's paths, loads the recipient certificate once, then
encrypts every planned file in order, stopping at the first failure.
"""

from pathlib import Path

import structlog

from pgp_encrypt.config import EncryptConfig, OutputMode
from pgp_encrypt.crypto.pgpy_backend import PgpyBackend
from pgp_encrypt.crypto.protocol import CryptoBackend, Recipient
from pgp_encrypt.exceptions import FileIOError, InvalidInputError
from pgp_encrypt.models.tasks import FileTask, RunSummary
from pgp_encrypt.services.traversal import plan_tasks
from pgp_encrypt.services.writer import write_in_place, write_mirrored

logger = structlog.get_logger(__name__)


class FolderEncryptor:
    """
    Encrypts a directory tree to the keys of one certificate.

    Errors are never retried: the first failing file aborts the run and
    files written before it stay on disk.
    """

    def __init__(self, config: EncryptConfig, backend: CryptoBackend | None = None) -> None:
        """
        Args:
            config: Run configuration.
            backend: Crypto backend used for key loading and encryption.
        """
        self._config = config
        self._backend = backend or PgpyBackend()

    def run(self) -> RunSummary:
        """
        Encrypt every file of the input tree.

        Returns:
            Counts of encrypted and skipped files.

        Raises:
            InvalidInputError: If a path is missing or has the wrong type.
            PgpKeyError: If the certificate is unusable.
            EncryptionError: If a file cannot be encrypted.
            FileIOError: If a filesystem operation fails.
        """
        self.validate_paths()
        recipients = self.load_recipients()
        tasks, skipped = plan_tasks(self._config)
        logger.info(
            "Encrypting folder",
            input_dir=str(self._config.input_dir),
            mode=self._config.mode.value,
            files=len(tasks),
            skipped=skipped,
        )

        summary = RunSummary(skipped=skipped)
        for task in tasks:
            self.encrypt_file(task, recipients)
            summary.record(task.destination)

        logger.info("Folder encrypted", encrypted=summary.encrypted, skipped=summary.skipped)
        return summary

    def validate_paths(self) -> None:
        """
        Check the input directory, the output directory and the key file.

        In mirror mode a missing output directory is created.
        """
        config = self._config
        if not config.input_dir.is_dir():
            msg = f"Input folder '{config.input_dir}' does not exist or is not a directory"
            raise InvalidInputError(msg, path=config.input_dir)

        if config.mode is OutputMode.MIRROR and config.output_dir is not None:
            self._ensure_output_dir(config.output_dir)

        if not config.key_file.exists():
            msg = f"Public key file '{config.key_file}' does not exist"
            raise InvalidInputError(msg, path=config.key_file)

    def load_recipients(self) -> tuple[Recipient, ...]:
        """Read the key file and select its encryption keys."""
        try:
            key_data = self._config.key_file.read_bytes()
        except OSError as e:
            msg = f"Failed to read public key: {e}"
            raise FileIOError(msg, path=self._config.key_file) from e
        return self._backend.load_recipients(key_data)

    def encrypt_file(self, task: FileTask, recipients: tuple[Recipient, ...]) -> None:
        """Read, encrypt and place a single file."""
        logger.debug("Encrypting file", path=str(task.relative))
        try:
            plaintext = task.source.read_bytes()
        except OSError as e:
            msg = f"Failed to read {task.source}: {e}"
            raise FileIOError(msg, path=task.source) from e

        ciphertext = self._backend.encrypt(recipients, plaintext)

        if task.in_place:
            write_in_place(
                task.destination,
                ciphertext,
                encrypted_suffix=self._config.encrypted_suffix,
                temp_suffix=self._config.temp_suffix,
            )
        else:
            write_mirrored(task.destination, ciphertext)

    @staticmethod
    def _ensure_output_dir(output_dir: Path) -> None:
        if not output_dir.exists():
            try:
                output_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                msg = f"Failed to create output directory: {e}"
                raise FileIOError(msg, path=output_dir) from e
            logger.debug("Created output directory", path=str(output_dir))
            return
        if not output_dir.is_dir():
            msg = f"Output path '{output_dir}' is not a directory"
            raise InvalidInputError(msg, path=output_dir)
