"""
pgp-encrypt.

Recursively encrypts a directory tree to an OpenPGP certificate, writing
ciphertext into a mirrored output tree or atomically in place.

Example:
    ```python
    from pathlib import Path

    from pgp_encrypt import EncryptConfig, FolderEncryptor, OutputMode

    config = EncryptConfig(
        input_dir=Path("documents"),
        key_file=Path("alice.asc"),
        output_dir=Path("documents-encrypted"),
        mode=OutputMode.MIRROR,
    )
    summary = FolderEncryptor(config).run()
    print(summary.encrypted, "files encrypted")
    ```
"""

from pgp_encrypt.config import EncryptConfig, OutputMode, OutputNaming
from pgp_encrypt.crypto.pgpy_backend import PgpyBackend
from pgp_encrypt.crypto.protocol import CryptoBackend, Recipient
from pgp_encrypt.exceptions import (
    EncryptionError,
    FileIOError,
    InvalidInputError,
    PgpEncryptError,
    PgpKeyError,
)
from pgp_encrypt.models.tasks import FileTask, RunSummary
from pgp_encrypt.services.encryptor import FolderEncryptor

__version__ = "0.1.0"

__all__ = [
    # Orchestration
    "FolderEncryptor",
    "EncryptConfig",
    "OutputMode",
    "OutputNaming",
    # Models
    "FileTask",
    "RunSummary",
    # Crypto
    "CryptoBackend",
    "Recipient",
    "PgpyBackend",
    # Exceptions
    "PgpEncryptError",
    "InvalidInputError",
    "PgpKeyError",
    "EncryptionError",
    "FileIOError",
]
