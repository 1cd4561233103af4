"""
Run configuration for pgp-encrypt.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class OutputMode(Enum):
    """Where ciphertext is written."""

    MIRROR = "mirror"
    IN_PLACE = "in-place"


class OutputNaming(Enum):
    """How mirrored output files are named."""

    REPLACE = "replace"
    APPEND = "append"


@dataclass(frozen=True, kw_only=True)
class EncryptConfig:
    """
    Attributes:
        input_dir: Root of the tree to encrypt.
        key_file: Certificate (public or secret key) of the recipient.
        output_dir: Root of the mirrored output tree; only used in MIRROR mode.
        mode: Output placement mode.
        naming: Whether mirrored outputs replace or keep the original extension.
        encrypted_suffix: Extension marking a file as already encrypted.
        temp_suffix: Extra extension of the temporary file used in IN_PLACE mode.
    """

    input_dir: Path
    key_file: Path
    output_dir: Path | None = None
    mode: OutputMode = OutputMode.MIRROR
    naming: OutputNaming = OutputNaming.REPLACE
    encrypted_suffix: str = ".pgp"
    temp_suffix: str = ".tmp"

    def __post_init__(self) -> None:
        if self.mode is OutputMode.MIRROR and self.output_dir is None:
            msg = "output_dir is required in mirror mode"
            raise ValueError(msg)
        if self.mode is OutputMode.IN_PLACE and self.output_dir is not None:
            msg = "output_dir cannot be used in in-place mode"
            raise ValueError(msg)
        for name in ("encrypted_suffix", "temp_suffix"):
            suffix = getattr(self, name)
            if len(suffix) < 2 or not suffix.startswith("."):
                msg = f"{name} must start with '.' and be non-empty"
                raise ValueError(msg)
