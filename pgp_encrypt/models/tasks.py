"""
File processing domain models.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, kw_only=True)
class FileTask:
    """
    A single plaintext file scheduled for encryption.

    In in-place mode ``destination`` equals ``source``.
    """

    source: Path
    relative: Path  # Path below the input root
    destination: Path

    @property
    def in_place(self) -> bool:
        return self.source == self.destination


@dataclass(kw_only=True)
class RunSummary:
    """Outcome of a completed run."""

    encrypted: int = 0
    skipped: int = 0
    written: list[Path] = field(default_factory=list)

    def record(self, destination: Path) -> None:
        self.encrypted += 1
        self.written.append(destination)
