"""
Crypto backend protocol definition.

This defines the interface for OpenPGP operations, allowing different implementations
(pgpy, python-gnupg, etc.) to be swapped without touching the orchestration code.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Recipient(Protocol):
    """Protocol for an encryption-capable public (sub)key."""

    @property
    def key_id(self) -> str:
        """Get the key ID."""
        ...

    @property
    def fingerprint(self) -> str:
        """Get the key fingerprint."""
        ...


@runtime_checkable
class CryptoBackend(Protocol):
    """
    Abstract interface for the OpenPGP operations needed to encrypt files.

    Implementations can use pgpy, python-gnupg, or anything else able to
    produce a standard OpenPGP message.
    """

    def parse_certificate(self, data: bytes) -> Any:
        """
        Parse a certificate from armored or binary bytes.

        Args:
            data: Raw key file content.

        Returns:
            A backend-specific certificate object.

        Raises:
            PgpKeyError: If the data is not a certificate.
        """
        ...

    def select_recipients(
        self, certificate: Any, *, at: datetime | None = None
    ) -> tuple[Recipient, ...]:
        """
        Select the keys of a certificate usable for transport encryption.

        Only keys that are supported, alive, not revoked and flagged for
        encrypting communications at ``at`` (default: now) are kept.

        Args:
            certificate: Certificate returned by ``parse_certificate``.
            at: Reference time for liveness checks.

        Returns:
            Non-empty tuple of recipients.

        Raises:
            PgpKeyError: If no key qualifies.
        """
        ...

    def load_recipients(self, data: bytes) -> tuple[Recipient, ...]:
        """
        Parse a certificate and select its recipients in one step.

        Raises:
            PgpKeyError: If parsing fails or no key qualifies.
        """
        ...

    def encrypt(self, recipients: Sequence[Recipient], plaintext: bytes) -> bytes:
        """
        Encrypt data to every recipient.

        The result is a binary OpenPGP message holding a single literal data
        packet inside one encryption container.

        Args:
            recipients: Keys returned by ``select_recipients``.
            plaintext: Whole file content.

        Returns:
            Serialized OpenPGP message.

        Raises:
            EncryptionError: If the message cannot be built.
        """
        ...
