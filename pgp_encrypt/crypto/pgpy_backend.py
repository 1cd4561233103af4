"""
Crypto backend implementation using pgpy library.

This is the current implementation that can be swapped out later
if we need to move to python-gnupg or a different library.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

import pgpy
import structlog
from pgpy.constants import CompressionAlgorithm, KeyFlags, SymmetricKeyAlgorithm

from pgp_encrypt.exceptions import EncryptionError, PgpKeyError

logger = structlog.get_logger(__name__)

_TRANSPORT_FLAGS = frozenset({KeyFlags.EncryptCommunications})
_CIPHER = SymmetricKeyAlgorithm.AES256


@dataclass(frozen=True)
class PgpyRecipient:
    """Wrapper around pgpy.PGPKey to implement Recipient protocol."""

    _key: pgpy.PGPKey
    # pgpy subkeys only hold a weak reference to their primary key.
    _certificate: pgpy.PGPKey | None = None

    @property
    def key_id(self) -> str:
        return str(self._key.fingerprint.keyid)

    @property
    def fingerprint(self) -> str:
        return str(self._key.fingerprint)

    @property
    def pgpy_key(self) -> pgpy.PGPKey:
        return self._key


class PgpyBackend:
    """
    Crypto backend implementation using pgpy.

    Example:
        backend = PgpyBackend()
        recipients = backend.load_recipients(Path("alice.asc").read_bytes())
        ciphertext = backend.encrypt(recipients, b"hello")
    """

    @staticmethod
    def parse_certificate(data: bytes) -> pgpy.PGPKey:
        """
        Parse a certificate from armored or binary bytes.

        Secret keys are accepted; only their public half is returned.

        Args:
            data: Raw key file content.

        Returns:
            Public pgpy.PGPKey.

        Raises:
            PgpKeyError: If the data is not a certificate.
        """
        try:
            key, _ = pgpy.PGPKey.from_blob(data)
        except Exception as e:
            msg = f"Invalid public key: {e}"
            raise PgpKeyError(msg) from e
        if not isinstance(key, pgpy.PGPKey):
            msg = "Invalid public key: no key found in key file"
            raise PgpKeyError(msg)
        if not key.is_public:
            key = key.pubkey
        return key

    def select_recipients(
        self, certificate: pgpy.PGPKey, *, at: datetime | None = None
    ) -> tuple[PgpyRecipient, ...]:
        """
        Select the keys of a certificate usable for transport encryption.

        Args:
            certificate: Certificate returned by ``parse_certificate``.
            at: Reference time for liveness checks (default: now).

        Returns:
            Non-empty tuple of recipients, primary key first.

        Raises:
            PgpKeyError: If no key qualifies.
        """
        now = _as_utc(at) if at is not None else datetime.now(timezone.utc)
        if self._is_revoked(certificate) or not self._is_alive(certificate, now):
            msg = "No valid encryption key found in the certificate"
            raise PgpKeyError(msg, fingerprint=str(certificate.fingerprint))

        candidates = [certificate, *certificate.subkeys.values()]
        recipients = tuple(
            PgpyRecipient(_key=key, _certificate=certificate)
            for key in candidates if self._is_usable(key, now)
        )
        if len(recipients) == 0:
            msg = "No valid encryption key found in the certificate"
            raise PgpKeyError(msg, fingerprint=str(certificate.fingerprint))

        logger.debug(
            "Selected recipients",
            fingerprint=str(certificate.fingerprint),
            key_ids=[r.key_id for r in recipients],
        )
        return recipients

    def load_recipients(self, data: bytes) -> tuple[PgpyRecipient, ...]:
        """
        Parse a certificate and select its recipients.

        Raises:
            PgpKeyError: If parsing fails or no key qualifies.
        """
        return self.select_recipients(self.parse_certificate(data))

    @staticmethod
    def encrypt(recipients: Sequence[PgpyRecipient], plaintext: bytes) -> bytes:
        """
        Encrypt data to every recipient.

        All recipients share one session key; each gets its own PKESK packet
        in front of a single encrypted literal data packet.

        Args:
            recipients: Keys returned by ``select_recipients``.
            plaintext: Whole file content.

        Returns:
            Binary OpenPGP message.

        Raises:
            EncryptionError: If the message cannot be built.
        """
        if len(recipients) == 0:
            msg = "Failed to create encryptor: no recipients"
            raise EncryptionError(msg)
        try:
            message = pgpy.PGPMessage.new(
                bytes(plaintext), compression=CompressionAlgorithm.Uncompressed
            )
        except Exception as e:
            msg = f"Failed to create writer: {e}"
            raise EncryptionError(msg) from e

        session_key = _CIPHER.gen_key()
        try:
            for recipient in recipients:
                message = recipient.pgpy_key.encrypt(
                    message, cipher=_CIPHER, sessionkey=session_key
                )
        except Exception as e:
            msg = f"Failed to write data: {e}"
            raise EncryptionError(msg) from e

        try:
            return bytes(message)
        except Exception as e:
            msg = f"Failed to finalize encryption: {e}"
            raise EncryptionError(msg) from e

    def _is_usable(self, key: pgpy.PGPKey, now: datetime) -> bool:
        return (
            key.key_algorithm.can_encrypt
            and bool(self._key_flags(key) & _TRANSPORT_FLAGS)
            and self._is_alive(key, now)
            and not self._is_revoked(key)
        )

    @staticmethod
    def _is_alive(key: pgpy.PGPKey, now: datetime) -> bool:
        created = _as_utc(key.created)
        if created > now:
            return False
        expires_at = PgpyBackend._expires_at(key)
        return expires_at is None or _as_utc(expires_at) > now

    @staticmethod
    def _expires_at(key: pgpy.PGPKey) -> datetime | None:
        # expires_at only reads user ID self-signatures, so subkey binding and
        # direct-key signatures are checked here.
        expirations = [key.expires_at] if key.is_primary else []
        signatures = list(key.self_signatures)
        if signatures:
            newest = max(signatures, key=lambda sig: _as_utc(sig.created))
            if newest.key_expiration is not None:
                expirations.append(key.created + newest.key_expiration)
        known = [e for e in expirations if e is not None]
        if len(known) == 0:
            return None
        return max(known, key=_as_utc)

    @staticmethod
    def _is_revoked(key: pgpy.PGPKey) -> bool:
        return any(True for _ in key.revocation_signatures)

    @staticmethod
    def _key_flags(key: pgpy.PGPKey) -> set[KeyFlags]:
        try:
            return set(key._get_key_flags())
        except StopIteration:
            # Subkey without a binding signature.
            return set()


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment
