"""
Cryptographic operations for pgp-encrypt.

This module provides:
- Certificate parsing and recipient selection
- OpenPGP message encryption to one or more recipients
"""

from pgp_encrypt.crypto.pgpy_backend import PgpyBackend, PgpyRecipient
from pgp_encrypt.crypto.protocol import CryptoBackend, Recipient

__all__ = [
    "CryptoBackend",
    "Recipient",
    "PgpyBackend",
    "PgpyRecipient",
]
