"""
Key derivation.

PBKDF2-HMAC-SHA256 with the parameters ``openssl enc -pbkdf2`` uses by
default (8-byte salt, 10000 iterations), so the native cipher stays
compatible with the openssl command line.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


class KDF(ABC):
    """Abstract base for key derivation functions."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name."""

    @property
    @abstractmethod
    def salt_size(self) -> int:
        """Required salt length in bytes."""

    @abstractmethod
    def derive(self, password: bytes | bytearray, salt: bytes, key_length: int = 32) -> bytearray:
        """Derive ``key_length`` bytes from a password and salt.

        Returns a mutable bytearray so callers can zero it after use.
        """

    def generate_salt(self) -> bytes:
        return os.urandom(self.salt_size)


class PBKDF2KDF(KDF):
    """PBKDF2 (RFC 8018) with HMAC-SHA256."""

    name = "PBKDF2-HMAC-SHA256"
    salt_size = 8

    def __init__(self, iterations: int = 10000):
        self.iterations = iterations

    def derive(self, password: bytes | bytearray, salt: bytes, key_length: int = 32) -> bytearray:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=key_length,
            salt=salt,
            iterations=self.iterations,
        )
        return bytearray(kdf.derive(bytes(password)))
