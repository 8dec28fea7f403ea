"""
Salted encrypted-file layout, as written by ``openssl enc -salt``:

    Bytes 0-7:   magic    b"Salted__"
    Bytes 8-15:  salt     (8 random bytes)
    Bytes 16+:   AES-256-CBC ciphertext, PKCS#7 padded

Key and IV are not stored; both are derived from the passphrase and salt.
"""

from __future__ import annotations

from .errors import FormatError

MAGIC = b"Salted__"
SALT_SIZE = 8
HEADER_SIZE = len(MAGIC) + SALT_SIZE  # 16 bytes


def build_header(salt: bytes) -> bytes:
    if len(salt) != SALT_SIZE:
        raise FormatError(f"Salt must be {SALT_SIZE} bytes (got {len(salt)})")
    return MAGIC + salt


def parse_header(header: bytes) -> bytes:
    """Validate the first ``HEADER_SIZE`` bytes of a file and return the salt."""
    if len(header) < HEADER_SIZE:
        raise FormatError(
            f"Encrypted file too short ({len(header)} bytes, need >= {HEADER_SIZE})"
        )
    if header[:len(MAGIC)] != MAGIC:
        raise FormatError("Missing 'Salted__' header: not a salted encrypted file")
    return bytes(header[len(MAGIC):HEADER_SIZE])
