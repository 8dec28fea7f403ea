"""
Validation of resolved request fields and interactive passphrases.

Each check raises a typed error carrying the message that ends up in the
diagnostic log; callers decide how to report it.
"""

from __future__ import annotations

import os

from .errors import CompressionError, DirectoryError, EncryptionError
from .request import COMPRESSION_CHOICES


def validate_directory(directory: str) -> None:
    if not directory or not os.path.isdir(directory):
        raise DirectoryError(
            f"Error: The directory '{directory}' does not exist or is not a directory."
        )


def validate_compression(compression: str) -> None:
    if compression not in COMPRESSION_CHOICES:
        raise CompressionError(
            f"Warning: Invalid compression '{compression}'. "
            f"Valid options: {', '.join(COMPRESSION_CHOICES)}"
        )


def validate_passphrase(passphrase: str, confirmation: str | None = None) -> None:
    """Reject empty passphrases and mismatched confirmations.

    The passphrase itself never appears in the error message.
    """
    if not passphrase:
        raise EncryptionError("Error: passphrase cannot be empty.")
    if confirmation is not None and passphrase != confirmation:
        raise EncryptionError("Error: passphrases do not match.")
