"""Structured error types for TARVAULT.

Validation and format errors also inherit from ``ValueError`` so callers
that only care about "bad input" can catch that.

Hierarchy::

    TarvaultError (Exception)
    +-- ValidationError      - bad CLI input, carries an exit code
    |   +-- DirectoryError   - missing / not a directory (exit 1)
    |   +-- CompressionError - unknown compression name (exit 2)
    +-- ConfigurationError   - unknown archiver or cipher name
    +-- CollaboratorError    - archiver or cipher failed, carries an exit code
    |   +-- ArchiveError
    |   +-- EncryptionError
    |   +-- CleanupError     - plaintext temp archive could not be removed
    +-- FormatError          - encrypted file header is malformed
    +-- DecryptionError      - wrong passphrase or corrupted payload
"""

from __future__ import annotations


class TarvaultError(Exception):
    """Base class for all TARVAULT errors."""


class ValidationError(TarvaultError, ValueError):
    """A resolved request field failed validation."""

    exit_code = 1


class DirectoryError(ValidationError):
    """The backup directory does not exist or is not a directory."""

    exit_code = 1


class CompressionError(ValidationError):
    """The compression name is not one of the supported values."""

    exit_code = 2


class ConfigurationError(TarvaultError, ValueError):
    """Unknown collaborator name in config or environment."""


class CollaboratorError(TarvaultError):
    """An external collaborator (archiver, cipher) failed.

    ``exit_code`` is the tool's own exit status when there is one, so the
    process can report it unchanged.
    """

    default_exit_code = 1

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.exit_code = exit_code if exit_code else self.default_exit_code


class ArchiveError(CollaboratorError):
    """Archive creation failed."""

    default_exit_code = 3


class EncryptionError(CollaboratorError):
    """Encryption failed or no usable passphrase was supplied."""

    default_exit_code = 4


class CleanupError(CollaboratorError):
    """The plaintext temp archive was left on disk after a successful run."""

    default_exit_code = 5


class FormatError(TarvaultError, ValueError):
    """Encrypted file is not in the salted format (bad magic, truncated)."""


class DecryptionError(TarvaultError, ValueError):
    """Decryption failed: wrong passphrase or corrupted data."""
