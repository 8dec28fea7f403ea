"""Core backup modules."""

from .errors import (  # noqa: F401
    ArchiveError,
    CleanupError,
    CollaboratorError,
    CompressionError,
    ConfigurationError,
    DecryptionError,
    DirectoryError,
    EncryptionError,
    FormatError,
    TarvaultError,
    ValidationError,
)
from .request import COMPRESSION_CHOICES, BackupRequest  # noqa: F401
