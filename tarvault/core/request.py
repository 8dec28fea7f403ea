"""
The resolved, validated description of one backup run.

A ``BackupRequest`` is built once by the CLI resolver and handed to the
archiver, the cipher and the pipeline. It never changes after validation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

COMPRESSION_CHOICES = ("none", "gzip", "bzip2", "xz")
DEFAULT_COMPRESSION = "none"

OUTPUT_SUFFIX = ".backup.enc"
TEMP_SUFFIX = ".backup.temp"

# Used when the directory normalises to nothing nameable (e.g. "/").
_FALLBACK_BASE = "backup"


@dataclass(frozen=True)
class BackupRequest:
    """Everything a backup run needs, minus the passphrase."""
    directory: str
    compression: str
    output_path: str
    temp_archive_path: str
    verbose: bool = False

    def describe(self) -> list[str]:
        """Field dump in the order and naming the diagnostics use."""
        return [
            f"BACKUP_DIR: {self.directory}",
            f"COMPRESSION: {self.compression}",
            f"OUTPUT_FILE: {self.output_path}",
            f"TEMP_TAR: {self.temp_archive_path}",
        ]


def base_name(path: str) -> str:
    """Last path component after normalisation, so ``/x/y/`` gives ``y``."""
    if not path:
        return ""
    name = os.path.basename(os.path.normpath(path))
    if name in ("", os.sep, "/"):
        return _FALLBACK_BASE
    return name


def derive_paths(directory: str, output: str | None) -> tuple[str, str]:
    """
    Return ``(output_path, temp_archive_path)``.

    Without an explicit output both names come from the directory's base
    name. With one, the temp name is the output's base name plus the temp
    suffix, which keeps it distinct from the output.
    """
    if output:
        return output, base_name(output) + TEMP_SUFFIX
    base = base_name(directory)
    if not base:
        # No directory either; the existence check reports it later.
        return "", TEMP_SUFFIX
    return base + OUTPUT_SUFFIX, base + TEMP_SUFFIX
