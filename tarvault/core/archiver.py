"""
Archive builders.

Strategy interface with two interchangeable implementations:

  - ``TarfileArchiver``: native, stdlib ``tarfile``.
  - ``TarCommandArchiver``: shells out to the system ``tar``.

Both store the directory under the path it was given (relative stays
relative, a leading ``/`` is stripped) and raise ``ArchiveError`` on any
failure. To unpack a decrypted backup: ``tar -xaf <decrypted_backup>``.
"""

from __future__ import annotations

import logging
import os
import subprocess
import tarfile
from abc import ABC, abstractmethod

from .errors import ArchiveError, ConfigurationError
from .files import remove_partial

logger = logging.getLogger(__name__)

# compression name -> tarfile write mode
TARFILE_MODES = {
    "none": "w",
    "gzip": "w:gz",
    "bzip2": "w:bz2",
    "xz": "w:xz",
}

# compression name -> extra tar(1) flags
TAR_FLAGS = {
    "none": [],
    "gzip": ["--gzip"],
    "bzip2": ["--bzip2"],
    "xz": ["--xz"],
}


class Archiver(ABC):
    """Abstract base for archive builders."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used in config (``archiver = ...``)."""

    @abstractmethod
    def build(self, directory: str, compression: str, dest: str) -> str:
        """Archive ``directory`` into ``dest``. Returns ``dest``."""


class TarfileArchiver(Archiver):
    name = "tarfile"

    def build(self, directory: str, compression: str, dest: str) -> str:
        mode = TARFILE_MODES.get(compression)
        if mode is None:
            raise ArchiveError(f"Unsupported compression '{compression}'")
        if not os.path.isdir(directory):
            raise ArchiveError(f"Not a directory: {directory}")

        try:
            with tarfile.open(dest, mode) as tar:
                tar.add(directory, recursive=True)
        except (OSError, tarfile.TarError) as exc:
            remove_partial(dest)
            raise ArchiveError(f"Failed to create archive: {exc}") from exc
        return dest


class TarCommandArchiver(Archiver):
    """Runs ``tar -c [--gzip|--bzip2|--xz] -f DEST DIRECTORY``."""

    name = "tar"

    def __init__(self, executable: str = "tar"):
        self.executable = executable

    def command(self, directory: str, compression: str, dest: str) -> list[str]:
        flags = TAR_FLAGS.get(compression)
        if flags is None:
            raise ArchiveError(f"Unsupported compression '{compression}'")
        return [self.executable, "-c", *flags, "-f", dest, directory]

    def build(self, directory: str, compression: str, dest: str) -> str:
        cmd = self.command(directory, compression, dest)
        try:
            result = subprocess.run(cmd, stdout=subprocess.DEVNULL,
                                    stderr=subprocess.PIPE, text=True)
        except OSError as exc:
            raise ArchiveError(f"Cannot run {self.executable}: {exc}") from exc

        if result.stderr:
            # tar warns on stderr even on success ("Removing leading '/'")
            logger.warning(result.stderr.rstrip("\n"))
        if result.returncode != 0:
            raise ArchiveError(
                f"{self.executable} exited with status {result.returncode}",
                exit_code=result.returncode,
            )
        return dest


ARCHIVER_CHOICES: dict[str, type[Archiver]] = {
    "tarfile": TarfileArchiver,
    "tar": TarCommandArchiver,
}


def get_archiver(name: str) -> Archiver:
    try:
        return ARCHIVER_CHOICES[name]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown archiver '{name}' (choices: {', '.join(ARCHIVER_CHOICES)})"
        ) from None
