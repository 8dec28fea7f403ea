"""
Backup pipeline - sequences archive, encrypt and cleanup for one request.

Stages run strictly in order::

    PARSED -> ARCHIVED -> ENCRYPTED -> CLEANED_UP -> DONE

A collaborator failure stops the remaining stages and propagates, but the
plaintext temp archive is removed in every case. If that removal fails after
an otherwise successful run, ``CleanupError`` is raised instead of reporting
success. Collaborator failures are not logged here; the CLI is the single
place that turns them into log lines and exit codes.
"""

from __future__ import annotations

import enum
import logging
import os
from typing import Callable

from .archiver import Archiver, TarfileArchiver
from .ciphers import AES256CBCCipher, FileCipher
from .errors import CleanupError
from .log import get_progress_logger
from .request import BackupRequest

logger = logging.getLogger(__name__)


class Stage(enum.Enum):
    PARSED = "parsed"
    ARCHIVED = "archived"
    ENCRYPTED = "encrypted"
    CLEANED_UP = "cleaned-up"
    DONE = "done"


class BackupPipeline:
    """
    Archive a directory, encrypt the archive, remove the plaintext.

    Parameters:
        passphrase_provider: zero-argument callable returning the
            passphrase. Called after archiving, right before encryption,
            so the passphrase is never part of the request.
        archiver: builds the temp archive (default: native tarfile).
        cipher: encrypts the temp archive (default: native AES-256-CBC).
    """

    def __init__(
        self,
        passphrase_provider: Callable[[], str],
        archiver: Archiver | None = None,
        cipher: FileCipher | None = None,
    ):
        self.passphrase_provider = passphrase_provider
        self.archiver = archiver or TarfileArchiver()
        self.cipher = cipher or AES256CBCCipher()
        self.stage: Stage | None = None

    def run(self, request: BackupRequest) -> str:
        """Run every stage. Returns the encrypted output path."""
        progress = get_progress_logger()
        self.stage = Stage.PARSED
        try:
            progress.info(
                "Archiving %s (compression: %s) -> %s",
                request.directory, request.compression, request.temp_archive_path,
            )
            self.archiver.build(request.directory, request.compression,
                                request.temp_archive_path)
            self.stage = Stage.ARCHIVED

            passphrase = self.passphrase_provider()
            progress.info("Encrypting %s -> %s (%s)",
                          request.temp_archive_path, request.output_path, self.cipher.name)
            self.cipher.encrypt(request.temp_archive_path, request.output_path, passphrase)
            self.stage = Stage.ENCRYPTED
        finally:
            # Runs on failure too; the original exception keeps propagating
            cleanup_error = self._cleanup(request)

        if cleanup_error is not None:
            raise CleanupError(
                f"Error: plaintext temp archive {request.temp_archive_path} "
                f"was left on disk: {cleanup_error}"
            ) from cleanup_error

        self.stage = Stage.DONE
        progress.info("Backup written to %s", request.output_path)
        return request.output_path

    def _cleanup(self, request: BackupRequest) -> OSError | None:
        """Remove the plaintext temp archive. Returns the error, never raises it."""
        if os.path.isdir(request.temp_archive_path):
            # Not ours: the archiver refused to write over it
            return None
        try:
            os.remove(request.temp_archive_path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.error("Could not remove temp archive %s: %s",
                         request.temp_archive_path, exc)
            return exc
        self.stage = Stage.CLEANED_UP
        return None
