"""
Command-line interface.

Two mutually exclusive argument styles:

    tarvault <DIRECTORY> [<COMPRESSION>] [<OUTPUT_FILE>]
    tarvault -i <DIRECTORY> [-c <COMPRESSION>] [-o <OUTPUT_FILE>]

The passphrase is always read interactively (never from argv), or as one
line from stdin when no terminal is available.
"""

from __future__ import annotations

import getpass
import logging
import sys

from .core.archiver import get_archiver
from .core.ciphers import get_cipher
from .core.config import load_settings
from .core.errors import (
    CollaboratorError,
    CompressionError,
    DirectoryError,
    TarvaultError,
    ValidationError,
)
from .core.log import (
    DIAGNOSTIC_LOGGER,
    configure_logging,
    get_progress_logger,
    shutdown_logging,
)
from .core.pipeline import BackupPipeline
from .core.request import COMPRESSION_CHOICES, DEFAULT_COMPRESSION, BackupRequest, derive_paths
from .core.validation import validate_compression, validate_directory, validate_passphrase

logger = logging.getLogger(DIAGNOSTIC_LOGGER)

PROG = "tarvault"
HELP_FLAGS = ("-h", "--help")
VERBOSE_FLAGS = ("-v", "--verbose")
QUIET_FLAGS = ("-q", "--quiet")
MAX_POSITIONAL = 3

# named-mode flag -> field it sets
NAMED_FLAGS = {
    "-i": "input", "--input": "input",
    "-c": "compression", "--compression": "compression",
    "-o": "output", "--output": "output",
}

EXIT_INTERRUPTED = 130

USAGE = f"""\
Usage:
  1) Positional mode:
    {PROG} <DIRECTORY> [<COMPRESSION>] [<OUTPUT_FILE>]
      - <DIRECTORY> is required.
      - <COMPRESSION> defaults to "none" if omitted.
      - <OUTPUT_FILE> defaults to "<DIRECTORY>.backup.enc" if omitted.

  2) Named arguments mode:
    {PROG} -i <DIRECTORY> [-c <COMPRESSION>] [-o <OUTPUT_FILE>]

Description:
  Creates a tar archive from <DIRECTORY> with an optional compression
  method ({", ".join(COMPRESSION_CHOICES)}) and encrypts it with AES-256-CBC
  (PBKDF2-derived key). The plaintext archive is removed afterwards.

Options:
  -h, --help      Show this help message (recognized anywhere in arguments)
  -v, --verbose   Echo the resolved settings and progress (same as DEBUG=1)
  -q, --quiet     Suppress progress output (same as DEBUG=0)

Examples:
  # Positional:
    {PROG} /var/log           # compression "none", output "log.backup.enc"
    {PROG} /home/user gzip    # gzip, output "user.backup.enc"
    {PROG} /var/www/html gzip html_backup.tar.gz

  # Named:
    {PROG} -i /srv/data -c xz -o data_backup.tar.xz
    {PROG} -i /var/www/html   # compression "none", output "html.backup.enc"

Restore:
  openssl enc -d -aes-256-cbc -pbkdf2 -in <encrypted_backup> -out <decrypted_backup>
  tar -xaf <decrypted_backup>

Exit status:
  0 success, 1 missing or invalid directory, 2 invalid compression,
  5 plaintext temp archive could not be removed, otherwise the failing
  archiver's or cipher's status.
  Warnings and errors are appended to the diagnostic log (error.log).
"""


def _wants_help(argv: list[str]) -> bool:
    return any(arg in HELP_FLAGS for arg in argv)


def _verbosity(argv: list[str], default: bool) -> bool:
    """Last -v/-q on the command line wins over the configured default."""
    verbose = default
    for arg in argv:
        if arg in VERBOSE_FLAGS:
            verbose = True
        elif arg in QUIET_FLAGS:
            verbose = False
    return verbose


def _parse_named(argv: list[str]) -> tuple[str, str | None, str | None]:
    """Each flag takes the next token as its value, whatever it looks like.

    ``-c -- -i data`` sets compression to ``--``. Unknown tokens are
    skipped; a trailing flag with no value resolves to "".
    """
    values: dict[str, str] = {}
    tokens = iter(argv)
    for token in tokens:
        field = NAMED_FLAGS.get(token)
        if field is not None:
            values[field] = next(tokens, "")
    return (values.get("input") or "", values.get("compression") or None,
            values.get("output") or None)


def _parse_positional(argv: list[str]) -> tuple[str, str | None, str | None]:
    if not argv:
        raise DirectoryError("Error: Missing directory argument.")
    if len(argv) > MAX_POSITIONAL:
        logger.warning("*** WARNING : extra positional arguments will be ignored.")
    directory = argv[0]
    compression = argv[1] if len(argv) >= 2 else None
    output = argv[2] if len(argv) >= 3 else None
    return directory, compression, output


def resolve_request(argv: list[str], verbose: bool = False) -> BackupRequest:
    """
    Turn raw arguments into a validated BackupRequest.

    A help flag anywhere prints usage and exits 0 before anything else is
    looked at. Raises DirectoryError / CompressionError on invalid input.
    """
    if _wants_help(argv):
        print(USAGE, end="")
        sys.exit(0)

    tokens = [arg for arg in argv if arg not in VERBOSE_FLAGS + QUIET_FLAGS]
    if tokens and tokens[0].startswith("-"):
        directory, compression, output = _parse_named(tokens)
    else:
        directory, compression, output = _parse_positional(tokens)

    output_path, temp_path = derive_paths(directory, output)
    request = BackupRequest(
        directory=directory,
        compression=compression or DEFAULT_COMPRESSION,
        output_path=output_path,
        temp_archive_path=temp_path,
        verbose=verbose,
    )

    if verbose:
        progress = get_progress_logger()
        for line in request.describe():
            progress.info(line)

    validate_directory(request.directory)
    validate_compression(request.compression)
    return request


def read_passphrase(prompt: str = "Enter encryption passphrase: ", confirm: bool = True) -> str:
    """Read the passphrase from the terminal (never from argv).

    getpass uses /dev/tty on Unix, so the prompt works even when stdout is
    redirected. Falls back to one stdin line when no TTY is available at
    all (headless CI); confirmation is skipped in that case.
    """
    try:
        passphrase = getpass.getpass(prompt)
    except OSError:
        passphrase = sys.stdin.readline().rstrip("\n")
        validate_passphrase(passphrase)
        return passphrase

    confirmation = None
    if confirm:
        try:
            confirmation = getpass.getpass("Verify encryption passphrase: ")
        except OSError:
            confirmation = ""
    validate_passphrase(passphrase, confirmation)
    return passphrase


def run_cli(argv: list[str] | None = None) -> None:
    """Run the backup CLI. Exits with a non-zero status on any failure."""
    argv = sys.argv[1:] if argv is None else list(argv)

    settings = load_settings()
    verbose = _verbosity(argv, settings.debug)
    configure_logging(verbose=verbose, log_file=settings.log_file)

    try:
        request = resolve_request(argv, verbose=verbose)
        pipeline = BackupPipeline(
            read_passphrase,
            archiver=get_archiver(settings.archiver),
            cipher=get_cipher(settings.cipher),
        )
        pipeline.run(request)
    except CompressionError as exc:
        logger.warning(str(exc))
        sys.exit(exc.exit_code)
    except ValidationError as exc:
        logger.error(str(exc))
        sys.exit(exc.exit_code)
    except CollaboratorError as exc:
        logger.error(str(exc))
        sys.exit(exc.exit_code)
    except TarvaultError as exc:
        logger.error(str(exc))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        sys.exit(EXIT_INTERRUPTED)
    finally:
        shutdown_logging()
