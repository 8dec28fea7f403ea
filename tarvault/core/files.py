"""Filesystem helpers shared by the archivers and ciphers."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


def remove_partial(path: str) -> None:
    """Remove a half-written output file, if there is one.

    Never raises: it runs inside error handlers, where the original failure
    is the one worth reporting. A directory at ``path`` is left alone.
    """
    if os.path.isdir(path):
        return
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove partial file %s: %s", path, exc)
