"""
Best-effort wiping of key material.

Python's immutable ``bytes`` cannot be reliably zeroed, so derived keys are
kept in ``bytearray`` buffers and wiped as soon as the cipher is set up.
"""

from __future__ import annotations

from contextlib import contextmanager


def secure_zero(buf: bytearray) -> None:
    """Overwrite a bytearray with zeros."""
    for i in range(len(buf)):
        buf[i] = 0


@contextmanager
def wiped(buf: bytearray):
    """Yield ``buf`` and zero it on exit, even if the body raises."""
    try:
        yield buf
    finally:
        secure_zero(buf)
