"""
Shared pytest fixtures.

- sample_tree: a small directory tree with text, binary and nested files
- workdir: isolated working directory with no config file or env overrides
- passphrase: patches getpass so the pipeline never touches a terminal
"""

import os
from unittest.mock import patch

import pytest

from tarvault.core.log import shutdown_logging

PASSPHRASE = "correct horse battery staple"

_ENV_VARS = ("DEBUG", "TARVAULT_LOG_FILE", "TARVAULT_ARCHIVER", "TARVAULT_CIPHER")


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    shutdown_logging()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run inside tmp_path/work with defaults only (no config, no env)."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("tarvault.core.config._CONFIG_FILE",
                        tmp_path / "no-such-dir" / "config.toml")
    return work


@pytest.fixture
def sample_tree(workdir):
    """Relative directory ``data`` inside the working directory."""
    root = workdir / "data"
    (root / "nested" / "deeper").mkdir(parents=True)
    (root / "readme.txt").write_text("Top secret contents\nLine 2\n")
    (root / "nested" / "blob.bin").write_bytes(os.urandom(4096))
    (root / "nested" / "deeper" / "empty.txt").write_bytes(b"")
    (root / "nested" / "deeper" / "notes.md").write_text("# notes\n" * 200)
    return root


@pytest.fixture
def passphrase():
    with patch("getpass.getpass", return_value=PASSPHRASE) as mocked:
        yield mocked


def tree_contents(root):
    """Map of relative path -> bytes for every file under root."""
    contents = {}
    for dirpath, _dirs, files in os.walk(root):
        for name in files:
            full = os.path.join(dirpath, name)
            with open(full, "rb") as f:
                contents[os.path.relpath(full, root)] = f.read()
    return contents
