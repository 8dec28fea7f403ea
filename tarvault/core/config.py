"""
Persistent preferences (config.toml) and environment overrides.

Config file: ``$XDG_CONFIG_HOME/tarvault/config.toml`` (falls back to
``~/.config/tarvault/config.toml``).

Recognised keys::

    debug = false            # true / 1 -> verbose progress output
    log_file = "error.log"   # diagnostic log path
    archiver = "tarfile"     # "tarfile" (native) or "tar" (external tool)
    cipher = "aes-256-cbc"   # "aes-256-cbc" (native) or "openssl"

Environment variables win over the file: ``DEBUG`` (0/1),
``TARVAULT_LOG_FILE``, ``TARVAULT_ARCHIVER``, ``TARVAULT_CIPHER``.
Unknown keys and invalid values are dropped silently.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .log import DEFAULT_LOG_FILE

_CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "tarvault"
_CONFIG_FILE = _CONFIG_DIR / "config.toml"

ARCHIVER_NAMES = ("tarfile", "tar")
CIPHER_NAMES = ("aes-256-cbc", "openssl")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}

_ENV_KEYS = {
    "DEBUG": "debug",
    "TARVAULT_LOG_FILE": "log_file",
    "TARVAULT_ARCHIVER": "archiver",
    "TARVAULT_CIPHER": "cipher",
}


@dataclass(frozen=True)
class Settings:
    debug: bool = False
    log_file: str = DEFAULT_LOG_FILE
    archiver: str = "tarfile"
    cipher: str = "aes-256-cbc"


def _parse_bool(value) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    return None


def _clean(raw: dict) -> dict:
    """Keep only known keys with acceptable values."""
    cleaned: dict = {}
    if "debug" in raw:
        flag = _parse_bool(raw["debug"])
        if flag is not None:
            cleaned["debug"] = flag
    log_file = raw.get("log_file")
    if isinstance(log_file, str) and log_file.strip():
        cleaned["log_file"] = log_file.strip()
    if raw.get("archiver") in ARCHIVER_NAMES:
        cleaned["archiver"] = raw["archiver"]
    if raw.get("cipher") in CIPHER_NAMES:
        cleaned["cipher"] = raw["cipher"]
    return cleaned


def load_config() -> dict:
    """Load the config file. Returns {} if missing or unreadable."""
    try:
        with open(_CONFIG_FILE, "rb") as f:
            raw = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return _clean(raw)


def load_environment(environ=None) -> dict:
    """Pick the recognised variables out of the environment."""
    environ = os.environ if environ is None else environ
    raw = {key: environ[var] for var, key in _ENV_KEYS.items() if var in environ}
    return _clean(raw)


def load_settings(environ=None) -> Settings:
    """File values, then environment values on top, over the defaults."""
    merged = load_config()
    merged.update(load_environment(environ))
    return Settings(**merged)
