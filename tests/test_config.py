"""Tests for persistent preferences (config.toml) and environment overrides."""

from unittest.mock import patch

from tarvault.core.config import (
    Settings,
    load_config,
    load_environment,
    load_settings,
)


class TestLoadConfig:
    def test_missing_file_returns_empty(self, tmp_path):
        cfg_file = tmp_path / "nonexistent" / "config.toml"
        with patch("tarvault.core.config._CONFIG_FILE", cfg_file):
            assert load_config() == {}

    def test_all_keys(self, tmp_path):
        cfg_file = tmp_path / "config.toml"
        cfg_file.write_text(
            'debug = true\nlog_file = "/var/log/tarvault.log"\n'
            'archiver = "tar"\ncipher = "openssl"\n'
        )
        with patch("tarvault.core.config._CONFIG_FILE", cfg_file):
            assert load_config() == {
                "debug": True,
                "log_file": "/var/log/tarvault.log",
                "archiver": "tar",
                "cipher": "openssl",
            }

    def test_invalid_keys_skipped(self, tmp_path):
        cfg_file = tmp_path / "config.toml"
        cfg_file.write_text('unknown_key = "value"\narchiver = "tarfile"\n')
        with patch("tarvault.core.config._CONFIG_FILE", cfg_file):
            loaded = load_config()
            assert "unknown_key" not in loaded
            assert loaded["archiver"] == "tarfile"

    def test_invalid_values_skipped(self, tmp_path):
        cfg_file = tmp_path / "config.toml"
        cfg_file.write_text('archiver = "zip"\ncipher = "rot13"\nlog_file = ""\ndebug = "maybe"\n')
        with patch("tarvault.core.config._CONFIG_FILE", cfg_file):
            assert load_config() == {}

    def test_integer_debug(self, tmp_path):
        cfg_file = tmp_path / "config.toml"
        cfg_file.write_text("debug = 1\n")
        with patch("tarvault.core.config._CONFIG_FILE", cfg_file):
            assert load_config() == {"debug": True}

    def test_malformed_toml_returns_empty(self, tmp_path):
        cfg_file = tmp_path / "config.toml"
        cfg_file.write_text("debug = = true\n")
        with patch("tarvault.core.config._CONFIG_FILE", cfg_file):
            assert load_config() == {}


class TestLoadEnvironment:
    def test_debug_toggle(self):
        assert load_environment({"DEBUG": "1"}) == {"debug": True}
        assert load_environment({"DEBUG": "0"}) == {"debug": False}

    def test_unrelated_variables_ignored(self):
        assert load_environment({"HOME": "/root", "PATH": "/bin"}) == {}

    def test_collaborators(self):
        env = {"TARVAULT_ARCHIVER": "tar", "TARVAULT_CIPHER": "openssl",
               "TARVAULT_LOG_FILE": "diag.log"}
        assert load_environment(env) == {
            "archiver": "tar", "cipher": "openssl", "log_file": "diag.log",
        }

    def test_invalid_values_dropped(self):
        assert load_environment({"DEBUG": "perhaps", "TARVAULT_CIPHER": "des"}) == {}


class TestLoadSettings:
    def test_defaults(self, tmp_path):
        with patch("tarvault.core.config._CONFIG_FILE", tmp_path / "missing.toml"):
            assert load_settings({}) == Settings(
                debug=False, log_file="error.log", archiver="tarfile", cipher="aes-256-cbc",
            )

    def test_environment_overrides_file(self, tmp_path):
        cfg_file = tmp_path / "config.toml"
        cfg_file.write_text('debug = true\narchiver = "tar"\n')
        with patch("tarvault.core.config._CONFIG_FILE", cfg_file):
            settings = load_settings({"DEBUG": "0"})
            assert settings.debug is False
            assert settings.archiver == "tar"
