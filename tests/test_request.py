"""Tests for BackupRequest and output / temp path derivation."""

import dataclasses

import pytest

from tarvault.core.request import (
    COMPRESSION_CHOICES,
    BackupRequest,
    base_name,
    derive_paths,
)


class TestDerivePaths:
    def test_default_from_absolute_directory(self):
        assert derive_paths("/x/y", None) == ("y.backup.enc", "y.backup.temp")

    def test_default_from_relative_directory(self):
        assert derive_paths("data", None) == ("data.backup.enc", "data.backup.temp")

    def test_trailing_slash_ignored(self):
        assert derive_paths("/x/y/", None) == ("y.backup.enc", "y.backup.temp")

    def test_explicit_output(self):
        output, temp = derive_paths("/srv/data", "archive.tar.xz")
        assert output == "archive.tar.xz"
        assert temp == "archive.tar.xz.backup.temp"

    def test_explicit_output_with_directory_part(self):
        output, temp = derive_paths("/srv/data", "/backups/nightly.enc")
        assert output == "/backups/nightly.enc"
        assert temp == "nightly.enc.backup.temp"

    def test_root_directory_falls_back(self):
        assert derive_paths("/", None) == ("backup.backup.enc", "backup.backup.temp")

    def test_empty_directory_leaves_output_empty(self):
        assert derive_paths("", None) == ("", ".backup.temp")

    @pytest.mark.parametrize("directory,output", [
        ("/x/y", None),
        ("/x/y", "y.backup.enc"),
        ("/x/y", "y"),
        ("data", "out.backup.temp"),
    ])
    def test_temp_never_equals_output(self, directory, output):
        out, temp = derive_paths(directory, output)
        assert out != temp


class TestBaseName:
    def test_normalises(self):
        assert base_name("a/b/../c/") == "c"

    def test_empty(self):
        assert base_name("") == ""


class TestBackupRequest:
    def test_frozen(self):
        request = BackupRequest("data", "none", "data.backup.enc", "data.backup.temp")
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.compression = "xz"

    def test_describe(self):
        request = BackupRequest("data", "gzip", "out.enc", "out.enc.backup.temp")
        assert request.describe() == [
            "BACKUP_DIR: data",
            "COMPRESSION: gzip",
            "OUTPUT_FILE: out.enc",
            "TEMP_TAR: out.enc.backup.temp",
        ]

    def test_compression_choices(self):
        assert COMPRESSION_CHOICES == ("none", "gzip", "bzip2", "xz")
