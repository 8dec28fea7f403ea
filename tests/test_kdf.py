"""Tests for key derivation."""

import os

from tarvault.core.kdf import KDF, PBKDF2KDF


class TestPBKDF2KDF:
    def setup_method(self):
        self.kdf = PBKDF2KDF()

    def test_known_vector(self):
        # PBKDF2-HMAC-SHA256, P="password", S="salt", c=1, dkLen=32
        kdf = PBKDF2KDF(iterations=1)
        key = kdf.derive(b"password", b"salt", key_length=32)
        assert key.hex() == (
            "120fb6cffcf8b32c43e7225256c4f837a86548c92ccc35480805987cb70be17b"
        )

    def test_default_iterations_match_openssl(self):
        assert self.kdf.iterations == 10000

    def test_derive_produces_32_bytes(self):
        key = self.kdf.derive(b"TestP@ssw0rd!!", os.urandom(8))
        assert len(key) == 32

    def test_derive_key_and_iv_length(self):
        key = self.kdf.derive(b"TestP@ssw0rd!!", os.urandom(8), key_length=48)
        assert len(key) == 48

    def test_same_inputs_same_output(self):
        salt = os.urandom(8)
        assert self.kdf.derive(b"pw", salt) == self.kdf.derive(b"pw", salt)

    def test_different_passwords_different_output(self):
        salt = os.urandom(8)
        assert self.kdf.derive(b"pw-one", salt) != self.kdf.derive(b"pw-two", salt)

    def test_different_salts_different_output(self):
        assert self.kdf.derive(b"pw", b"\x00" * 8) != self.kdf.derive(b"pw", b"\x01" * 8)

    def test_derive_returns_bytearray(self):
        assert isinstance(self.kdf.derive(b"pw", os.urandom(8)), bytearray)

    def test_derive_accepts_bytearray_password(self):
        key = self.kdf.derive(bytearray(b"pw"), os.urandom(8))
        assert isinstance(key, bytearray)

    def test_generate_salt(self):
        salt = self.kdf.generate_salt()
        assert len(salt) == 8
        assert salt != self.kdf.generate_salt()

    def test_is_kdf(self):
        assert isinstance(self.kdf, KDF)
        assert self.kdf.name == "PBKDF2-HMAC-SHA256"
