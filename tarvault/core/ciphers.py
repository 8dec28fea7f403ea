"""
File ciphers.

Strategy interface with two interchangeable implementations producing the
same on-disk format (see ``formats``):

  - ``AES256CBCCipher``: native, ``cryptography`` library, streamed.
  - ``OpenSSLCommandCipher``: shells out to ``openssl enc``.

Either output can be restored with::

    openssl enc -d -aes-256-cbc -pbkdf2 -in <encrypted_backup> -out <decrypted_backup>

``decrypt`` is provided for that inverse operation; the backup CLI itself
never calls it.
"""

from __future__ import annotations

import logging
import os
import subprocess
from abc import ABC, abstractmethod

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import ConfigurationError, DecryptionError, EncryptionError, FormatError
from .files import remove_partial
from .formats import HEADER_SIZE, build_header, parse_header
from .kdf import KDF, PBKDF2KDF
from .memory import wiped

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
KEY_SIZE = 32
IV_SIZE = 16
BLOCK_BITS = 128

# openssl reads the passphrase from this variable ("-pass env:...")
PASSPHRASE_ENV = "TARVAULT_PASSPHRASE"


class FileCipher(ABC):
    """Abstract base for whole-file symmetric ciphers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used in config (``cipher = ...``)."""

    @abstractmethod
    def encrypt(self, src: str, dst: str, passphrase: str | None) -> str:
        """Encrypt ``src`` into ``dst``. Returns ``dst``.

        ``None`` asks the implementation to obtain the passphrase itself,
        where it can.
        """

    @abstractmethod
    def decrypt(self, src: str, dst: str, passphrase: str) -> str:
        """Inverse of ``encrypt``. Returns ``dst``."""


class AES256CBCCipher(FileCipher):
    """AES-256-CBC with PKCS#7 padding; key and IV from PBKDF2."""

    name = "aes-256-cbc"

    def __init__(self, kdf: KDF | None = None):
        self.kdf = kdf or PBKDF2KDF()

    def _cipher(self, passphrase: str, salt: bytes) -> Cipher:
        material = self.kdf.derive(passphrase.encode("utf-8"), salt,
                                   key_length=KEY_SIZE + IV_SIZE)
        with wiped(material):
            key = bytes(material[:KEY_SIZE])
            iv = bytes(material[KEY_SIZE:])
        return Cipher(algorithms.AES(key), modes.CBC(iv))

    def encrypt(self, src: str, dst: str, passphrase: str | None) -> str:
        if not passphrase:
            raise EncryptionError("Error: passphrase cannot be empty.")
        salt = self.kdf.generate_salt()
        encryptor = self._cipher(passphrase, salt).encryptor()
        padder = padding.PKCS7(BLOCK_BITS).padder()

        try:
            with open(src, "rb") as fin, open(dst, "wb") as fout:
                fout.write(build_header(salt))
                while chunk := fin.read(CHUNK_SIZE):
                    fout.write(encryptor.update(padder.update(chunk)))
                fout.write(encryptor.update(padder.finalize()) + encryptor.finalize())
        except OSError as exc:
            remove_partial(dst)
            raise EncryptionError(f"Encryption failed: {exc}") from exc
        return dst

    def decrypt(self, src: str, dst: str, passphrase: str) -> str:
        try:
            with open(src, "rb") as fin:
                salt = parse_header(fin.read(HEADER_SIZE))
                decryptor = self._cipher(passphrase, salt).decryptor()
                unpadder = padding.PKCS7(BLOCK_BITS).unpadder()
                with open(dst, "wb") as fout:
                    while chunk := fin.read(CHUNK_SIZE):
                        fout.write(unpadder.update(decryptor.update(chunk)))
                    fout.write(unpadder.update(decryptor.finalize()) + unpadder.finalize())
        except FormatError:
            raise
        except ValueError as exc:
            # Bad padding or a truncated final block: wrong passphrase or corrupt file
            remove_partial(dst)
            raise DecryptionError(
                "Decryption failed: incorrect passphrase or corrupted file."
            ) from exc
        except OSError as exc:
            remove_partial(dst)
            raise DecryptionError(f"Decryption failed: {exc}") from exc
        return dst


class OpenSSLCommandCipher(FileCipher):
    """Runs ``openssl enc -aes-256-cbc -salt -pbkdf2``.

    The passphrase goes through the child's environment, never argv. With
    no passphrase, openssl prompts for one on the terminal itself.
    """

    name = "openssl"

    def __init__(self, executable: str = "openssl"):
        self.executable = executable

    def command(self, src: str, dst: str, decrypt: bool = False,
                prompt: bool = False) -> list[str]:
        cmd = [self.executable, "enc"]
        if decrypt:
            cmd.append("-d")
        cmd += ["-aes-256-cbc"]
        if not decrypt:
            cmd.append("-salt")
        cmd += ["-pbkdf2", "-in", src, "-out", dst]
        if not prompt:
            cmd += ["-pass", f"env:{PASSPHRASE_ENV}"]
        return cmd

    def _run(self, cmd: list[str], passphrase: str | None) -> subprocess.CompletedProcess:
        env = dict(os.environ)
        env.pop(PASSPHRASE_ENV, None)
        if passphrase is None:
            # openssl talks to the terminal; keep its stderr attached
            return subprocess.run(cmd, env=env, stdout=subprocess.DEVNULL)
        env[PASSPHRASE_ENV] = passphrase
        result = subprocess.run(cmd, env=env, stdout=subprocess.DEVNULL,
                                stderr=subprocess.PIPE, text=True)
        if result.stderr:
            logger.warning(result.stderr.rstrip("\n"))
        return result

    def encrypt(self, src: str, dst: str, passphrase: str | None) -> str:
        cmd = self.command(src, dst, prompt=passphrase is None)
        try:
            result = self._run(cmd, passphrase)
        except OSError as exc:
            raise EncryptionError(f"Cannot run {self.executable}: {exc}") from exc
        if result.returncode != 0:
            remove_partial(dst)
            raise EncryptionError(
                f"{self.executable} exited with status {result.returncode}",
                exit_code=result.returncode,
            )
        return dst

    def decrypt(self, src: str, dst: str, passphrase: str | None) -> str:
        cmd = self.command(src, dst, decrypt=True, prompt=passphrase is None)
        try:
            result = self._run(cmd, passphrase)
        except OSError as exc:
            raise DecryptionError(f"Cannot run {self.executable}: {exc}") from exc
        if result.returncode != 0:
            remove_partial(dst)
            raise DecryptionError(
                f"{self.executable} exited with status {result.returncode}: "
                "incorrect passphrase or corrupted file."
            )
        return dst


CIPHER_CHOICES: dict[str, type[FileCipher]] = {
    "aes-256-cbc": AES256CBCCipher,
    "openssl": OpenSSLCommandCipher,
}


def get_cipher(name: str) -> FileCipher:
    try:
        return CIPHER_CHOICES[name]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown cipher '{name}' (choices: {', '.join(CIPHER_CHOICES)})"
        ) from None
