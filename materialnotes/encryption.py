"""
Password based encryption of note fields.

Values are encrypted with Fernet (AES-128-CBC + HMAC-SHA256). The key is
derived from the password with PBKDF2-HMAC-SHA256 over a random per-value
salt, which is stored in front of the token:

    <urlsafe base64 salt>.<fernet token>
"""

from __future__ import annotations

import base64
import binascii
import logging
import os

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .exceptions import DecryptionError

LOGGER = logging.getLogger(__name__)

SALT_BYTES = 16
KDF_ITERATIONS = 480_000
_SEPARATOR = "."


def _derive_fernet_key(password: str, salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=KDF_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))


def encrypt(password: str, plaintext: str) -> str:
    """Encrypt `plaintext` with `password`."""
    if not password:
        raise ValueError("Password must not be empty")
    salt = os.urandom(SALT_BYTES)
    token = Fernet(_derive_fernet_key(password, salt)).encrypt(
        plaintext.encode("utf-8")
    )
    return base64.urlsafe_b64encode(salt).decode("ascii") + _SEPARATOR + token.decode(
        "ascii"
    )


def decrypt(password: str, ciphertext: str) -> str:
    """Decrypt a value produced by `encrypt`.

    Raises DecryptionError on a wrong password or corrupt ciphertext.
    """
    salt_b64, sep, token = ciphertext.partition(_SEPARATOR)
    if not sep or not token:
        raise DecryptionError("Ciphertext is not in the expected format")
    try:
        salt = base64.urlsafe_b64decode(salt_b64.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError) as e:
        raise DecryptionError("Ciphertext salt is not valid base64") from e
    try:
        data = Fernet(_derive_fernet_key(password, salt)).decrypt(
            token.encode("ascii")
        )
    except (InvalidToken, UnicodeEncodeError) as e:
        LOGGER.debug("notes.encryption.decrypt_fail len=%d", len(ciphertext))
        raise DecryptionError("Wrong password or corrupt data") from e
    return data.decode("utf-8")

