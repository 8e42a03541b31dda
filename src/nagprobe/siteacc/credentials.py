# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Passphrase-based encryption of stored site credentials.

Values are stored base64-encoded as ``nonce || ciphertext`` produced by
AES-256-GCM. The key is the hex MD5 digest of the passphrase, which is exactly
32 bytes long.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..errors import CredentialsDecryptionError
from .models import TestClientCredentials

NONCE_SIZE = 12


def _derive_key(passphrase: str) -> bytes:
    return hashlib.md5(passphrase.encode("utf-8")).hexdigest().encode("ascii")  # noqa: S324


def encrypt_string(value: str, passphrase: str) -> str:
    nonce = os.urandom(NONCE_SIZE)
    sealed = AESGCM(_derive_key(passphrase)).encrypt(nonce, value.encode("utf-8"), None)
    return base64.b64encode(nonce + sealed).decode("ascii")


def decrypt_string(value: str, passphrase: str) -> str:
    try:
        data = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CredentialsDecryptionError("credential is not valid base64") from exc
    if len(data) <= NONCE_SIZE:
        raise CredentialsDecryptionError("credential is too short")
    try:
        plain = AESGCM(_derive_key(passphrase)).decrypt(data[:NONCE_SIZE], data[NONCE_SIZE:], None)
    except InvalidTag as exc:
        raise CredentialsDecryptionError("wrong passphrase or corrupted credential") from exc
    try:
        return plain.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CredentialsDecryptionError("decrypted credential is not valid UTF-8") from exc


def decrypt_credentials(credentials: TestClientCredentials, passphrase: str) -> TestClientCredentials:
    """Return a copy of ``credentials`` with both fields decrypted."""
    return TestClientCredentials(
        id=decrypt_string(credentials.id, passphrase),
        secret=decrypt_string(credentials.secret, passphrase),
    )


def encrypt_credentials(credentials: TestClientCredentials, passphrase: str) -> TestClientCredentials:
    return TestClientCredentials(
        id=encrypt_string(credentials.id, passphrase),
        secret=encrypt_string(credentials.secret, passphrase),
    )


__all__ = ["decrypt_credentials", "decrypt_string", "encrypt_credentials", "encrypt_string"]
