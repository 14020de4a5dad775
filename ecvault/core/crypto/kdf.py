"""
Password Key Derivation
=======================

Turns a password into a 32-byte AES key as SHA-256(SHA-256(utf8(password))).

This is the legacy wallet-file derivation: it is unsalted and fast, so
it only suits data already protected by other means. Intermediate
buffers are wiped before returning.
"""

from __future__ import annotations

from ecvault.core.crypto.hashing import sha256
from ecvault.core.memory.secure_memory import SecureBuffer, SecureString


def password_to_aes_key(password: str | SecureString) -> bytes:
    """
    Derive a 32-byte AES key from a password.

    Args:
        password: Plain str or SecureString (the SecureString is not wiped)

    Returns:
        32-byte key
    """
    if isinstance(password, SecureString):
        secret = password.to_buffer()
    elif isinstance(password, str):
        secret = SecureBuffer.from_bytes(password.encode("utf-8"))
    else:
        raise TypeError("password must be str or SecureString")

    with secret, SecureBuffer.from_bytes(sha256(secret.view)) as first:
        return sha256(first.view)
