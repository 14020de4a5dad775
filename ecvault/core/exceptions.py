"""
Crypto Exception Hierarchy
==========================

Narrow exception types for the hybrid encryption core.

Guidelines:
- Messages describe what failed, never the data involved
- No keys, scalars, nonces or plaintext in exception text
- Authentication failures carry no detail about which field was altered
"""

from __future__ import annotations

from typing import Optional


class CryptoError(Exception):
    """Base exception for all ecvault crypto failures."""

    def __init__(
        self, message: str = "", *, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.__cause__ = cause


class InvalidArgumentError(CryptoError, ValueError):
    """Malformed or out-of-contract input (lengths, encodings, infinity)."""


class AuthenticationError(CryptoError):
    """
    AEAD tag verification failed.

    Raised for a wrong key, wrong associated data or any tampering with
    nonce, ciphertext or tag. These cases are deliberately indistinguishable.
    """


class EntropySourceError(CryptoError):
    """The random source failed to produce an acceptable value."""
