"""
Hash Helpers
============

Stateless digest functions over immutable byte views.

All functions accept bytes, bytearray or memoryview and never modify
their input.
"""

from __future__ import annotations

import hashlib
from typing import Final, Optional

from Crypto.Hash import RIPEMD160

from ecvault.core.exceptions import InvalidArgumentError

SHA256_SIZE: Final[int] = 32
RIPEMD160_SIZE: Final[int] = 20

BytesLike = bytes | bytearray | memoryview


def _region(value: BytesLike, offset: int, count: Optional[int]) -> memoryview:
    view = memoryview(value).cast("B")
    if count is None:
        count = len(view) - offset
    if offset < 0 or count < 0 or offset + count > len(view):
        raise InvalidArgumentError("Region out of range")
    return view[offset:offset + count]


def sha256(value: BytesLike, offset: int = 0, count: Optional[int] = None) -> bytes:
    """
    SHA-256 of value, or of value[offset:offset + count].

    Raises:
        InvalidArgumentError: If the region is outside the input
    """
    return hashlib.sha256(_region(value, offset, count)).digest()


def hash256(value: BytesLike) -> bytes:
    """Double SHA-256."""
    return sha256(sha256(value))


def ripemd160(value: BytesLike) -> bytes:
    """RIPEMD-160 digest."""
    return RIPEMD160.new(bytes(value)).digest()


def hash160(value: BytesLike) -> bytes:
    """RIPEMD-160 of SHA-256, the usual 20-byte script hash."""
    return ripemd160(sha256(value))
