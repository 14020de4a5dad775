"""
Elliptic Curve Key Agreement
============================

Derives the 32-byte symmetric key shared by sender and recipient.

    sender:    EK = SHA-256(x(r * P))      P = k * G  (recipient public)
    recipient: EK = SHA-256(x(k * R))      R = r * G  (ephemeral public)

Both sides compute the same point because r * (k * G) == k * (r * G).
The x-coordinate is taken big-endian, padded to the curve's field size.

Also holds the recipient key pair container.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from typing import Final

from ecdsa.ellipticcurve import AbstractPoint

from ecvault.core.crypto.curves import (
    SECP256R1,
    CurveParams,
    encode_point,
    is_infinity,
    x_coordinate_bytes,
)
from ecvault.core.crypto.hashing import sha256
from ecvault.core.exceptions import InvalidArgumentError

SHARED_KEY_SIZE: Final[int] = 32  # 256 bits, AES-256 key


def _shared_key(scalar: int, point: AbstractPoint) -> bytes:
    if is_infinity(point):
        raise InvalidArgumentError("Point must not be the point at infinity")
    if scalar <= 0:
        raise InvalidArgumentError("Scalar must be positive")

    shared = point * scalar
    if is_infinity(shared):
        raise InvalidArgumentError("Shared point is the point at infinity")

    return sha256(x_coordinate_bytes(shared))


def derive_encrypt_key(r: int, recipient_point: AbstractPoint) -> bytes:
    """
    Sender side: SHA-256 of x(r * recipient_point).

    Args:
        r: Ephemeral scalar
        recipient_point: Recipient public point P

    Returns:
        32-byte symmetric key

    Raises:
        InvalidArgumentError: If recipient_point is the point at infinity
    """
    return _shared_key(r, recipient_point)


def derive_decrypt_key(private_scalar: int, ephemeral_point: AbstractPoint) -> bytes:
    """
    Recipient side: SHA-256 of x(private_scalar * ephemeral_point).

    Raises:
        InvalidArgumentError: If ephemeral_point is the point at infinity
    """
    return _shared_key(private_scalar, ephemeral_point)


@dataclass(frozen=True, slots=True)
class ECKeyPair:
    """
    Immutable recipient key pair.

    Attributes:
        private_key: Big-endian private scalar k, 1 <= k < N
        public_key: k * G
        curve: Curve the pair lives on

    Security:
        - Never log or serialize private_key
        - public_key can be freely distributed
    """

    private_key: bytes = field(repr=False)
    public_key: AbstractPoint
    curve: CurveParams = SECP256R1

    def __post_init__(self) -> None:
        k = int.from_bytes(self.private_key, "big")
        if not 0 < k < self.curve.order:
            raise InvalidArgumentError("Private scalar out of range")
        if is_infinity(self.public_key):
            raise InvalidArgumentError("Public key must not be the point at infinity")

    @classmethod
    def from_private_key(
        cls,
        private_key: bytes | bytearray,
        curve: CurveParams = SECP256R1,
    ) -> "ECKeyPair":
        """
        Build a key pair from a big-endian private scalar.

        Raises:
            InvalidArgumentError: If the scalar is not in [1, N-1]
        """
        k = int.from_bytes(private_key, "big")
        if not 0 < k < curve.order:
            raise InvalidArgumentError("Private scalar out of range")
        return cls(
            private_key=k.to_bytes(curve.scalar_size, "big"),
            public_key=curve.generator * k,
            curve=curve,
        )

    @classmethod
    def generate(cls, curve: CurveParams = SECP256R1) -> "ECKeyPair":
        """Generate a fresh key pair from the OS CSPRNG."""
        k = secrets.randbelow(curve.order - 1) + 1
        return cls.from_private_key(k.to_bytes(curve.scalar_size, "big"), curve)

    @property
    def public_key_bytes(self) -> bytes:
        """Compressed SEC1 encoding of the public key."""
        return encode_point(self.public_key)

    def __repr__(self) -> str:
        """Safe representation without exposing key material."""
        return f"ECKeyPair(curve={self.curve.name}, public={self.public_key_bytes.hex()})"
