"""
Elliptic Curve Parameters and Point Codec
=========================================

Read-only curve descriptions and SEC1 compressed point encoding.

Group arithmetic is delegated to python-ecdsa; this module only binds
a curve, its generator and its order together and validates points at
the boundary.

Compressed encoding:
    prefix (1) | x-coordinate (field size, big-endian)
    prefix = 0x02 if y is even, 0x03 if y is odd
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional

from ecdsa import NIST256p, SECP256k1
from ecdsa.curves import Curve
from ecdsa.ellipticcurve import INFINITY, AbstractPoint, CurveFp, Point
from ecdsa.errors import MalformedPointError

from ecvault.core.exceptions import InvalidArgumentError

COMPRESSED_PREFIXES: Final[frozenset[int]] = frozenset({0x02, 0x03})


@dataclass(frozen=True, slots=True)
class CurveParams:
    """
    Immutable short-Weierstrass curve description.

    Attributes:
        name: Human readable curve name
        curve: python-ecdsa field curve (p, a, b)
        generator: Base point G
        order: Order N of G
    """

    name: str
    curve: CurveFp
    generator: AbstractPoint
    order: int

    @classmethod
    def from_ecdsa(cls, curve: Curve, name: Optional[str] = None) -> "CurveParams":
        """Wrap a named python-ecdsa curve."""
        return cls(
            name=name or curve.name,
            curve=curve.curve,
            generator=curve.generator,
            order=curve.order,
        )

    @property
    def field_size(self) -> int:
        """Byte length of a field element."""
        return (self.curve.p().bit_length() + 7) // 8

    @property
    def scalar_size(self) -> int:
        """Byte length of a scalar modulo the order."""
        return (self.order.bit_length() + 7) // 8

    @property
    def point_size(self) -> int:
        """Byte length of a compressed point."""
        return 1 + self.field_size

    def __repr__(self) -> str:
        return f"CurveParams({self.name}, bits={self.order.bit_length()})"


SECP256R1: Final[CurveParams] = CurveParams.from_ecdsa(NIST256p, name="secp256r1")
SECP256K1: Final[CurveParams] = CurveParams.from_ecdsa(SECP256k1, name="secp256k1")

_NAMED_CURVES: Final[dict[str, CurveParams]] = {
    "secp256r1": SECP256R1,
    "nist256p": SECP256R1,
    "prime256v1": SECP256R1,
    "secp256k1": SECP256K1,
}


def get_curve(name: str) -> CurveParams:
    """
    Look up a bundled curve by name (case-insensitive).

    Raises:
        InvalidArgumentError: If the name is unknown
    """
    try:
        return _NAMED_CURVES[name.lower()]
    except KeyError:
        raise InvalidArgumentError(f"Unknown curve: {name}") from None


def is_infinity(point: Optional[AbstractPoint]) -> bool:
    """True for None or the point at infinity."""
    return point is None or point == INFINITY


def encode_point(point: AbstractPoint) -> bytes:
    """
    Encode a point in SEC1 compressed form.

    Raises:
        InvalidArgumentError: If the point is the point at infinity
    """
    if is_infinity(point):
        raise InvalidArgumentError("Cannot encode the point at infinity")
    return point.to_bytes("compressed")


def decode_point(data: bytes | bytearray | memoryview, curve: CurveParams) -> Point:
    """
    Decode a SEC1 compressed point onto the given curve.

    Raises:
        InvalidArgumentError: If the length, prefix or coordinates are not a
            valid compressed encoding of a point on the curve
    """
    raw = bytes(data)
    if len(raw) != curve.point_size:
        raise InvalidArgumentError("Invalid compressed point length")
    if raw[0] not in COMPRESSED_PREFIXES:
        raise InvalidArgumentError("Invalid compressed point prefix")
    if int.from_bytes(raw[1:], "big") >= curve.curve.p():
        raise InvalidArgumentError("Point x-coordinate out of field range")

    try:
        return Point.from_bytes(
            curve.curve,
            raw,
            valid_encodings=("compressed",),
            order=curve.order,
        )
    except (MalformedPointError, AssertionError, ValueError) as exc:
        raise InvalidArgumentError("Bytes do not encode a point on the curve") from exc


def x_coordinate_bytes(point: AbstractPoint) -> bytes:
    """Big-endian x-coordinate padded to the field size of the point's curve."""
    if is_infinity(point):
        raise InvalidArgumentError("Point at infinity has no x-coordinate")
    size = (point.curve().p().bit_length() + 7) // 8
    return point.x().to_bytes(size, "big")
