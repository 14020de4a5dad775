"""
Hybrid Elliptic-Curve Encryption Engine
=======================================

ECIES-style public-key encryption:
    1. Ephemeral scalar r, R = r * G
    2. EK = SHA-256(x(r * P))  for recipient public point P
    3. AES-256-GCM under EK with a fresh random nonce

Envelope Layout (256-bit curve):
    R compressed (33) | NONCE (12) | CIPHERTEXT (len(message)) | TAG (16)

Decryption Flow:
    envelope
        ↓ decode R on the recipient curve
        ↓ EK = SHA-256(x(k * R))
        ↓ AES-256-GCM decrypt (verify tag first)
    plaintext

Security Properties:
    - No pre-shared key; only the recipient public point is needed
    - Fresh ephemeral scalar and nonce per message, both from the OS CSPRNG
    - Scalars and derived keys are wiped on every exit path
    - Any validation or tag failure = complete rejection (fail-closed)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Optional

from ecdsa.ellipticcurve import AbstractPoint

from ecvault.core.config import SecureConfig
from ecvault.core.crypto.aes_gcm import AES_NONCE_SIZE, AES_TAG_SIZE, AesGcmCipher
from ecvault.core.crypto.curves import (
    COMPRESSED_PREFIXES,
    SECP256R1,
    CurveParams,
    decode_point,
    encode_point,
    get_curve,
    is_infinity,
)
from ecvault.core.crypto.key_agreement import (
    ECKeyPair,
    derive_decrypt_key,
    derive_encrypt_key,
)
from ecvault.core.crypto.sampler import DEFAULT_MAX_SAMPLE_ATTEMPTS, sample_ephemeral
from ecvault.core.exceptions import AuthenticationError, InvalidArgumentError
from ecvault.core.memory.secure_memory import MemoryGuard, SecureBuffer

ENVELOPE_OVERHEAD: Final[int] = SECP256R1.point_size + AES_NONCE_SIZE + AES_TAG_SIZE

_cipher: Final[AesGcmCipher] = AesGcmCipher()


@dataclass(frozen=True, slots=True)
class EncryptedEnvelope:
    """
    Parsed view of a ciphertext envelope.

    Holds no secrets and can be stored or transmitted freely.
    """

    ephemeral_point: bytes
    nonce: bytes
    ciphertext: bytes
    tag: bytes

    def to_bytes(self) -> bytes:
        """Serialize as R || nonce || ciphertext || tag."""
        return b"".join((self.ephemeral_point, self.nonce, self.ciphertext, self.tag))

    @classmethod
    def from_bytes(
        cls,
        data: bytes | bytearray | memoryview,
        point_size: int = SECP256R1.point_size,
    ) -> "EncryptedEnvelope":
        """
        Split an envelope into its fields.

        Only checks framing; the point itself is decoded by ec_decrypt.

        Raises:
            InvalidArgumentError: If data is too short or the point prefix
                is not a compressed-point prefix
        """
        raw = bytes(data)
        if len(raw) < point_size:
            raise InvalidArgumentError("Envelope shorter than an encoded point")
        if raw[0] not in COMPRESSED_PREFIXES:
            raise InvalidArgumentError("Envelope does not start with a compressed point")
        if len(raw) < point_size + AES_NONCE_SIZE + AES_TAG_SIZE:
            raise InvalidArgumentError("Envelope missing nonce or tag")

        body = raw[point_size:]
        return cls(
            ephemeral_point=raw[:point_size],
            nonce=body[:AES_NONCE_SIZE],
            ciphertext=body[AES_NONCE_SIZE:-AES_TAG_SIZE],
            tag=body[-AES_TAG_SIZE:],
        )

    def __repr__(self) -> str:
        return f"EncryptedEnvelope(ct_len={len(self.ciphertext)})"


def ec_encrypt(
    message: bytes | bytearray | memoryview,
    public_key: AbstractPoint,
    curve: CurveParams = SECP256R1,
    *,
    max_attempts: Optional[int] = DEFAULT_MAX_SAMPLE_ATTEMPTS,
) -> bytes:
    """
    Encrypt message to the holder of public_key.

    Args:
        message: Payload (may be empty)
        public_key: Recipient public point on curve
        curve: Curve of the recipient key
        max_attempts: Fuse for ephemeral sampling

    Returns:
        Envelope bytes, len(message) + point_size + 28 long

    Raises:
        InvalidArgumentError: If public_key is the point at infinity or
            is not on curve
    """
    if is_infinity(public_key):
        raise InvalidArgumentError("Recipient public key is the point at infinity")
    if public_key.curve() != curve.curve:
        raise InvalidArgumentError(f"Recipient public key is not on {curve.name}")

    with MemoryGuard() as guard:
        r, ephemeral = sample_ephemeral(curve, max_attempts=max_attempts)
        scalar = guard.track(SecureBuffer.from_int(r, curve.scalar_size))

        key = guard.track(SecureBuffer.from_bytes(
            derive_encrypt_key(scalar.to_int(), public_key)
        ))
        nonce = _cipher.generate_nonce()
        result = _cipher.encrypt(message, key.view, nonce)

    return EncryptedEnvelope(
        ephemeral_point=encode_point(ephemeral),
        nonce=nonce,
        ciphertext=result.ciphertext,
        tag=result.tag,
    ).to_bytes()


def ec_decrypt(envelope: bytes | bytearray | memoryview, key_pair: ECKeyPair) -> bytes:
    """
    Recover the message from an envelope produced by ec_encrypt.

    Args:
        envelope: Envelope bytes
        key_pair: Recipient key pair

    Returns:
        Decrypted message

    Raises:
        InvalidArgumentError: If the envelope is malformed or the public
            key is the point at infinity
        AuthenticationError: If the tag does not verify (wrong key or
            tampering)
    """
    curve = key_pair.curve
    raw = bytes(envelope) if envelope is not None else b""

    if len(raw) < curve.point_size:
        raise InvalidArgumentError("Envelope shorter than an encoded point")
    if raw[0] not in COMPRESSED_PREFIXES:
        raise InvalidArgumentError("Envelope does not start with a compressed point")
    if is_infinity(key_pair.public_key):
        raise InvalidArgumentError("Recipient public key is the point at infinity")

    ephemeral = decode_point(raw[:curve.point_size], curve)
    parts = EncryptedEnvelope.from_bytes(raw, point_size=curve.point_size)

    with MemoryGuard() as guard:
        scalar = guard.track(SecureBuffer.from_bytes(key_pair.private_key))
        key = guard.track(SecureBuffer.from_bytes(
            derive_decrypt_key(scalar.to_int(), ephemeral)
        ))
        return _cipher.decrypt(parts.nonce, parts.ciphertext, parts.tag, key.view)


class HybridCryptoEngine:
    """
    Hybrid elliptic-curve encryption engine bound to one curve.

    Usage:
        engine = HybridCryptoEngine()

        keypair = engine.generate_keypair()
        envelope = engine.encrypt(plaintext, keypair.public_key)
        plaintext = engine.decrypt(envelope, keypair)

    Security Notes:
        - Every call is independent; the engine holds no secrets
        - Integrity verified before any plaintext returned
        - Outcomes are logged, key material never is
    """

    __slots__ = ("_curve", "_max_attempts", "_log")

    def __init__(
        self,
        curve: Optional[CurveParams] = None,
        config: Optional[SecureConfig] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            curve: Curve to use; defaults to the configured curve
            config: Configuration; defaults to the global instance
        """
        config = config or SecureConfig.get_instance()
        self._curve = curve or get_curve(config.crypto.default_curve)
        self._max_attempts = config.crypto.max_sample_attempts
        self._log = logging.getLogger("ecvault.crypto")

    @property
    def curve(self) -> CurveParams:
        return self._curve

    def generate_keypair(self) -> ECKeyPair:
        """Generate a recipient key pair on the engine curve."""
        return ECKeyPair.generate(self._curve)

    def encrypt(self, plaintext: bytes, public_key: AbstractPoint) -> bytes:
        """Encrypt plaintext to public_key. See ec_encrypt."""
        try:
            envelope = ec_encrypt(
                plaintext, public_key, self._curve, max_attempts=self._max_attempts
            )
        except InvalidArgumentError:
            self._log.warning("Rejected recipient key on %s", self._curve.name)
            raise
        self._log.debug("Encrypted %d bytes on %s", len(plaintext), self._curve.name)
        return envelope

    def decrypt(self, envelope: bytes, key_pair: ECKeyPair) -> bytes:
        """Decrypt an envelope with key_pair. See ec_decrypt."""
        if key_pair.curve != self._curve:
            raise InvalidArgumentError("Key pair is on a different curve")
        try:
            plaintext = ec_decrypt(envelope, key_pair)
        except InvalidArgumentError:
            self._log.warning("Rejected malformed envelope on %s", self._curve.name)
            raise
        except AuthenticationError:
            self._log.warning("Envelope failed authentication on %s", self._curve.name)
            raise
        self._log.debug("Decrypted %d bytes on %s", len(plaintext), self._curve.name)
        return plaintext
