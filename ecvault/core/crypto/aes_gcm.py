"""
AES-256-GCM Authenticated Encryption
====================================

Thin AEAD wrapper with explicit length contracts.

Security Properties:
    - 256-bit key
    - 96-bit nonce (NIST recommended)
    - 128-bit authentication tag, kept separate from the ciphertext
    - Authenticated Additional Data (AAD) support

NIST SP 800-38D Compliance:
    - GCM mode with 96-bit IV
    - Unique nonce for each encryption under same key

WARNING:
    - Never reuse (key, nonce) pairs
    - The tag is always verified before any plaintext is returned
    - Keys should be wiped from memory after use
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Final, Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ecvault.core.exceptions import AuthenticationError, InvalidArgumentError

AES_KEY_SIZE: Final[int] = 32  # 256 bits
AES_NONCE_SIZE: Final[int] = 12  # 96 bits (NIST recommended for GCM)
AES_TAG_SIZE: Final[int] = 16  # 128 bits

BytesLike = bytes | bytearray | memoryview


@dataclass(frozen=True, slots=True)
class AesGcmResult:
    """
    Immutable result of AES-GCM encryption.

    Attributes:
        ciphertext: Encrypted data, same length as the plaintext
        tag: 16-byte authentication tag
    """

    ciphertext: bytes
    tag: bytes

    def __repr__(self) -> str:
        return f"AesGcmResult(ciphertext_len={len(self.ciphertext)}, tag_len={len(self.tag)})"


def _require_length(value: Optional[BytesLike], expected: int, what: str) -> None:
    actual = 0 if value is None else len(value)
    if actual != expected:
        raise InvalidArgumentError(f"{what} must be exactly {expected} bytes")


class AesGcmCipher:
    """
    AES-256-GCM Authenticated Encryption with Associated Data (AEAD).

    Usage:
        cipher = AesGcmCipher()
        key = cipher.generate_key()
        nonce = cipher.generate_nonce()

        result = cipher.encrypt(plaintext, key, nonce, aad=b"context")
        plaintext = cipher.decrypt(
            nonce, result.ciphertext, result.tag, key, aad=b"context"
        )

    All length checks run before the primitive is invoked. A failed tag
    check raises AuthenticationError and releases no plaintext.
    """

    __slots__ = ()

    @staticmethod
    def generate_key() -> bytes:
        """
        Generate a cryptographically secure random AES-256 key.

        Returns:
            32 bytes from the OS CSPRNG
        """
        return secrets.token_bytes(AES_KEY_SIZE)

    @staticmethod
    def generate_nonce() -> bytes:
        """
        Generate a cryptographically secure random nonce.

        Returns:
            12 bytes from the OS CSPRNG
        """
        return secrets.token_bytes(AES_NONCE_SIZE)

    def encrypt(
        self,
        plaintext: Optional[BytesLike],
        key: BytesLike,
        nonce: BytesLike,
        aad: Optional[BytesLike] = None,
    ) -> AesGcmResult:
        """
        Encrypt plaintext using AES-256-GCM.

        Args:
            plaintext: Data to encrypt (None or empty is allowed)
            key: 32-byte key
            nonce: 12-byte nonce, never reused under the same key
            aad: Additional Authenticated Data (authenticated, not encrypted)

        Returns:
            AesGcmResult with ciphertext of len(plaintext) and a 16-byte tag

        Raises:
            InvalidArgumentError: If key or nonce has the wrong size
        """
        _require_length(key, AES_KEY_SIZE, "Key")
        _require_length(nonce, AES_NONCE_SIZE, "Nonce")

        data = bytes(plaintext) if plaintext is not None else b""
        sealed = AESGCM(bytes(key)).encrypt(
            bytes(nonce), data, bytes(aad) if aad is not None else None
        )

        # cryptography appends the tag to the ciphertext
        return AesGcmResult(
            ciphertext=sealed[: len(data)],
            tag=sealed[len(data):],
        )

    def decrypt(
        self,
        nonce: BytesLike,
        ciphertext: BytesLike,
        tag: BytesLike,
        key: BytesLike,
        aad: Optional[BytesLike] = None,
    ) -> bytes:
        """
        Decrypt ciphertext using AES-256-GCM with integrity verification.

        Args:
            nonce: The nonce used during encryption
            ciphertext: Encrypted data without tag
            tag: The 16-byte authentication tag
            key: The 32-byte encryption key
            aad: Additional Authenticated Data (must match encryption AAD)

        Returns:
            Decrypted plaintext bytes

        Raises:
            InvalidArgumentError: If key, nonce or tag has the wrong size
            AuthenticationError: If the tag does not verify
        """
        _require_length(key, AES_KEY_SIZE, "Key")
        _require_length(nonce, AES_NONCE_SIZE, "Nonce")
        _require_length(tag, AES_TAG_SIZE, "Tag")

        aesgcm = AESGCM(bytes(key))
        try:
            return aesgcm.decrypt(
                bytes(nonce),
                bytes(ciphertext) + bytes(tag),
                bytes(aad) if aad is not None else None,
            )
        except InvalidTag as exc:
            raise AuthenticationError("Authentication failed") from exc

    def seal(
        self,
        plaintext: Optional[BytesLike],
        key: BytesLike,
        nonce: BytesLike,
        aad: Optional[BytesLike] = None,
    ) -> bytes:
        """
        Encrypt and pack as ``nonce || ciphertext || tag``.

        This is the framing used inside the hybrid envelope after the
        ephemeral point.
        """
        result = self.encrypt(plaintext, key, nonce, aad)
        return bytes(nonce) + result.ciphertext + result.tag

    def open(
        self,
        sealed: BytesLike,
        key: BytesLike,
        aad: Optional[BytesLike] = None,
    ) -> bytes:
        """
        Inverse of seal().

        Raises:
            InvalidArgumentError: If sealed is shorter than nonce plus tag
            AuthenticationError: If the tag does not verify
        """
        view = memoryview(bytes(sealed))
        if len(view) < AES_NONCE_SIZE + AES_TAG_SIZE:
            raise InvalidArgumentError("Sealed data too short")

        return self.decrypt(
            nonce=view[:AES_NONCE_SIZE],
            ciphertext=view[AES_NONCE_SIZE:-AES_TAG_SIZE],
            tag=view[-AES_TAG_SIZE:],
            key=key,
            aad=aad,
        )
