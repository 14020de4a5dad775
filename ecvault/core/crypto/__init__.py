"""
ecvault Cryptographic Core
==========================

Hybrid public-key encryption over elliptic curves.

Architecture:
    1. ScalarSampler: ephemeral scalar r and point R = r * G
    2. KeyAgreement: EK = SHA-256(x(r * P)) = SHA-256(x(k * R))
    3. AES-256-GCM: authenticated encryption under EK
    4. Hybrid engine: envelope assembly and parsing

Security Properties:
    - All encryption is authenticated (AEAD)
    - Secure RNG for all random values (scalars and nonces)
    - Validation happens before any primitive runs
    - Derived keys and scalars are wiped after use

WARNING: This module handles sensitive cryptographic material.
         Incorrect usage can compromise security.
"""

from ecvault.core.crypto.aes_gcm import AesGcmCipher, AesGcmResult
from ecvault.core.crypto.curves import (
    SECP256K1,
    SECP256R1,
    CurveParams,
    decode_point,
    encode_point,
    get_curve,
)
from ecvault.core.crypto.sampler import sample_ephemeral
from ecvault.core.crypto.key_agreement import (
    ECKeyPair,
    derive_decrypt_key,
    derive_encrypt_key,
)
from ecvault.core.crypto.hybrid_engine import (
    EncryptedEnvelope,
    HybridCryptoEngine,
    ec_decrypt,
    ec_encrypt,
)

__all__ = [
    "AesGcmCipher",
    "AesGcmResult",
    "CurveParams",
    "SECP256R1",
    "SECP256K1",
    "get_curve",
    "encode_point",
    "decode_point",
    "sample_ephemeral",
    "ECKeyPair",
    "derive_encrypt_key",
    "derive_decrypt_key",
    "EncryptedEnvelope",
    "HybridCryptoEngine",
    "ec_encrypt",
    "ec_decrypt",
]
