"""
ecvault - Hybrid Elliptic-Curve Encryption
==========================================

Encrypts byte payloads to a recipient elliptic-curve public key using an
ephemeral key agreement and AES-256-GCM.

Security Notice:
- No secrets are logged
- Fail-closed design pattern
- Secret buffers are wiped on every exit path
"""

from ecvault.core.config import SecureConfig
from ecvault.core.logging import get_secure_logger
from ecvault.core.crypto import (
    ECKeyPair,
    HybridCryptoEngine,
    ec_decrypt,
    ec_encrypt,
)
from ecvault.core.exceptions import (
    AuthenticationError,
    CryptoError,
    InvalidArgumentError,
)

__version__ = "0.1.0"
__author__ = "ecvault Team"

__all__ = [
    "SecureConfig",
    "get_secure_logger",
    "ECKeyPair",
    "HybridCryptoEngine",
    "ec_encrypt",
    "ec_decrypt",
    "CryptoError",
    "InvalidArgumentError",
    "AuthenticationError",
    "__version__",
]
