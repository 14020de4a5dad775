"""
ecvault Memory Security Module
==============================

Scoped handling of secret buffers.

Components:
- secure_memory.py: Secure buffer implementations
- zeroization.py: Memory wiping utilities

WARNING:
- Python's memory model doesn't guarantee secure erasure
- These are best-effort mitigations
"""

from ecvault.core.memory.secure_memory import (
    SecureBuffer,
    SecureString,
    MemoryGuard,
)
from ecvault.core.memory.zeroization import (
    secure_zero,
    zeroize_on_exception,
    ZeroizeContext,
)

__all__ = [
    "SecureBuffer",
    "SecureString",
    "MemoryGuard",
    "secure_zero",
    "zeroize_on_exception",
    "ZeroizeContext",
]
