"""
Memory Zeroization Utilities
============================

Explicit wiping of mutable byte buffers holding key material.

Key Concepts:
- Zeroization: Overwriting memory with zeros/patterns
- Guard: Automatic cleanup on scope exit, normal or exceptional

Python may keep internal copies of immutable bytes; these helpers only
cover bytearray/memoryview buffers the caller owns.
"""

from __future__ import annotations

import ctypes
import functools
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar


def secure_zero(data: bytearray | memoryview) -> None:
    """
    Securely zero a byte buffer.

    Uses ctypes memset for bytearrays, with a Python-level fallback.

    Args:
        data: Mutable byte buffer to zero

    Raises:
        TypeError: If data is an immutable buffer
    """
    if isinstance(data, memoryview) and data.readonly:
        raise TypeError("Cannot zero a read-only buffer")
    if len(data) == 0:
        return

    if isinstance(data, bytearray):
        addr = ctypes.addressof((ctypes.c_char * len(data)).from_buffer(data))
        ctypes.memset(addr, 0, len(data))
        ctypes.memset(addr, 0xFF, len(data))
        ctypes.memset(addr, 0, len(data))
        return

    for i in range(len(data)):
        data[i] = 0


T = TypeVar("T")


def zeroize_on_exception(
    *buffers: bytearray,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator that zeroizes buffers if the wrapped call raises.

    Usage:
        key = bytearray(32)

        @zeroize_on_exception(key)
        def process():
            fill_key(key)
            use_key(key)

        process()
        secure_zero(key)  # Normal cleanup
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except Exception:
                for buf in buffers:
                    secure_zero(buf)
                raise
        return wrapper
    return decorator


@contextmanager
def ZeroizeContext(*buffers: bytearray) -> Iterator[None]:
    """
    Context manager that zeroizes buffers on exit.

    Always zeroizes, whether exit is normal or exceptional.

    Usage:
        key = bytearray(32)
        with ZeroizeContext(key):
            fill_key(key)
            encrypt(data, key, nonce)
        # key is now zeroed
    """
    try:
        yield
    finally:
        for buf in buffers:
            secure_zero(buf)
