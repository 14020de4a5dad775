"""
Secure Memory Buffers
=====================

Buffers for short-lived secrets: ephemeral scalars, derived symmetric
keys, private scalars and passwords.

Security Properties:
- Explicit zeroization (don't rely on Python GC)
- Memory locking where supported (prevent swapping)
- Automatic cleanup on context exit
- Exception-safe operation

Limitations:
- Python's memory model copies data internally
- Best-effort security, not guaranteed
"""

from __future__ import annotations

import ctypes
import platform
from typing import Final, List

from ecvault.core.memory.zeroization import secure_zero

IS_WINDOWS: Final[bool] = platform.system() == "Windows"
IS_LINUX: Final[bool] = platform.system() == "Linux"
IS_MACOS: Final[bool] = platform.system() == "Darwin"

MAX_BUFFER_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB


def _libc() -> ctypes.CDLL:
    return ctypes.CDLL("libc.so.6" if IS_LINUX else "libc.dylib", use_errno=True)


def _mlock(address: int, size: int) -> bool:
    """
    Lock memory pages to prevent swapping.

    Returns True if successful, False otherwise.
    """
    try:
        if IS_WINDOWS:
            kernel32 = ctypes.windll.kernel32
            return bool(kernel32.VirtualLock(ctypes.c_void_p(address), ctypes.c_size_t(size)))
        if IS_LINUX or IS_MACOS:
            return _libc().mlock(ctypes.c_void_p(address), ctypes.c_size_t(size)) == 0
    except (OSError, AttributeError):
        pass
    return False


def _munlock(address: int, size: int) -> bool:
    """Unlock memory pages."""
    try:
        if IS_WINDOWS:
            kernel32 = ctypes.windll.kernel32
            return bool(kernel32.VirtualUnlock(ctypes.c_void_p(address), ctypes.c_size_t(size)))
        if IS_LINUX or IS_MACOS:
            return _libc().munlock(ctypes.c_void_p(address), ctypes.c_size_t(size)) == 0
    except (OSError, AttributeError):
        pass
    return False


class SecureBuffer:
    """
    Fixed-size secret buffer with explicit zeroization.

    Usage:
        with SecureBuffer.from_bytes(key_material) as key:
            use_key(key.view)
        # Buffer is now zeroed

    Security Notes:
        - Prefer .view over .data; .data makes an immutable copy
        - Always use the context manager or call wipe() explicitly
    """

    __slots__ = ("_buffer", "_wiped", "_locked", "__weakref__")

    def __init__(self, size: int, lock_memory: bool = True) -> None:
        """
        Initialize a zero-filled secure buffer.

        Args:
            size: Buffer size in bytes
            lock_memory: Try to lock memory (prevent swapping)
        """
        if size < 0 or size > MAX_BUFFER_SIZE:
            raise ValueError(f"Buffer size must be between 0 and {MAX_BUFFER_SIZE}")

        self._buffer = bytearray(size)
        self._wiped = False
        self._locked = False

        if lock_memory and size:
            self._locked = _mlock(self._address(), size)

    @classmethod
    def from_bytes(
        cls,
        data: bytes | bytearray | memoryview,
        lock_memory: bool = True,
    ) -> "SecureBuffer":
        """
        Create a SecureBuffer holding a copy of data.

        The original data is NOT wiped - caller is responsible.
        """
        buf = cls(size=len(data), lock_memory=lock_memory)
        buf._buffer[:] = data
        return buf

    @classmethod
    def from_int(cls, value: int, size: int, lock_memory: bool = True) -> "SecureBuffer":
        """Create a SecureBuffer holding value as size big-endian bytes."""
        buf = cls(size=size, lock_memory=lock_memory)
        buf._buffer[:] = value.to_bytes(size, "big")
        return buf

    def _address(self) -> int:
        return ctypes.addressof((ctypes.c_char * len(self._buffer)).from_buffer(self._buffer))

    def _check(self) -> None:
        if self._wiped:
            raise ValueError("Buffer has been wiped")

    @property
    def size(self) -> int:
        """Get buffer size."""
        return len(self._buffer)

    @property
    def view(self) -> memoryview:
        """Read-only view of the buffer contents, no copy."""
        self._check()
        return memoryview(self._buffer).toreadonly()

    @property
    def data(self) -> bytes:
        """
        Buffer contents as immutable bytes.

        Warning: This creates a copy that cannot be wiped.
        """
        self._check()
        return bytes(self._buffer)

    def to_int(self) -> int:
        """Interpret the contents as a big-endian integer."""
        self._check()
        return int.from_bytes(self._buffer, "big")

    @property
    def is_wiped(self) -> bool:
        """Check if buffer has been wiped."""
        return self._wiped

    @property
    def is_locked(self) -> bool:
        """Check if memory is locked."""
        return self._locked

    def wipe(self) -> None:
        """Zero the buffer and release the page lock. Idempotent."""
        if self._wiped:
            return

        secure_zero(self._buffer)

        if self._locked:
            _munlock(self._address(), len(self._buffer))
            self._locked = False

        self._wiped = True

    def __enter__(self) -> "SecureBuffer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.wipe()

    def __del__(self) -> None:
        try:
            self.wipe()
        except Exception:
            pass

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        """Safe representation."""
        if self._wiped:
            return "SecureBuffer(WIPED)"
        return f"SecureBuffer(size={self.size}, locked={self._locked})"


class SecureString:
    """
    Secure string container with explicit zeroization.

    Stores string data as UTF-8 bytes in a SecureBuffer.

    Usage:
        with SecureString("my_password") as pwd:
            key = password_to_aes_key(pwd)
        # String data is now wiped

    Security Notes:
        - The original str passed to the constructor may still exist
    """

    __slots__ = ("_buffer",)

    def __init__(self, value: str | bytes = "", lock_memory: bool = True) -> None:
        data = value.encode("utf-8") if isinstance(value, str) else value
        self._buffer = SecureBuffer.from_bytes(data, lock_memory=lock_memory)

    def get(self) -> str:
        """Get the stored string."""
        return self._buffer.data.decode("utf-8")

    def to_buffer(self) -> SecureBuffer:
        """
        Copy the UTF-8 bytes into a new SecureBuffer owned by the caller.

        An empty string yields an empty buffer.
        """
        return SecureBuffer.from_bytes(self._buffer.view)

    @property
    def is_wiped(self) -> bool:
        return self._buffer.is_wiped

    def wipe(self) -> None:
        """Wipe the stored data."""
        self._buffer.wipe()

    def __len__(self) -> int:
        return len(self._buffer)

    def __enter__(self) -> "SecureString":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.wipe()

    def __repr__(self) -> str:
        """Safe representation - never show value."""
        if self._buffer.is_wiped:
            return "SecureString(WIPED)"
        return f"SecureString(len={len(self._buffer)})"

    def __str__(self) -> str:
        return "********"


class MemoryGuard:
    """
    Scope guard for secure memory operations.

    Ensures that tracked buffers are wiped even if an exception occurs.

    Usage:
        with MemoryGuard() as guard:
            key = guard.track(SecureBuffer.from_bytes(derived))
            use(key.view)
        # All tracked buffers wiped on exit
    """

    __slots__ = ("_tracked",)

    def __init__(self) -> None:
        self._tracked: List[SecureBuffer] = []

    def track(self, buffer: SecureBuffer) -> SecureBuffer:
        """Track a buffer for cleanup. Returns the buffer."""
        self._tracked.append(buffer)
        return buffer

    def wipe_all(self) -> None:
        """Wipe all tracked buffers."""
        for buf in self._tracked:
            buf.wipe()
        self._tracked.clear()

    def __enter__(self) -> "MemoryGuard":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.wipe_all()
