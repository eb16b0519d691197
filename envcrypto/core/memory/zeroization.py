"""
Memory Zeroization Utilities
============================

Provides explicit zeroization of key material.

Security Properties:
- Explicit zeroization (no GC reliance)
- Exception-safe cleanup

Key Concepts:
- Zeroization: Overwriting memory with zeros/patterns
- Scope: Buffers are wiped when the owning operation exits
"""

from __future__ import annotations

import ctypes
from contextlib import contextmanager
from typing import Iterator, List, Optional


def secure_zero(data: Optional[bytearray | memoryview]) -> None:
    """
    Securely zero a byte buffer.

    Uses ctypes for direct memory access where possible,
    with fallback to Python-level zeroing.

    Args:
        data: Mutable byte buffer to zero (None is ignored)

    Security Notes:
        - This is best-effort; Python may have copies
        - Call immediately after use, before GC
        - Buffer must be mutable (bytearray, not bytes)
    """
    if data is None or len(data) == 0:
        return

    if isinstance(data, memoryview):
        data[:] = bytes(len(data))
        return

    try:
        addr = ctypes.addressof(
            (ctypes.c_char * len(data)).from_buffer(data)
        )

        # Multi-pass wipe, ending on zeros
        ctypes.memset(addr, 0, len(data))
        ctypes.memset(addr, 0xFF, len(data))
        ctypes.memset(addr, 0, len(data))

    except (TypeError, ValueError, BufferError):
        # Fallback: Python-level zeroing
        for i in range(len(data)):
            data[i] = 0


def is_zeroed(data: bytearray | memoryview) -> bool:
    """Return True if every byte of the buffer is zero."""
    return not any(data)


class ZeroizeScope:
    """
    Set of buffers wiped together when the owning scope exits.

    Buffers created partway through the scope (a derived key, say) are
    registered with ``track`` as soon as they exist.
    """

    __slots__ = ("_buffers",)

    def __init__(self, *buffers: bytearray) -> None:
        self._buffers: List[bytearray] = list(buffers)

    def track(self, buffer: bytearray) -> bytearray:
        """Register a buffer for wiping and return it."""
        self._buffers.append(buffer)
        return buffer

    def wipe(self) -> None:
        """Zero every tracked buffer."""
        for buf in self._buffers:
            secure_zero(buf)

    def __len__(self) -> int:
        return len(self._buffers)


@contextmanager
def zeroize_context(*buffers: bytearray) -> Iterator[ZeroizeScope]:
    """
    Context manager that zeroizes buffers on exit.

    Always zeroizes, whether exit is normal or exceptional.

    Usage:
        salt = bytearray(token_bytes(16))

        with zeroize_context(salt) as scope:
            key = scope.track(derive(passphrase, salt))
            encrypt(data, key)
        # key and salt are now zeroed
    """
    scope = ZeroizeScope(*buffers)
    try:
        yield scope
    finally:
        scope.wipe()
