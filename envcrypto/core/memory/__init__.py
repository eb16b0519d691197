"""
envcrypto Memory Security Module
================================

Provides scoped zeroization of key material.

Security Features:
- Explicit zeroization (don't rely on GC)
- Exception-safe cleanup

WARNING:
- Python's memory model doesn't guarantee secure erasure
- These are best-effort mitigations
"""

from envcrypto.core.memory.zeroization import (
    ZeroizeScope,
    is_zeroed,
    secure_zero,
    zeroize_context,
)

__all__ = [
    "ZeroizeScope",
    "is_zeroed",
    "secure_zero",
    "zeroize_context",
]
