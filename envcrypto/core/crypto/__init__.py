"""
envcrypto Cryptographic Core
============================

Provides passphrase-based authenticated encryption.

Architecture:
    1. scrypt: Passphrase to 256-bit key
    2. AES-256-GCM: Authenticated symmetric encryption

Security Properties:
    - All encryption is authenticated (AEAD)
    - Derived keys never touch disk (memory-only)
    - Secure RNG for all random values

WARNING: This module handles sensitive cryptographic material.
         Incorrect usage can compromise security.
"""

from envcrypto.core.crypto.aes_gcm import AesGcmCipher, AesGcmResult
from envcrypto.core.crypto.kdf import derive_key_scrypt

__all__ = [
    "AesGcmCipher",
    "AesGcmResult",
    "derive_key_scrypt",
]
