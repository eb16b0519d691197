"""
Key Derivation Functions
========================

Passphrase-based key derivation for env file encryption.

Implements:
    - scrypt (memory-hard) for passphrase stretching

The cost parameters are fixed: containers do not record them, so every
container ever written must be decryptable with the same values.
"""

from __future__ import annotations

from typing import Final

from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

# scrypt parameters (N=2^14, r=8, p=1; ~16 MB of memory per derivation)
SCRYPT_N: Final[int] = 2 ** 14
SCRYPT_R: Final[int] = 8
SCRYPT_P: Final[int] = 1

DERIVED_KEY_LENGTH: Final[int] = 32  # AES-256
SALT_LENGTH: Final[int] = 16


def derive_key_scrypt(
    passphrase: str,
    salt: bytes | bytearray,
    length: int = DERIVED_KEY_LENGTH,
) -> bytearray:
    """
    Derive a key from a passphrase using scrypt.

    Args:
        passphrase: The passphrase (encoded as UTF-8)
        salt: Random salt stored alongside the ciphertext
        length: Output key length

    Returns:
        Derived key as a mutable buffer so the caller can zero it

    Raises:
        ValueError: If the passphrase or salt is empty

    Security:
        - Deterministic: same passphrase+salt = same key
        - Salt must be unique per encryption
    """
    if not passphrase:
        raise ValueError("Passphrase cannot be empty")
    if not salt:
        raise ValueError("Salt cannot be empty")

    kdf = Scrypt(
        salt=bytes(salt),
        length=length,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
    )
    return bytearray(kdf.derive(passphrase.encode("utf-8")))
