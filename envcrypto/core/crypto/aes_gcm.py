"""
AES-256-GCM Authenticated Encryption
====================================

Implements AES-256-GCM with a caller-supplied key and a detached
authentication tag.

Security Properties:
    - 256-bit key (128-bit security level)
    - 128-bit nonce, stored alongside the ciphertext
    - 128-bit authentication tag, stored separately from the ciphertext
    - Authenticated Additional Data (AAD) support

WARNING:
    - Never reuse (key, nonce) pairs
    - Always verify tag before using plaintext
    - Keys should be wiped from memory after use
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Final, Optional

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

# Constants
AES_KEY_SIZE: Final[int] = 32  # 256 bits
AES_NONCE_SIZE: Final[int] = 16  # 128 bits, the container's "iv" field
AES_TAG_SIZE: Final[int] = 16  # 128 bits


@dataclass(frozen=True, slots=True)
class AesGcmResult:
    """
    Immutable result of AES-GCM encryption.

    Attributes:
        ciphertext: Encrypted data without the tag
        nonce: Unique nonce used for this encryption
        tag: Authentication tag bound to ciphertext and AAD
    """

    ciphertext: bytes
    nonce: bytes
    tag: bytes

    def __repr__(self) -> str:
        """Safe representation without exposing data."""
        return (
            f"AesGcmResult(ciphertext_len={len(self.ciphertext)}, "
            f"nonce_len={len(self.nonce)}, tag_len={len(self.tag)})"
        )


class AesGcmCipher:
    """
    AES-256-GCM Authenticated Encryption with Associated Data (AEAD).

    The underlying AEAD appends the tag to the ciphertext; this class
    splits it off on encryption and re-attaches it on decryption so the
    two can be stored as separate fields.

    Usage:
        cipher = AesGcmCipher()

        result = cipher.encrypt(plaintext, key)

        plaintext = cipher.decrypt(
            ciphertext=result.ciphertext,
            nonce=result.nonce,
            tag=result.tag,
            key=key,
        )
    """

    __slots__ = ()

    @staticmethod
    def generate_nonce() -> bytes:
        """
        Generate a cryptographically secure random nonce.

        Returns:
            16 bytes of cryptographic random data
        """
        return secrets.token_bytes(AES_NONCE_SIZE)

    def encrypt(
        self,
        plaintext: bytes,
        key: bytes | bytearray,
        nonce: Optional[bytes] = None,
        aad: Optional[bytes] = None,
    ) -> AesGcmResult:
        """
        Encrypt plaintext using AES-256-GCM.

        Args:
            plaintext: Data to encrypt (can be empty)
            key: 32-byte key
            nonce: Optional nonce. If None, a fresh random nonce is generated.
            aad: Additional Authenticated Data (authenticated but not encrypted)

        Returns:
            AesGcmResult containing ciphertext, nonce, and tag

        Raises:
            ValueError: If key or nonce has the wrong size
        """
        if len(key) != AES_KEY_SIZE:
            raise ValueError(f"Key must be exactly {AES_KEY_SIZE} bytes")

        if nonce is None:
            nonce = self.generate_nonce()
        elif len(nonce) != AES_NONCE_SIZE:
            raise ValueError(f"Nonce must be exactly {AES_NONCE_SIZE} bytes")

        sealed = AESGCM(key).encrypt(nonce, plaintext, aad)

        return AesGcmResult(
            ciphertext=sealed[:-AES_TAG_SIZE],
            nonce=nonce,
            tag=sealed[-AES_TAG_SIZE:],
        )

    def decrypt(
        self,
        ciphertext: bytes,
        nonce: bytes,
        tag: bytes,
        key: bytes | bytearray,
        aad: Optional[bytes] = None,
    ) -> bytes:
        """
        Decrypt ciphertext using AES-256-GCM with integrity verification.

        Args:
            ciphertext: Encrypted data without the tag
            nonce: The nonce used during encryption
            tag: The 16-byte authentication tag
            key: The 32-byte encryption key
            aad: Additional Authenticated Data (must match encryption AAD)

        Returns:
            Decrypted plaintext bytes

        Raises:
            ValueError: If parameters are invalid
            cryptography.exceptions.InvalidTag: If authentication fails

        Security Notes:
            - Integrity is verified BEFORE any plaintext is returned
            - InvalidTag means data was tampered or wrong key/nonce/AAD
        """
        if len(key) != AES_KEY_SIZE:
            raise ValueError(f"Key must be exactly {AES_KEY_SIZE} bytes")
        if len(nonce) != AES_NONCE_SIZE:
            raise ValueError(f"Nonce must be exactly {AES_NONCE_SIZE} bytes")
        if len(tag) != AES_TAG_SIZE:
            raise ValueError(f"Tag must be exactly {AES_TAG_SIZE} bytes")

        return AESGCM(key).decrypt(nonce, ciphertext + tag, aad)
