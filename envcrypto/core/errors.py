"""
Error Taxonomy
==============

Typed errors raised by the envcrypto engine and its consumers.

Every error carries an ``ErrorKind`` in ``code`` so callers can branch
on the kind of failure without parsing messages:

    try:
        decrypt_env_file()
    except EnvCryptoError as e:
        if e.code is ErrorKind.DECRYPTION_FAILED:
            ...

Filesystem failures are not wrapped: they surface as the standard
``OSError`` subclasses, which already carry the offending filename.

Security Notice:
- Messages never include passphrases, keys, or decrypted values
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable error kinds."""

    KEY_NOT_FOUND = "KEY_NOT_FOUND"
    INVALID_PATH = "INVALID_PATH"
    MALFORMED_CONTAINER = "MALFORMED_CONTAINER"
    INVALID_FORMAT = "INVALID_FORMAT"
    DECRYPTION_FAILED = "DECRYPTION_FAILED"
    LOAD_FAILED = "LOAD_FAILED"


class EnvCryptoError(Exception):
    """Base class for all envcrypto errors."""

    code: ErrorKind

    def __init__(self, message: str, code: ErrorKind) -> None:
        super().__init__(message)
        self.code = code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value}, message={str(self)!r})"


class KeyNotFoundError(EnvCryptoError):
    """The passphrase variable is missing or empty."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.KEY_NOT_FOUND)


class InvalidPathError(EnvCryptoError, ValueError):
    """A path resolves outside the current working directory."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.INVALID_PATH)


class MalformedContainerError(EnvCryptoError):
    """The container file is not a JSON object."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.MALFORMED_CONTAINER)


class InvalidFormatError(EnvCryptoError):
    """The container parses but a required field is missing or undecodable."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.INVALID_FORMAT)


class DecryptionFailedError(EnvCryptoError):
    """
    Authenticated decryption failed.

    Raised for a wrong passphrase, corrupted ciphertext, or a modified
    authentication tag. The cause is deliberately not distinguished.
    """

    def __init__(self, message: str = "Decryption failed: authentication tag mismatch") -> None:
        super().__init__(message, ErrorKind.DECRYPTION_FAILED)


class EnvLoadError(EnvCryptoError):
    """Raised by the env loader when the engine fails; the cause is chained."""

    def __init__(self, message: str = "Failed to load encrypted environment variables") -> None:
        super().__init__(message, ErrorKind.LOAD_FAILED)
