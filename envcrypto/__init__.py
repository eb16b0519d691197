"""
envcrypto - Encrypted .env Files
================================

Encrypts a plaintext ``.env`` file into a self-describing container and
decrypts it back into key-value pairs.

Security Notice:
- No secrets are logged
- Fail-closed design pattern
- The passphrase is only read from an environment variable
- Derived keys are zeroed after every operation
"""

__version__ = "1.0.0"
__author__ = "envcrypto contributors"

from envcrypto.core.errors import (
    DecryptionFailedError,
    EnvCryptoError,
    EnvLoadError,
    ErrorKind,
    InvalidFormatError,
    InvalidPathError,
    KeyNotFoundError,
    MalformedContainerError,
)
from envcrypto.core.file_ops import (
    EncryptedContainer,
    decrypt_env_file,
    encrypt_env_file,
    format_env,
    parse_env,
)
from envcrypto.loader import EnvLoader, get_env, init_env, reset_env
from envcrypto.utils.validators import validate_path

__all__ = [
    "DecryptionFailedError",
    "EncryptedContainer",
    "EnvCryptoError",
    "EnvLoadError",
    "EnvLoader",
    "ErrorKind",
    "InvalidFormatError",
    "InvalidPathError",
    "KeyNotFoundError",
    "MalformedContainerError",
    "decrypt_env_file",
    "encrypt_env_file",
    "format_env",
    "get_env",
    "init_env",
    "parse_env",
    "reset_env",
    "validate_path",
    "__version__",
]
