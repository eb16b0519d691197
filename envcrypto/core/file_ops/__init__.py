"""
envcrypto File Operations Module
================================

Provides env file encryption, decryption, and parsing.

Security Features:
- Per-encryption random salt and nonce
- Authenticated encryption (AES-256-GCM)
- Integrity verification before parsing
- Fail-closed design
- Paths confined to the working directory

Components:
- container.py: On-disk container format
- encrypt.py: Env file encryption
- decrypt.py: Env file decryption with integrity check
- parser.py: KEY=value parsing and formatting
"""

from envcrypto.core.file_ops.container import EncryptedContainer
from envcrypto.core.file_ops.decrypt import decrypt_container, decrypt_env_file
from envcrypto.core.file_ops.encrypt import encrypt_env_file, write_private_file
from envcrypto.core.file_ops.parser import format_env, parse_env
from envcrypto.core.file_ops.passphrase import DEFAULT_KEY_SOURCE, resolve_passphrase

__all__ = [
    "DEFAULT_KEY_SOURCE",
    "EncryptedContainer",
    "decrypt_container",
    "decrypt_env_file",
    "encrypt_env_file",
    "format_env",
    "parse_env",
    "resolve_passphrase",
    "write_private_file",
]
