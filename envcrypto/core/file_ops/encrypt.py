"""
Env File Encryption
===================

Encrypts a plaintext env file into an ``EncryptedContainer``.

Security Properties:
- Fresh random salt and nonce per encryption (output is non-deterministic)
- scrypt-derived AES-256 key, zeroed before returning
- Authenticated encryption (AES-256-GCM)
- Output written with owner-only permissions
- All-or-nothing write: the container appears only once complete

Encryption Flow:
1. Resolve passphrase from the environment
2. Validate source and output paths
3. Read plaintext
4. Derive key, encrypt, build container
5. Atomically replace the output file
"""

from __future__ import annotations

import logging
import os
import secrets
import tempfile
from pathlib import Path
from typing import Final

from envcrypto.core.crypto.aes_gcm import AesGcmCipher
from envcrypto.core.crypto.kdf import SALT_LENGTH, derive_key_scrypt
from envcrypto.core.file_ops.container import EncryptedContainer
from envcrypto.core.file_ops.passphrase import DEFAULT_KEY_SOURCE, resolve_passphrase
from envcrypto.core.memory.zeroization import zeroize_context
from envcrypto.utils.validators import validate_path

DEFAULT_PLAINTEXT_PATH: Final[str] = ".env"
DEFAULT_CONTAINER_PATH: Final[str] = ".env.encrypted"

# Owner read/write only
CONTAINER_FILE_MODE: Final[int] = 0o600

_log = logging.getLogger("envcrypto.engine")


def write_private_file(path: Path, data: str) -> None:
    """
    Atomically write text to ``path`` with owner-only permissions.

    The data goes to a temporary file in the same directory which is then
    renamed over the target, so readers never see a partial file. An
    existing file at ``path`` is replaced.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, CONTAINER_FILE_MODE)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def encrypt_env_file(
    source_path: str | os.PathLike[str] = DEFAULT_PLAINTEXT_PATH,
    output_path: str | os.PathLike[str] = DEFAULT_CONTAINER_PATH,
    key_source: str = DEFAULT_KEY_SOURCE,
) -> Path:
    """
    Encrypt a plaintext env file and write the container.

    Args:
        source_path: Plaintext env file
        output_path: Destination for the encrypted container (overwritten)
        key_source: Name of the environment variable holding the passphrase

    Returns:
        Absolute path of the written container

    Raises:
        KeyNotFoundError: If the passphrase variable is unset or empty
        InvalidPathError: If either path leaves the working directory
        OSError: If the source cannot be read or the output cannot be written
    """
    passphrase = resolve_passphrase(key_source)

    source = validate_path(source_path)
    output = validate_path(output_path)

    # Bytes are decoded without newline translation so \r and \r\n survive
    plaintext = source.read_bytes().decode("utf-8")

    salt = bytearray(secrets.token_bytes(SALT_LENGTH))
    with zeroize_context(salt) as scope:
        key = scope.track(derive_key_scrypt(passphrase, salt))
        sealed = AesGcmCipher().encrypt(plaintext.encode("utf-8"), key)
        container = EncryptedContainer(
            salt=bytes(salt),
            iv=sealed.nonce,
            content=sealed.ciphertext,
            auth_tag=sealed.tag,
        )

    write_private_file(output, container.to_json())

    _log.info("Encrypted environment file saved to %s", output)
    return output
