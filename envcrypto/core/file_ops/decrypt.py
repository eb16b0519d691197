"""
Env File Decryption
===================

Decrypts an ``EncryptedContainer`` back into env variables.

Security Properties:
- Integrity checked BEFORE any content is parsed
- Fail-closed design (any error = complete failure)
- Derived key zeroed on every exit path
- Wrong key, tampering and corruption are indistinguishable to the caller

Decryption Flow:
1. Resolve passphrase from the environment
2. Validate the container path
3. Parse the container and decode its fields
4. Derive the key from the stored salt
5. Verify the tag and decrypt
6. Parse the plaintext as env file text
"""

from __future__ import annotations

import logging
import os

from cryptography.exceptions import InvalidTag

from envcrypto.core.crypto.aes_gcm import AesGcmCipher
from envcrypto.core.crypto.kdf import derive_key_scrypt
from envcrypto.core.errors import DecryptionFailedError
from envcrypto.core.file_ops.container import EncryptedContainer
from envcrypto.core.file_ops.encrypt import DEFAULT_CONTAINER_PATH
from envcrypto.core.file_ops.parser import parse_env
from envcrypto.core.file_ops.passphrase import DEFAULT_KEY_SOURCE, resolve_passphrase
from envcrypto.core.memory.zeroization import zeroize_context
from envcrypto.utils.validators import validate_path

_log = logging.getLogger("envcrypto.engine")


def decrypt_container(container: EncryptedContainer, passphrase: str) -> str:
    """
    Verify and decrypt a container to its plaintext.

    Args:
        container: Parsed container
        passphrase: Passphrase used at encryption time

    Returns:
        Decrypted env file text

    Raises:
        DecryptionFailedError: If authentication fails or the plaintext
            is not valid UTF-8
    """
    salt = bytearray(container.salt)
    with zeroize_context(salt) as scope:
        key = scope.track(derive_key_scrypt(passphrase, salt))
        try:
            plaintext = AesGcmCipher().decrypt(
                ciphertext=container.content,
                nonce=container.iv,
                tag=container.auth_tag,
                key=key,
            )
        except (InvalidTag, ValueError) as e:
            raise DecryptionFailedError() from e

    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecryptionFailedError("Decryption failed: plaintext is not valid UTF-8") from e


def decrypt_env_file(
    source_path: str | os.PathLike[str] = DEFAULT_CONTAINER_PATH,
    key_source: str = DEFAULT_KEY_SOURCE,
) -> dict[str, str]:
    """
    Decrypt an encrypted env file and parse its variables.

    Args:
        source_path: Encrypted container file
        key_source: Name of the environment variable holding the passphrase

    Returns:
        Mapping of variable name to raw string value

    Raises:
        KeyNotFoundError: If the passphrase variable is unset or empty
        InvalidPathError: If the path leaves the working directory
        MalformedContainerError: If the file is not a JSON object
        InvalidFormatError: If a required field is missing or undecodable
        DecryptionFailedError: If the tag does not verify
        OSError: If the file cannot be read
    """
    passphrase = resolve_passphrase(key_source)

    source = validate_path(source_path)
    container = EncryptedContainer.from_json(source.read_bytes())

    try:
        plaintext = decrypt_container(container, passphrase)
    except DecryptionFailedError:
        _log.warning("Decryption of %s failed", source)
        raise

    variables = parse_env(plaintext)
    _log.info("Decrypted %d variable(s) from %s", len(variables), source)
    return variables
