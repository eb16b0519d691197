"""
Encrypted Container Format
==========================

The persisted artifact produced by encryption.

File Format:
    A single JSON object; binary fields are lowercase hex:

        {"version": "1.0.0", "salt": "<32 hex>", "iv": "<32 hex>",
         "content": "<hex ciphertext>", "authTag": "<32 hex>"}

    ``version`` is carried through unchanged and not used for branching.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Final

from envcrypto.core.crypto.aes_gcm import AES_TAG_SIZE
from envcrypto.core.errors import InvalidFormatError, MalformedContainerError

CONTAINER_FORMAT_VERSION: Final[str] = "1.0.0"

# Fields that must be present and non-empty
_REQUIRED_NON_EMPTY: Final[tuple[str, ...]] = ("salt", "iv", "authTag")

# Whole bytes only; no whitespace or separators
_HEX_TEXT: Final[re.Pattern[str]] = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _decode_hex(fields: dict[str, Any], name: str) -> bytes:
    value = fields[name]
    if not isinstance(value, str):
        raise InvalidFormatError(f"Invalid encrypted file format: {name} must be a hex string")
    if not _HEX_TEXT.fullmatch(value):
        raise InvalidFormatError(f"Invalid encrypted file format: {name} is not valid hex")
    return bytes.fromhex(value)


@dataclass(frozen=True, slots=True)
class EncryptedContainer:
    """
    Immutable encrypted env file.

    Attributes:
        salt: scrypt salt
        iv: AES-GCM nonce
        content: Ciphertext (may be empty for an empty plaintext)
        auth_tag: 16-byte GCM authentication tag
        version: Format version tag
    """

    salt: bytes
    iv: bytes
    content: bytes
    auth_tag: bytes
    version: str = CONTAINER_FORMAT_VERSION

    def to_dict(self) -> dict[str, str]:
        """Serialize to the on-disk field layout."""
        return {
            "version": self.version,
            "salt": self.salt.hex(),
            "iv": self.iv.hex(),
            "content": self.content.hex(),
            "authTag": self.auth_tag.hex(),
        }

    def to_json(self) -> str:
        """Serialize to JSON text."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str | bytes) -> "EncryptedContainer":
        """
        Deserialize from JSON text (or UTF-8 encoded bytes).

        Raises:
            MalformedContainerError: If the text is not a JSON object
            InvalidFormatError: If a required field is missing or undecodable
        """
        try:
            fields = json.loads(text)
        except ValueError as e:
            raise MalformedContainerError(
                "Invalid encrypted file format: not valid JSON"
            ) from e

        if not isinstance(fields, dict):
            raise MalformedContainerError(
                "Invalid encrypted file format: expected a JSON object"
            )

        missing = [name for name in _REQUIRED_NON_EMPTY if not fields.get(name)]
        if "content" not in fields or fields["content"] is None:
            missing.append("content")
        if missing:
            raise InvalidFormatError(
                "Invalid encrypted file format: missing required fields "
                f"({', '.join(sorted(missing))})"
            )

        auth_tag = _decode_hex(fields, "authTag")
        if len(auth_tag) != AES_TAG_SIZE:
            raise InvalidFormatError(
                f"Invalid encrypted file format: authTag must be {AES_TAG_SIZE} bytes"
            )

        version = fields.get("version", CONTAINER_FORMAT_VERSION)
        if not isinstance(version, str):
            version = str(version)

        return cls(
            salt=_decode_hex(fields, "salt"),
            iv=_decode_hex(fields, "iv"),
            content=_decode_hex(fields, "content"),
            auth_tag=auth_tag,
            version=version,
        )

    def __repr__(self) -> str:
        """Safe representation."""
        return f"EncryptedContainer(version={self.version!r}, content_len={len(self.content)})"
