"""
Passphrase lookup.

The passphrase is never passed to the engine directly; it is read from a
named environment variable on every call.
"""

from __future__ import annotations

import os
from typing import Final

from envcrypto.core.errors import KeyNotFoundError

DEFAULT_KEY_SOURCE: Final[str] = "ENV_CRYPTO_KEY"


def resolve_passphrase(key_source: str = DEFAULT_KEY_SOURCE) -> str:
    """
    Read the passphrase from the environment.

    Raises:
        KeyNotFoundError: If the variable is unset or empty
    """
    passphrase = os.environ.get(key_source)
    if not passphrase:
        raise KeyNotFoundError(f"Environment variable {key_source} not found")
    return passphrase
