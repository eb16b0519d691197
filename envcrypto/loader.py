"""
Encrypted Environment Loader
============================

Loads an encrypted env file once per process and exposes the values with
light type coercion:

- ``"123"`` -> ``123``, ``"-1.5"`` -> ``-1.5``
- ``"a, b,c"`` -> ``["a", "b", "c"]``
- anything else is returned unchanged

List values are also exported to ``os.environ`` as JSON strings so code
reading the process environment sees them.

Usage:
    from envcrypto import init_env, get_env

    init_env()
    port = get_env("PORT", 8080)
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Final, Optional, Union

from envcrypto.core.errors import EnvCryptoError, EnvLoadError
from envcrypto.core.file_ops.decrypt import decrypt_env_file
from envcrypto.core.file_ops.encrypt import DEFAULT_CONTAINER_PATH
from envcrypto.core.file_ops.passphrase import DEFAULT_KEY_SOURCE

EnvValue = Union[str, int, float, list[str]]

_NUMBER: Final[re.Pattern[str]] = re.compile(r"-?\d+(\.\d+)?")

_log = logging.getLogger("envcrypto.loader")


def coerce_value(value: str) -> EnvValue:
    """Convert a raw env string to a number, a list, or leave it as is."""
    match = _NUMBER.fullmatch(value)
    if match:
        return float(value) if match.group(1) else int(value)

    if "," in value:
        return [item.strip() for item in value.split(",")]

    return value


class EnvLoader:
    """
    Decrypt-once cache of environment values.

    The first ``init`` call decrypts the container; later calls return the
    cached mapping without touching the file until ``reset`` is called.
    """

    __slots__ = ("_values", "_initialized")

    def __init__(self) -> None:
        self._values: dict[str, EnvValue] = {}
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def values(self) -> dict[str, EnvValue]:
        """The live cached mapping (empty until initialized)."""
        return self._values

    def init(
        self,
        source_path: str | os.PathLike[str] = DEFAULT_CONTAINER_PATH,
        key_source: str = DEFAULT_KEY_SOURCE,
    ) -> dict[str, EnvValue]:
        """
        Decrypt and cache the env file, once.

        Raises:
            EnvLoadError: If decryption fails for any reason; the original
                error is chained as ``__cause__``
        """
        if self._initialized:
            return self._values

        try:
            variables = decrypt_env_file(source_path, key_source)
        except (EnvCryptoError, OSError) as e:
            raise EnvLoadError() from e

        for key, raw in variables.items():
            value = coerce_value(raw)
            self._values[key] = value
            if isinstance(value, list):
                os.environ[key] = json.dumps(value)

        self._initialized = True
        _log.info("Decrypted environment variables loaded")
        return self._values

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Return a cached value, or ``default`` if absent."""
        return self._values.get(key, default)

    def reset(self) -> None:
        """Clear the cache so the next ``init`` decrypts again."""
        self._values.clear()
        self._initialized = False

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __repr__(self) -> str:
        """Safe representation without values."""
        return f"EnvLoader(initialized={self._initialized}, variables={len(self._values)})"


_default_loader = EnvLoader()


def init_env(
    source_path: str | os.PathLike[str] = DEFAULT_CONTAINER_PATH,
    key_source: str = DEFAULT_KEY_SOURCE,
) -> dict[str, EnvValue]:
    """Initialize the process-wide loader."""
    return _default_loader.init(source_path, key_source)


def get_env(key: str, default: Optional[Any] = None) -> Any:
    """Read a value from the process-wide loader."""
    return _default_loader.get(key, default)


def reset_env() -> None:
    """Reset the process-wide loader. Use only for testing or reloading."""
    _default_loader.reset()
