"""
Configuration Module
====================

Provides immutable, environment-aware configuration for the command-line
front end.

Security Features:
- Immutable configuration after initialization
- Environment variable override support
- No secrets in configuration (the passphrase is only ever read from the
  variable named by ``defaults.variable_name``)
- Sensitive-looking overrides are ignored
"""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Final, Mapping, Optional, TypeVar


# Security Constants
_SENSITIVE_KEYS: Final[frozenset[str]] = frozenset({
    "password", "secret", "key", "token", "api_key",
    "private", "credential", "auth", "salt", "passphrase",
})

_VALID_LEVELS: Final[frozenset[str]] = frozenset({
    "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL",
})


def _is_sensitive_key(key: str) -> bool:
    """Check if a configuration key might contain sensitive data."""
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in _SENSITIVE_KEYS)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class DefaultsConfig:
    """Default file locations and passphrase variable."""

    source_path: str = ".env"
    output_path: str = ".env.encrypted"
    plaintext_path: str = ".env"
    variable_name: str = "ENV_CRYPTO_KEY"

    def __post_init__(self) -> None:
        """Validate defaults."""
        for field_name in ("source_path", "output_path", "plaintext_path", "variable_name"):
            if not getattr(self, field_name):
                raise ValueError(f"{field_name} cannot be empty")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Immutable logging configuration."""

    level: str = "WARNING"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%H:%M:%S"
    enable_console: bool = True
    log_dir: Optional[Path] = None
    max_file_size_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate logging settings."""
        if self.level.upper() not in _VALID_LEVELS:
            raise ValueError(f"Invalid log level: {self.level}")
        if self.log_dir is not None and not self.log_dir.is_absolute():
            raise ValueError(f"log_dir must be an absolute path: {self.log_dir}")


_Section = TypeVar("_Section", DefaultsConfig, LoggingConfig)

# Converters for non-string fields, keyed by field name
_CONVERTERS: Final[dict[str, Callable[[str], Any]]] = {
    "level": str.upper,
    "enable_console": _parse_bool,
    "log_dir": Path,
    "max_file_size_bytes": int,
    "backup_count": int,
}


def read_env_overrides(prefix: str) -> dict[str, str]:
    """
    Collect ``<PREFIX>_SECTION__FIELD`` variables as ``section.field`` keys.

    Names that look like they hold secrets are skipped.
    """
    marker = f"{prefix.upper()}_"
    overrides: dict[str, str] = {}

    for name, value in os.environ.items():
        if not name.startswith(marker):
            continue
        config_key = name[len(marker):].lower().replace("__", ".")
        if not _is_sensitive_key(config_key):
            overrides[config_key] = value

    return overrides


def _build_section(section: str, section_cls: type[_Section], overrides: Mapping[str, str]) -> _Section:
    kwargs: dict[str, Any] = {}
    for field in fields(section_cls):
        raw = overrides.get(f"{section}.{field.name}")
        if raw is not None:
            kwargs[field.name] = _CONVERTERS.get(field.name, str)(raw)
    return section_cls(**kwargs)


class EnvCryptoConfig:
    """
    Centralized, immutable configuration loader with environment override support.

    Overrides are read from variables prefixed with ``ENVCRYPTO_`` using
    double underscores between section and field:

        ENVCRYPTO_LOGGING__LEVEL=DEBUG
        ENVCRYPTO_LOGGING__LOG_DIR=/var/log/envcrypto
        ENVCRYPTO_DEFAULTS__VARIABLE_NAME=APP_ENV_PASSPHRASE

    Usage:
        config = EnvCryptoConfig.load()
        source = config.defaults.source_path
    """

    __slots__ = ("_defaults", "_logging", "_frozen", "_config_hash")

    _instance: Optional[EnvCryptoConfig] = None

    def __init__(
        self,
        defaults: Optional[DefaultsConfig] = None,
        logging: Optional[LoggingConfig] = None,
    ) -> None:
        """Initialize configuration. Use EnvCryptoConfig.load() for standard initialization."""
        object.__setattr__(self, "_frozen", False)
        object.__setattr__(self, "_defaults", defaults or DefaultsConfig())
        object.__setattr__(self, "_logging", logging or LoggingConfig())
        object.__setattr__(self, "_config_hash", self._compute_hash())
        object.__setattr__(self, "_frozen", True)

    def _compute_hash(self) -> str:
        """Compute a hash of the configuration for integrity checking."""
        config_str = f"{self._defaults}|{self._logging}"
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    @property
    def defaults(self) -> DefaultsConfig:
        """Get default paths and variable name."""
        return self._defaults

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration."""
        return self._logging

    @property
    def config_hash(self) -> str:
        """Get configuration integrity hash."""
        return self._config_hash

    @classmethod
    def load(cls, env_prefix: str = "ENVCRYPTO") -> EnvCryptoConfig:
        """
        Load configuration with environment variable overrides.

        Every field of every section can be overridden; the value is
        converted with the field's converter (``str`` when none is listed).

        Args:
            env_prefix: Prefix for environment variables (default: ENVCRYPTO)

        Returns:
            Configured EnvCryptoConfig instance

        Raises:
            ValueError: If an override has an invalid value
        """
        overrides = read_env_overrides(env_prefix)

        return cls(
            defaults=_build_section("defaults", DefaultsConfig, overrides),
            logging=_build_section("logging", LoggingConfig, overrides),
        )

    @classmethod
    def get_instance(cls) -> EnvCryptoConfig:
        """
        Get or create the singleton configuration instance.

        Returns:
            The global EnvCryptoConfig instance
        """
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance. Use only for testing."""
        cls._instance = None

    def __repr__(self) -> str:
        """Safe string representation."""
        return f"EnvCryptoConfig(hash={self._config_hash})"

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if getattr(self, "_frozen", False):
            raise AttributeError("EnvCryptoConfig is immutable after initialization")
        super().__setattr__(name, value)
