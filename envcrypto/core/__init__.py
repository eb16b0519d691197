"""
Core module - Contains configuration, logging, errors, and the crypto engine.
"""

from envcrypto.core.config import EnvCryptoConfig
from envcrypto.core.errors import EnvCryptoError, ErrorKind
from envcrypto.core.logging import configure_logging, get_secure_logger, SecureLogFilter

__all__ = [
    "EnvCryptoConfig",
    "EnvCryptoError",
    "ErrorKind",
    "configure_logging",
    "get_secure_logger",
    "SecureLogFilter",
]
