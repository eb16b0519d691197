"""
Secure Logging Module
=====================

Logging setup for the command-line front end, with secret redaction.

Library modules log through ``logging.getLogger("envcrypto.<area>")`` and
never attach handlers themselves. ``configure_logging`` (or the lower-level
``get_secure_logger``) installs handlers on the ``envcrypto`` logger once.

Security Features:
- Passphrases, tokens and hex/base64 key material are redacted from every
  rendered message before it reaches a handler
- Optional rotating log file, confined to an absolute directory
- Log records never carry decrypted values (the engine only logs paths
  and counts)
"""

from __future__ import annotations

import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Final, Iterable, Optional, Pattern

if TYPE_CHECKING:
    from envcrypto.core.config import LoggingConfig

ROOT_LOGGER_NAME: Final[str] = "envcrypto"

_REDACTED_TEXT: Final[str] = "[REDACTED]"

# name=value style secrets; the name is kept so the log stays readable
_ASSIGNED_SECRET: Final[Pattern[str]] = re.compile(
    r"(?i)\b(passphrase|password|passwd|pwd|api[_-]?key|apikey|token|bearer"
    r"|secret|private[_-]?key|env[_-]crypto[_-]key)"
    r"(\s*[=:]\s*)[\"']?[^\s\"']+[\"']?"
)

# Bare encoded blobs: salts, tags and keys are 32+ hex characters
_ENCODED_SECRETS: Final[tuple[Pattern[str], ...]] = (
    re.compile(r"(?i)\b(?:0x)?[a-f0-9]{32,}\b"),
    re.compile(r"[A-Za-z0-9+/]{40,}={0,2}"),
)

_FILE_FORMAT: Final[str] = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
)


def redact(text: str, extra: Iterable[Pattern[str]] = ()) -> str:
    """Replace secret-looking substrings of ``text`` with ``[REDACTED]``."""
    text = _ASSIGNED_SECRET.sub(lambda m: f"{m.group(1)}{m.group(2)}{_REDACTED_TEXT}", text)
    for pattern in (*_ENCODED_SECRETS, *extra):
        text = pattern.sub(_REDACTED_TEXT, text)
    return text


class SecureLogFilter(logging.Filter):
    """
    Log filter that redacts the rendered message of every record.

    The message is formatted with its arguments first and the result is
    stored back on the record, so a secret split across ``msg`` and
    ``args`` is still caught.
    """

    def __init__(self, name: str = "", additional_patterns: Optional[list[Pattern[str]]] = None) -> None:
        super().__init__(name)
        self._additional_patterns = tuple(additional_patterns or ())

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the record in place; records are never dropped."""
        record.msg = redact(record.getMessage(), self._additional_patterns)
        record.args = None
        return True


def _rotating_file_handler(
    log_dir: Path,
    logger_name: str,
    max_bytes: int,
    backup_count: int,
) -> RotatingFileHandler:
    """Create ``<log_dir>/<logger_name>.log``, refusing traversal in the directory."""
    if ".." in log_dir.parts:
        raise ValueError("Log path cannot contain path traversal sequences")

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{logger_name.replace('.', '_')}.log"

    return RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )


def get_secure_logger(
    name: str = ROOT_LOGGER_NAME,
    log_dir: Optional[Path] = None,
    level: str = "INFO",
    enable_console: bool = True,
    fmt: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt: str = "%H:%M:%S",
    max_file_size: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """
    Attach redacting handlers to a logger.

    Handlers are installed only on the first call for a given logger; later
    calls just update the level.

    Args:
        name: Logger name (normally ``"envcrypto"``)
        log_dir: Absolute directory for a rotating log file (none if omitted)
        level: Logging level name
        enable_console: Whether to write to stderr
        fmt: Console record format
        datefmt: Console date format
        max_file_size: Log file size that triggers rotation
        backup_count: Number of rotated files to keep

    Raises:
        ValueError: If ``log_dir`` contains ``..``
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())

    if logger.handlers:
        return logger

    secure_filter = SecureLogFilter()

    if enable_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
        console.addFilter(secure_filter)
        logger.addHandler(console)

    if log_dir is not None:
        file_handler = _rotating_file_handler(log_dir, name, max_file_size, backup_count)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        file_handler.addFilter(secure_filter)
        logger.addHandler(file_handler)

    # Records stop here so the root logger never sees unredacted copies
    logger.propagate = False

    return logger


def configure_logging(config: LoggingConfig, verbose: bool = False) -> logging.Logger:
    """Install handlers on the ``envcrypto`` logger from a ``LoggingConfig``."""
    return get_secure_logger(
        ROOT_LOGGER_NAME,
        log_dir=config.log_dir,
        level="DEBUG" if verbose else config.level,
        enable_console=config.enable_console,
        fmt=config.format,
        datefmt=config.date_format,
        max_file_size=config.max_file_size_bytes,
        backup_count=config.backup_count,
    )
