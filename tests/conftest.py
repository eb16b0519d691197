"""Shared fixtures for envcrypto tests."""
import logging
import os

import pytest

from envcrypto.core.config import EnvCryptoConfig
from envcrypto.loader import reset_env

PASSPHRASE = "mkNA802Hqwxpl6c0"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test inside an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def passphrase(monkeypatch):
    """Provide the default passphrase variable."""
    monkeypatch.setenv("ENV_CRYPTO_KEY", PASSPHRASE)
    return PASSPHRASE


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch):
    """Reset singletons, config overrides and logger handlers between tests."""
    for name in list(os.environ):
        if name.startswith("ENVCRYPTO_"):
            monkeypatch.delenv(name)
    EnvCryptoConfig.reset_instance()
    reset_env()
    yield
    EnvCryptoConfig.reset_instance()
    reset_env()
    logger = logging.getLogger("envcrypto")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
