"""
Tests for secret redaction in log output.
"""
import logging
import re

import pytest

from envcrypto.core.config import LoggingConfig
from envcrypto.core.logging import SecureLogFilter, configure_logging, get_secure_logger, redact


def _record(msg, *args):
    return logging.LogRecord("envcrypto.test", logging.INFO, __file__, 1, msg, args, None)


class TestSecureLogFilter:

    @pytest.mark.parametrize("message,secret", [
        ("passphrase=correct-horse", "correct-horse"),
        ("password: hunter2", "hunter2"),
        ("api_key='abc123xyz'", "abc123xyz"),
        ("token=eyJhbGciOi", "eyJhbGciOi"),
        ("secret = topsecret", "topsecret"),
        ("salt 000102030405060708090a0b0c0d0e0f", "000102030405060708090a0b0c0d0e0f"),
    ])
    def test_message_redacted(self, message, secret):
        record = _record(message)
        assert SecureLogFilter().filter(record) is True
        assert secret not in record.getMessage()
        assert "[REDACTED]" in record.getMessage()

    def test_tuple_args_redacted(self):
        record = _record("loaded %s", "passphrase=correct-horse")
        SecureLogFilter().filter(record)
        assert "correct-horse" not in record.getMessage()

    def test_non_string_args_untouched(self):
        record = _record("%d variables", 3)
        SecureLogFilter().filter(record)
        assert record.getMessage() == "3 variables"

    def test_plain_message_untouched(self):
        record = _record("Encrypted environment file written")
        SecureLogFilter().filter(record)
        assert record.getMessage() == "Encrypted environment file written"

    def test_additional_patterns(self):
        record = _record("user id 4242")
        SecureLogFilter(additional_patterns=[re.compile(r"\d{4}")]).filter(record)
        assert record.getMessage() == "user id [REDACTED]"


class TestGetSecureLogger:

    def test_console_handler_filters(self, capsys):
        logger = get_secure_logger("envcrypto", level="INFO")
        logger.info("using passphrase=correct-horse")

        err = capsys.readouterr().err
        assert "correct-horse" not in err
        assert "[REDACTED]" in err

    def test_child_loggers_reach_handlers(self, capsys):
        get_secure_logger("envcrypto", level="INFO")
        logging.getLogger("envcrypto.engine").info("container written")
        assert "container written" in capsys.readouterr().err

    def test_level_applied_on_repeat_call(self):
        get_secure_logger("envcrypto", level="WARNING")
        logger = get_secure_logger("envcrypto", level="DEBUG")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_output(self, tmp_path):
        logger = get_secure_logger("envcrypto", log_dir=tmp_path, enable_console=False, level="INFO")
        logger.info("token=abcdef")
        for handler in logger.handlers:
            handler.flush()

        content = (tmp_path / "envcrypto.log").read_text(encoding="utf-8")
        assert "abcdef" not in content
        assert "[REDACTED]" in content

    def test_traversal_in_log_dir_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            get_secure_logger("envcrypto", log_dir=tmp_path / ".." / "escape", enable_console=False)


class TestConfigureLogging:

    def test_uses_config_level(self):
        logger = configure_logging(LoggingConfig(level="ERROR"))
        assert logger.name == "envcrypto"
        assert logger.level == logging.ERROR
        assert logger.propagate is False

    def test_verbose_forces_debug(self):
        assert configure_logging(LoggingConfig(), verbose=True).level == logging.DEBUG

    def test_console_disabled(self):
        assert configure_logging(LoggingConfig(enable_console=False)).handlers == []


class TestRedact:

    def test_name_kept(self):
        assert redact("ENV_CRYPTO_KEY=hunter2") == "ENV_CRYPTO_KEY=[REDACTED]"

    def test_variable_names_untouched(self):
        assert redact("Decrypted variables: API_TOKEN, DB_HOST") == "Decrypted variables: API_TOKEN, DB_HOST"
