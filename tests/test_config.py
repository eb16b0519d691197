"""
Tests for configuration loading and environment overrides.
"""
from pathlib import Path

import pytest

from envcrypto.core.config import DefaultsConfig, EnvCryptoConfig, LoggingConfig, read_env_overrides


class TestDefaults:

    def test_default_values(self):
        config = EnvCryptoConfig.load()

        assert config.defaults.source_path == ".env"
        assert config.defaults.output_path == ".env.encrypted"
        assert config.defaults.plaintext_path == ".env"
        assert config.defaults.variable_name == "ENV_CRYPTO_KEY"
        assert config.logging.level == "WARNING"
        assert config.logging.log_dir is None

    def test_empty_field_rejected(self):
        with pytest.raises(ValueError):
            DefaultsConfig(variable_name="")

    def test_invalid_level_rejected(self):
        with pytest.raises(ValueError):
            LoggingConfig(level="LOUD")

    def test_relative_log_dir_rejected(self):
        with pytest.raises(ValueError):
            LoggingConfig(log_dir=Path("logs"))


class TestEnvironmentOverrides:

    def test_defaults_override(self, monkeypatch):
        monkeypatch.setenv("ENVCRYPTO_DEFAULTS__OUTPUT_PATH", "secrets/.env.enc")
        monkeypatch.setenv("ENVCRYPTO_DEFAULTS__VARIABLE_NAME", "APP_ENV_PASSPHRASE")

        config = EnvCryptoConfig.load()

        assert config.defaults.output_path == "secrets/.env.enc"
        assert config.defaults.variable_name == "APP_ENV_PASSPHRASE"
        assert config.defaults.source_path == ".env"

    def test_logging_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ENVCRYPTO_LOGGING__LEVEL", "debug")
        monkeypatch.setenv("ENVCRYPTO_LOGGING__ENABLE_CONSOLE", "false")
        monkeypatch.setenv("ENVCRYPTO_LOGGING__LOG_DIR", str(tmp_path))

        config = EnvCryptoConfig.load()

        assert config.logging.level == "DEBUG"
        assert config.logging.enable_console is False
        assert config.logging.log_dir == tmp_path

    def test_numeric_override(self, monkeypatch):
        monkeypatch.setenv("ENVCRYPTO_LOGGING__BACKUP_COUNT", "2")
        assert EnvCryptoConfig.load().logging.backup_count == 2

    def test_non_numeric_override_raises(self, monkeypatch):
        monkeypatch.setenv("ENVCRYPTO_LOGGING__BACKUP_COUNT", "many")
        with pytest.raises(ValueError):
            EnvCryptoConfig.load()

    def test_invalid_override_raises(self, monkeypatch):
        monkeypatch.setenv("ENVCRYPTO_LOGGING__LEVEL", "verbose")
        with pytest.raises(ValueError):
            EnvCryptoConfig.load()

    def test_sensitive_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv("ENVCRYPTO_DEFAULTS__PASSPHRASE", "should-not-be-read")
        assert read_env_overrides("ENVCRYPTO") == {}

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("MYAPP_DEFAULTS__SOURCE_PATH", "config/.env")
        assert EnvCryptoConfig.load(env_prefix="MYAPP").defaults.source_path == "config/.env"


class TestImmutability:

    def test_setattr_rejected(self):
        config = EnvCryptoConfig.load()
        with pytest.raises(AttributeError):
            config._defaults = DefaultsConfig(source_path="other.env")

    def test_sections_frozen(self):
        config = EnvCryptoConfig.load()
        with pytest.raises(AttributeError):
            config.defaults.source_path = "other.env"

    def test_hash_reflects_content(self, monkeypatch):
        baseline = EnvCryptoConfig.load().config_hash
        monkeypatch.setenv("ENVCRYPTO_DEFAULTS__SOURCE_PATH", "other.env")
        assert EnvCryptoConfig.load().config_hash != baseline

    def test_repr_only_shows_hash(self):
        config = EnvCryptoConfig.load()
        assert repr(config) == f"EnvCryptoConfig(hash={config.config_hash})"


class TestSingleton:

    def test_same_instance(self):
        assert EnvCryptoConfig.get_instance() is EnvCryptoConfig.get_instance()

    def test_reset_reloads(self, monkeypatch):
        first = EnvCryptoConfig.get_instance()
        monkeypatch.setenv("ENVCRYPTO_LOGGING__LEVEL", "ERROR")
        EnvCryptoConfig.reset_instance()

        second = EnvCryptoConfig.get_instance()

        assert second is not first
        assert second.logging.level == "ERROR"
