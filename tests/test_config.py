"""
Tests for AuthConfig validation and file loading.
"""

import json
import logging

import pytest

from crossauth.config import (
    DAY_IN_SECONDS,
    AuthConfig,
    load_config_from_dict,
    load_config_from_json,
    save_config_to_json,
    validate_ttl,
)
from crossauth.error_handling import ConfigurationError


class TestAuthConfig:
    def test_default_values(self):
        config = AuthConfig()
        assert config.default_ttl_seconds == DAY_IN_SECONDS == 86_400
        assert config.algorithm == "sha1"
        assert config.password_encoding == "legacy"
        assert config.is_legacy_compatible

    def test_legacy_preset_matches_defaults(self):
        assert AuthConfig.create_legacy_compatible() == AuthConfig()

    def test_strict_preset(self):
        config = AuthConfig.create_strict()
        assert config.algorithm == "sha256"
        assert config.password_encoding == "strict"
        assert not config.is_legacy_compatible

    def test_invalid_algorithm(self):
        with pytest.raises(ConfigurationError):
            AuthConfig(algorithm="md5")

    def test_invalid_encoding(self):
        with pytest.raises(ConfigurationError):
            AuthConfig(password_encoding="hex")

    @pytest.mark.parametrize("ttl", ["60", 1.5, None, False])
    def test_invalid_ttl(self, ttl):
        with pytest.raises(ConfigurationError):
            AuthConfig(default_ttl_seconds=ttl)

    def test_negative_ttl_allowed(self):
        assert AuthConfig(default_ttl_seconds=-1).default_ttl_seconds == -1

    def test_incompatible_format_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="crossauth.config"):
            AuthConfig(algorithm="sha512")
        assert "legacy verifiers" in caplog.text

    def test_legacy_format_does_not_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="crossauth.config"):
            AuthConfig()
        assert caplog.text == ""

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            AuthConfig(algorithm="md5")


class TestValidateTtl:
    def test_returns_value(self):
        assert validate_ttl(3600) == 3600

    def test_rejects_bool(self):
        with pytest.raises(ConfigurationError):
            validate_ttl(True)


class TestLoadConfig:
    def test_from_dict(self):
        config = load_config_from_dict({"default_ttl_seconds": 60, "algorithm": "sha256"})
        assert config == AuthConfig(default_ttl_seconds=60, algorithm="sha256")

    def test_from_dict_ignores_unknown_keys(self, caplog):
        with caplog.at_level(logging.WARNING, logger="crossauth.config"):
            config = load_config_from_dict({"cache_dir": "/tmp", "algorithm": "sha1"})
        assert config == AuthConfig()
        assert "cache_dir" in caplog.text

    def test_from_dict_requires_mapping(self):
        with pytest.raises(ConfigurationError):
            load_config_from_dict(["sha1"])

    def test_json_round_trip(self, tmp_path):
        config = AuthConfig(default_ttl_seconds=300, algorithm="sha512", password_encoding="strict")
        path = save_config_to_json(config, tmp_path / "nested" / "auth.json")

        assert path.exists()
        assert json.loads(path.read_text()) == config.to_dict()
        assert load_config_from_json(path) == config

    def test_json_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_json(tmp_path / "missing.json")
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert exc_info.value.context["original_error_type"] == "FileNotFoundError"

    def test_json_malformed(self, tmp_path):
        path = tmp_path / "auth.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError):
            load_config_from_json(path)

    def test_json_invalid_values(self, tmp_path):
        path = tmp_path / "auth.json"
        path.write_text('{"algorithm": "md5"}')
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_json(path)
        # Validation errors pass through unwrapped
        assert "md5" in str(exc_info.value)
