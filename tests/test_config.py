"""
Tests for the Configuration Management Module.

Covers:
- ConfigLoader: file loading, bundled schema validation, caching, env overrides.
- ConfigSchema: validation against the bundled client schema.
- VersionCompatManager: migration of legacy client configs.
- ClientConfig: defaults and RP_* overrides.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from reportportal_client.config.loader import ConfigLoader, ConfigurationError
from reportportal_client.config.schema import ConfigSchema, SchemaValidationError
from reportportal_client.config.settings import ClientConfig
from reportportal_client.config.version_compat import VersionCompatManager


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def sample_client_config() -> dict:
    """Return a valid client configuration dictionary."""
    return {
        "schema_version": "1.0.0",
        "endpoint": "https://rp.example.com/api/v1",
        "project": "demo",
        "token": "secret-token",
        "timeout_sec": 15,
        "verify_ssl": False,
    }


@pytest.fixture
def minimal_schema() -> dict:
    """Return a minimal JSON schema for validator tests."""
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "required": ["endpoint"],
        "properties": {
            "endpoint": {"type": "string"},
        },
    }


# ---------------------------------------------------------------------------
# ConfigLoader Tests
# ---------------------------------------------------------------------------


class TestConfigLoader:
    """Tests for the ConfigLoader class."""

    def test_load_yaml_file(self, tmp_config_dir: Path, sample_client_config: dict) -> None:
        """Test loading a valid YAML configuration file."""
        config_file = tmp_config_dir / "reportportal.yaml"
        config_file.write_text(yaml.dump(sample_client_config), encoding="utf-8")

        loader = ConfigLoader(config_dir=tmp_config_dir)
        result = loader.load("reportportal.yaml")

        assert result["endpoint"] == "https://rp.example.com/api/v1"
        assert result["project"] == "demo"

    def test_load_json_file(self, tmp_config_dir: Path, sample_client_config: dict) -> None:
        """Test loading a valid JSON configuration file."""
        config_file = tmp_config_dir / "reportportal.json"
        config_file.write_text(json.dumps(sample_client_config), encoding="utf-8")

        loader = ConfigLoader(config_dir=tmp_config_dir)
        result = loader.load("reportportal.json")

        assert result["token"] == "secret-token"

    def test_load_file_not_found(self, tmp_config_dir: Path) -> None:
        """Test that FileNotFoundError is raised for missing files."""
        loader = ConfigLoader(config_dir=tmp_config_dir)
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            loader.load("nonexistent.yaml")

    def test_load_unsupported_format(self, tmp_config_dir: Path) -> None:
        """Test that ConfigurationError is raised for unsupported formats."""
        bad_file = tmp_config_dir / "config.txt"
        bad_file.write_text("some data", encoding="utf-8")

        loader = ConfigLoader(config_dir=tmp_config_dir)
        with pytest.raises(ConfigurationError, match="Unsupported file format"):
            loader.load("config.txt")

    def test_load_invalid_yaml(self, tmp_config_dir: Path) -> None:
        """Test that ConfigurationError is raised for malformed YAML."""
        bad_file = tmp_config_dir / "bad.yaml"
        bad_file.write_text("key: [invalid yaml{", encoding="utf-8")

        loader = ConfigLoader(config_dir=tmp_config_dir)
        with pytest.raises(ConfigurationError, match="Failed to parse"):
            loader.load("bad.yaml")

    def test_load_non_mapping(self, tmp_config_dir: Path) -> None:
        """Test that a YAML list is rejected."""
        bad_file = tmp_config_dir / "list.yaml"
        bad_file.write_text("- a\n- b\n", encoding="utf-8")

        loader = ConfigLoader(config_dir=tmp_config_dir)
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            loader.load("list.yaml")

    def test_load_fails_bundled_schema(self, tmp_config_dir: Path) -> None:
        """Test that unknown keys and wrong types fail the bundled schema."""
        config_file = tmp_config_dir / "reportportal.yaml"
        config_file.write_text(
            yaml.dump({"endpoint": "ftp://nope", "timeout_sec": "slow", "extra": 1}),
            encoding="utf-8",
        )

        loader = ConfigLoader(config_dir=tmp_config_dir)
        with pytest.raises(ConfigurationError, match="Invalid configuration") as exc_info:
            loader.load("reportportal.yaml")

        assert "timeout_sec" in str(exc_info.value)
        assert "extra" in str(exc_info.value)

    def test_load_without_validation(self, tmp_config_dir: Path) -> None:
        """Test that validation can be skipped."""
        config_file = tmp_config_dir / "reportportal.yaml"
        config_file.write_text(yaml.dump({"anything": "goes"}), encoding="utf-8")

        loader = ConfigLoader(config_dir=tmp_config_dir)
        result = loader.load("reportportal.yaml", validate=False)
        assert result["anything"] == "goes"

    def test_load_with_caching(self, tmp_config_dir: Path, sample_client_config: dict) -> None:
        """Test that config loading uses cache on second call."""
        config_file = tmp_config_dir / "reportportal.yaml"
        config_file.write_text(yaml.dump(sample_client_config), encoding="utf-8")

        loader = ConfigLoader(config_dir=tmp_config_dir)
        result1 = loader.load("reportportal.yaml")
        result2 = loader.load("reportportal.yaml")

        assert result1 is result2

    def test_load_legacy_config_is_migrated(self, tmp_config_dir: Path) -> None:
        """Test that a v0.1.0 config passes validation after migration."""
        legacy = {
            "schema_version": "0.1.0",
            "url": "https://rp.example.com",
            "uuid": "legacy-token",
            "project": "demo",
        }
        config_file = tmp_config_dir / "reportportal.yaml"
        config_file.write_text(yaml.dump(legacy), encoding="utf-8")

        loader = ConfigLoader(config_dir=tmp_config_dir)
        result = loader.load("reportportal.yaml")

        assert result["endpoint"] == "https://rp.example.com/api/v1"
        assert result["token"] == "legacy-token"
        assert result["schema_version"] == "1.0.0"

    def test_load_client_config(self, tmp_config_dir: Path, sample_client_config: dict) -> None:
        """Test building a ClientConfig from file."""
        config_file = tmp_config_dir / "reportportal.yaml"
        config_file.write_text(yaml.dump(sample_client_config), encoding="utf-8")

        loader = ConfigLoader(config_dir=tmp_config_dir)
        config = loader.load_client_config("reportportal.yaml", env={})

        assert config == ClientConfig(
            endpoint="https://rp.example.com/api/v1",
            project="demo",
            token="secret-token",
            timeout_sec=15,
            verify_ssl=False,
        )

    def test_load_client_config_env_wins(
        self, tmp_config_dir: Path, sample_client_config: dict
    ) -> None:
        """Test that RP_* variables override file values."""
        config_file = tmp_config_dir / "reportportal.yaml"
        config_file.write_text(yaml.dump(sample_client_config), encoding="utf-8")

        loader = ConfigLoader(config_dir=tmp_config_dir)
        config = loader.load_client_config(
            "reportportal.yaml",
            env={"RP_PROJECT": "other", "RP_VERIFY_SSL": "true"},
        )

        assert config.project == "other"
        assert config.verify_ssl is True
        assert config.token == "secret-token"

    def test_load_client_config_default_file_missing(self, tmp_config_dir: Path) -> None:
        """Test that a missing default file falls back to environment settings."""
        loader = ConfigLoader(config_dir=tmp_config_dir)
        config = loader.load_client_config(
            env={"RP_ENDPOINT": "https://rp.example.com/api/v1/", "RP_PROJECT": "demo"},
        )

        assert config.endpoint == "https://rp.example.com/api/v1"
        assert config.is_configured


# ---------------------------------------------------------------------------
# ClientConfig Tests
# ---------------------------------------------------------------------------


class TestClientConfig:
    """Tests for the ClientConfig dataclass."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = ClientConfig()
        assert config.timeout_sec == 30
        assert config.verify_ssl is True
        assert not config.is_configured

    def test_trailing_slash_stripped(self) -> None:
        """Test that the endpoint trailing slash is stripped."""
        config = ClientConfig(endpoint="https://rp.example.com/api/v1/", project="p")
        assert config.endpoint == "https://rp.example.com/api/v1"

    def test_invalid_timeout_override_ignored(self) -> None:
        """Test that a non-numeric RP_TIMEOUT_SEC is ignored."""
        config = ClientConfig(timeout_sec=10).with_env_overrides({"RP_TIMEOUT_SEC": "soon"})
        assert config.timeout_sec == 10

    def test_timeout_and_token_override(self) -> None:
        """Test numeric and string overrides."""
        config = ClientConfig().with_env_overrides(
            {"RP_TIMEOUT_SEC": "2.5", "RP_TOKEN": "abc", "RP_VERIFY_SSL": "no"}
        )
        assert config.timeout_sec == 2.5
        assert config.token == "abc"
        assert config.verify_ssl is False


# ---------------------------------------------------------------------------
# ConfigSchema Tests
# ---------------------------------------------------------------------------


class TestConfigSchema:
    """Tests for the ConfigSchema validator."""

    def test_bundled_schema_accepts_valid_config(self, sample_client_config: dict) -> None:
        """Test that a complete client config passes the bundled schema."""
        ConfigSchema().validate(sample_client_config)

    def test_bundled_schema_rejects_bad_endpoint(self) -> None:
        """Test that a non-HTTP endpoint is rejected."""
        with pytest.raises(SchemaValidationError) as exc_info:
            ConfigSchema().validate({"endpoint": "ftp://rp.example.com"})
        assert exc_info.value.errors[0].startswith("[endpoint]")

    def test_validator_compiled_once(self) -> None:
        """Test that the compiled validator is reused."""
        schema = ConfigSchema()
        assert schema.validator is schema.validator

    def test_custom_schema_file(self, tmp_config_dir: Path, minimal_schema: dict) -> None:
        """Test validating against a schema file from disk."""
        schema_file = tmp_config_dir / "schema.json"
        schema_file.write_text(json.dumps(minimal_schema), encoding="utf-8")

        with pytest.raises(SchemaValidationError, match="problem") as exc_info:
            ConfigSchema(schema_file).validate({"endpoint": 123})
        assert len(exc_info.value.errors) == 1

    def test_missing_schema_file(self, tmp_config_dir: Path) -> None:
        """Test that an unreadable schema file raises SchemaValidationError."""
        with pytest.raises(SchemaValidationError, match="Cannot load config schema"):
            ConfigSchema(tmp_config_dir / "missing.json").validate({})


# ---------------------------------------------------------------------------
# VersionCompatManager Tests
# ---------------------------------------------------------------------------


class TestVersionCompatManager:
    """Tests for the VersionCompatManager class."""

    def test_current_version_no_migration(self) -> None:
        """Test that current version config is returned as-is."""
        manager = VersionCompatManager()
        result = manager.migrate({"schema_version": "1.0.0", "project": "demo"})

        assert result == {"schema_version": "1.0.0", "project": "demo"}

    def test_missing_version_gets_current(self) -> None:
        """Test that config without schema_version gets current version injected."""
        manager = VersionCompatManager()
        result = manager.migrate({"project": "demo"})

        assert result["schema_version"] == "1.0.0"

    def test_builtin_migration_uuid_rename(self) -> None:
        """Test built-in migration: uuid -> token."""
        manager = VersionCompatManager()
        result = manager.migrate({"schema_version": "0.1.0", "uuid": "abc"})

        assert "uuid" not in result
        assert result["token"] == "abc"

    def test_builtin_migration_keeps_api_path(self) -> None:
        """Test that a url already ending in /api/v1 is not extended."""
        manager = VersionCompatManager()
        result = manager.migrate(
            {"schema_version": "0.1.0", "url": "https://rp.example.com/api/v1/"}
        )

        assert result["endpoint"] == "https://rp.example.com/api/v1"

    def test_custom_migration_registration(self) -> None:
        """Test registering and applying a custom migration."""
        manager = VersionCompatManager()
        manager.CURRENT_VERSION = "2.0.0"

        @manager.register_migration("1.0.0", "2.0.0")
        def _migrate_1_to_2(config: dict) -> dict:
            config["verify_ssl"] = True
            return config

        result = manager.migrate({"schema_version": "1.0.0"})

        assert result["verify_ssl"] is True
        assert result["schema_version"] == "2.0.0"

    def test_version_tuple_parsing(self) -> None:
        """Test version string to tuple conversion."""
        assert VersionCompatManager._version_tuple("1.2.3") == (1, 2, 3)
        assert VersionCompatManager._version_tuple("invalid") == (0, 0, 0)
