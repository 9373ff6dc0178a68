"""
Configuration Loader Module.

Loads ReportPortal client configuration files:
- YAML and JSON formats.
- Schema validation using JSON Schema.
- Version-aware migration of older config layouts.
- Environment variable overrides (RP_*).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from loguru import logger

from reportportal_client.config.schema import ConfigSchema, SchemaValidationError
from reportportal_client.config.settings import ClientConfig
from reportportal_client.config.version_compat import VersionCompatManager
from reportportal_client.errors import ReportPortalError


class ConfigurationError(ReportPortalError):
    """Raised when a configuration file is invalid or cannot be loaded."""


class ConfigLoader:
    """
    Configuration loader with schema validation and backward compatibility.

    Attributes:
        config_dir: Base directory searched for relative config filenames.
        schema: Validator for the bundled client config schema.
        version_manager: Handles version-aware migrations.
    """

    SUPPORTED_EXTENSIONS = {".yaml", ".yml", ".json"}
    DEFAULT_FILENAME = "reportportal.yaml"

    def __init__(
        self,
        config_dir: str | Path = ".",
        schema: Optional[ConfigSchema] = None,
    ) -> None:
        """
        Initialize the configuration loader.

        Args:
            config_dir: Directory containing configuration files.
            schema: Config schema validator. Defaults to the schema bundled
                    with the package.
        """
        self.config_dir = Path(config_dir)
        self.schema = schema or ConfigSchema()
        self.version_manager = VersionCompatManager()
        self._cache: Dict[str, Dict[str, Any]] = {}

        logger.debug(f"ConfigLoader initialized — config_dir={self.config_dir}")

    def load(
        self,
        filename: str,
        *,
        validate: bool = True,
        use_cache: bool = True,
    ) -> Dict[str, Any]:
        """
        Load a configuration file with optional schema validation.

        Args:
            filename: Name or path of the config file.
            validate: Whether to validate against the client config schema.
            use_cache: Whether to use cached config if available.

        Returns:
            Parsed and migrated configuration as a dictionary.

        Raises:
            ConfigurationError: If the file cannot be loaded or fails validation.
            FileNotFoundError: If the configuration file does not exist.
        """
        file_path = self._resolve_path(filename)
        cache_key = str(file_path.resolve())

        if use_cache and cache_key in self._cache:
            logger.debug(f"Returning cached config for: {filename}")
            return self._cache[cache_key]

        logger.info(f"Loading configuration: {file_path}")
        data = self._read_file(file_path)
        data = self.version_manager.migrate(data)

        if validate:
            self._validate(data, file_path)

        if use_cache:
            self._cache[cache_key] = data

        return data

    def load_client_config(
        self,
        filename: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> ClientConfig:
        """
        Load client settings from a file, then apply environment overrides.

        Without a filename, the default ``reportportal.yaml`` is used when it
        exists; otherwise settings come from the environment alone.

        Args:
            filename: Config file name or path.
            env: Environment mapping (defaults to os.environ).

        Returns:
            ClientConfig instance.
        """
        if filename is None:
            try:
                data = self.load(self.DEFAULT_FILENAME)
            except FileNotFoundError:
                logger.debug(
                    f"{self.DEFAULT_FILENAME} not found, using environment settings only"
                )
                data = {}
        else:
            data = self.load(filename)

        return ClientConfig.from_dict(data).with_env_overrides(env)

    def _resolve_path(self, filename: str) -> Path:
        """Resolve a filename to a full path, checking config_dir first."""
        path = Path(filename)
        if path.is_absolute() and path.exists():
            return path

        config_path = self.config_dir / filename
        if config_path.exists():
            return config_path

        if path.exists():
            return path

        raise FileNotFoundError(
            f"Configuration file not found: {filename} "
            f"(searched in {self.config_dir} and current directory)"
        )

    def _read_file(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse a YAML or JSON file."""
        suffix = file_path.suffix.lower()
        if suffix not in self.SUPPORTED_EXTENSIONS:
            raise ConfigurationError(
                f"Unsupported file format '{suffix}'. "
                f"Supported: {sorted(self.SUPPORTED_EXTENSIONS)}"
            )

        try:
            content = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to read file {file_path}: {e}") from e

        try:
            if suffix in {".yaml", ".yml"}:
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to parse {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping (dict), "
                f"got {type(data).__name__}: {file_path}"
            )

        return data

    def _validate(self, data: Dict[str, Any], file_path: Path) -> None:
        try:
            self.schema.validate(data)
        except SchemaValidationError as e:
            raise ConfigurationError(f"Invalid configuration {file_path}: {e}") from e
