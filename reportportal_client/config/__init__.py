"""
Configuration Management Module.

Handles loading and validation of client settings:
- Config files (YAML/JSON) validated against a bundled JSON schema.
- Migration of older config layouts.
- RP_* environment variable overrides.
"""

from reportportal_client.config.loader import ConfigLoader, ConfigurationError
from reportportal_client.config.schema import ConfigSchema, SchemaValidationError
from reportportal_client.config.settings import ClientConfig

__all__ = [
    "ClientConfig",
    "ConfigSchema",
    "ConfigLoader",
    "ConfigurationError",
    "SchemaValidationError",
]
