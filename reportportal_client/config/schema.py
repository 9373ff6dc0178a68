"""Validation of client configuration mappings against the bundled JSON schema."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Mapping, Optional

import jsonschema
from loguru import logger

CLIENT_CONFIG_SCHEMA_PATH = Path(__file__).parent / "schemas" / "client_config_schema.json"


class SchemaValidationError(Exception):
    """Raised when a configuration mapping does not match the client schema."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ConfigSchema:
    """
    Draft-07 validator for client configuration mappings.

    The schema file is read and compiled on first use; later validations
    reuse the same validator.

    Usage::

        ConfigSchema().validate({"endpoint": "https://rp.example.com/api/v1"})
    """

    def __init__(self, path: Path = CLIENT_CONFIG_SCHEMA_PATH) -> None:
        self.path = Path(path)
        self._validator: Optional[jsonschema.Draft7Validator] = None

    @property
    def validator(self) -> jsonschema.Draft7Validator:
        if self._validator is None:
            try:
                schema = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                raise SchemaValidationError(f"Cannot load config schema {self.path}: {e}") from e
            jsonschema.Draft7Validator.check_schema(schema)
            self._validator = jsonschema.Draft7Validator(schema)
            logger.debug(f"Config schema compiled from {self.path}")
        return self._validator

    def validate(self, data: Mapping[str, Any]) -> None:
        """
        Check a configuration mapping.

        Raises:
            SchemaValidationError: Listing every violation as "[key] message".
        """
        problems = [
            f"[{'.'.join(str(p) for p in error.absolute_path) or '(root)'}] {error.message}"
            for error in sorted(self.validator.iter_errors(data), key=lambda e: list(e.path))
        ]
        if problems:
            raise SchemaValidationError(
                f"{len(problems)} problem(s) in client config: " + "; ".join(problems),
                errors=problems,
            )
