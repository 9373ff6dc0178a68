"""
Client Settings.

Connection settings shared by the HTTP clients and the service facade,
with optional overrides from ``RP_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from loguru import logger

ENV_PREFIX = "RP_"
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ClientConfig:
    """
    Connection settings for the ReportPortal API.

    Attributes:
        endpoint: API base URL (e.g., "https://rp.example.com/api/v1").
        project: Project name used as the first path segment of every request.
        token: API token sent as a Bearer header.
        timeout_sec: Request timeout in seconds.
        verify_ssl: Whether to verify SSL certificates.
    """

    endpoint: str = ""
    project: str = ""
    token: str = ""
    timeout_sec: float = 30
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        self.endpoint = self.endpoint.rstrip("/")

    @property
    def is_configured(self) -> bool:
        """Check if the config has the minimum settings to issue requests."""
        return bool(self.endpoint and self.project)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        """Build a config from a (validated) configuration mapping."""
        return cls(
            endpoint=str(data.get("endpoint", "")),
            project=str(data.get("project", "")),
            token=str(data.get("token", "")),
            timeout_sec=data.get("timeout_sec", 30),
            verify_ssl=bool(data.get("verify_ssl", True)),
        )

    def with_env_overrides(self, env: Optional[Mapping[str, str]] = None) -> ClientConfig:
        """
        Return a copy with ``RP_ENDPOINT``, ``RP_PROJECT``, ``RP_TOKEN``,
        ``RP_TIMEOUT_SEC`` and ``RP_VERIFY_SSL`` applied on top.

        Args:
            env: Environment mapping (defaults to os.environ).
        """
        env = os.environ if env is None else env
        overrides: Dict[str, Any] = {}

        for name in ("endpoint", "project", "token"):
            value = env.get(f"{ENV_PREFIX}{name.upper()}")
            if value:
                overrides[name] = value

        timeout = env.get(f"{ENV_PREFIX}TIMEOUT_SEC")
        if timeout:
            try:
                overrides["timeout_sec"] = float(timeout)
            except ValueError:
                logger.warning(f"Ignoring invalid {ENV_PREFIX}TIMEOUT_SEC={timeout!r}")

        verify = env.get(f"{ENV_PREFIX}VERIFY_SSL")
        if verify:
            overrides["verify_ssl"] = verify.strip().lower() in _TRUE_VALUES

        if overrides:
            logger.debug(f"Environment overrides applied: {sorted(overrides)}")

        return ClientConfig(
            endpoint=overrides.get("endpoint", self.endpoint),
            project=overrides.get("project", self.project),
            token=overrides.get("token", self.token),
            timeout_sec=overrides.get("timeout_sec", self.timeout_sec),
            verify_ssl=overrides.get("verify_ssl", self.verify_ssl),
        )
