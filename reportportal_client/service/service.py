"""
Service Facades.

Wire one shared HTTP client and a project name into the resource services:

    with Service("https://rp.example.com/api/v1", "my_project", token="...") as rp:
        launch = rp.launches.get_launch("42")

    async with AsyncService("https://rp.example.com/api/v1", "my_project") as rp:
        launches = await rp.launches.get_launches()
"""

from __future__ import annotations

from typing import Any, Optional

from reportportal_client.client.async_rest_client import AsyncRestClient
from reportportal_client.client.rest_client import RestClient
from reportportal_client.config.loader import ConfigurationError
from reportportal_client.config.settings import ClientConfig
from reportportal_client.service.context import ServiceContext
from reportportal_client.service.launches import AsyncLaunchService, LaunchService


def _require_configured(config: ClientConfig) -> None:
    if not config.is_configured:
        raise ConfigurationError(
            "Both 'endpoint' and 'project' must be set "
            "(config file or RP_ENDPOINT / RP_PROJECT)"
        )


class Service:
    """
    Synchronous entry point to the ReportPortal API.

    Attributes:
        context: Shared client handle and project name.
        launches: Launch operations.
    """

    def __init__(
        self,
        base_url: str,
        project: str,
        token: str = "",
        timeout_sec: float = 30,
        verify_ssl: bool = True,
        client: Optional[RestClient] = None,
    ) -> None:
        rest_client = client or RestClient(
            base_url=base_url,
            token=token,
            timeout_sec=timeout_sec,
            verify_ssl=verify_ssl,
        )
        self.context: ServiceContext[RestClient] = ServiceContext(rest_client, project)
        self.launches = LaunchService(self.context)

    @classmethod
    def from_config(cls, config: ClientConfig) -> Service:
        """
        Build a service from loaded settings.

        Raises:
            ConfigurationError: If endpoint or project is missing.
        """
        _require_configured(config)
        return cls(
            base_url=config.endpoint,
            project=config.project,
            client=RestClient(config=config),
        )

    @property
    def project(self) -> str:
        return self.context.project

    def close(self) -> None:
        self.context.client.close()

    def __enter__(self) -> Service:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class AsyncService:
    """Non-blocking entry point to the ReportPortal API."""

    def __init__(
        self,
        base_url: str,
        project: str,
        token: str = "",
        timeout_sec: float = 30,
        verify_ssl: bool = True,
        client: Optional[AsyncRestClient] = None,
    ) -> None:
        rest_client = client or AsyncRestClient(
            base_url=base_url,
            token=token,
            timeout_sec=timeout_sec,
            verify_ssl=verify_ssl,
        )
        self.context: ServiceContext[AsyncRestClient] = ServiceContext(rest_client, project)
        self.launches = AsyncLaunchService(self.context)

    @classmethod
    def from_config(cls, config: ClientConfig) -> AsyncService:
        _require_configured(config)
        return cls(
            base_url=config.endpoint,
            project=config.project,
            client=AsyncRestClient(config=config),
        )

    @property
    def project(self) -> str:
        return self.context.project

    async def aclose(self) -> None:
        await self.context.client.aclose()

    async def __aenter__(self) -> AsyncService:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
