"""
Asynchronous ReportPortal REST Client.

Non-blocking counterpart of RestClient built on ``httpx.AsyncClient``.
Same request, response and error contract; requests run on the caller's
event loop.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from loguru import logger

from reportportal_client.client.rest_client import auth_headers, join_url
from reportportal_client.config.settings import ClientConfig
from reportportal_client.errors import (
    DeserializationError,
    TransportError,
    build_service_error,
)


class AsyncRestClient:
    """Async client for the ReportPortal REST API."""

    def __init__(
        self,
        base_url: str = "",
        token: str = "",
        timeout_sec: float = 30,
        verify_ssl: bool = True,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the async client.

        Args:
            base_url: API base URL, e.g. "https://rp.example.com/api/v1".
            token: API token sent as a Bearer header.
            timeout_sec: Request timeout in seconds.
            verify_ssl: Whether to verify SSL certificates.
            config: Optional ClientConfig (overrides individual params).
            transport: Optional httpx transport (e.g., httpx.MockTransport).
        """
        if config:
            self._config = config
        else:
            self._config = ClientConfig(
                endpoint=base_url.rstrip("/"),
                token=token,
                timeout_sec=timeout_sec,
                verify_ssl=verify_ssl,
            )

        self.client = httpx.AsyncClient(
            headers=auth_headers(self._config.token),
            timeout=self._config.timeout_sec,
            verify=self._config.verify_ssl,
            transport=transport,
        )
        logger.info(f"AsyncRestClient initialized — url={self._config.endpoint}")

    @property
    def base_url(self) -> str:
        return self._config.endpoint

    async def __aenter__(self) -> AsyncRestClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        await self.client.aclose()
        logger.debug("AsyncRestClient closed")

    async def execute(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Execute a request and return the parsed JSON body.

        Raises:
            ServiceError: On a non-success status (NotFoundError for 404).
            TransportError: On connection failure or timeout.
            DeserializationError: If a success response is not valid JSON.
        """
        url = join_url(self._config.endpoint, path)
        logger.debug(f"ReportPortal API {method} {url}")

        try:
            response = await self.client.request(
                method,
                url,
                params=params,
                json=json_body,
            )
        except httpx.TimeoutException as e:
            logger.error(f"ReportPortal API timeout: {e}")
            raise TransportError(
                f"Request to {url} timed out after {self._config.timeout_sec}s"
            ) from e
        except httpx.TransportError as e:
            logger.error(f"ReportPortal API connection error: {e}")
            raise TransportError(f"Cannot connect to ReportPortal: {e}") from e

        if not response.is_success:
            try:
                body: Any = response.json()
            except ValueError:
                body = response.text
            error = build_service_error(
                response.status_code, response.reason_phrase, url, body
            )
            logger.error(f"ReportPortal API HTTP error: {error}")
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise DeserializationError(
                f"Response from {method} {url} is not valid JSON: {e}"
            ) from e
