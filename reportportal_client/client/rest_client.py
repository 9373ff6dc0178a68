"""
ReportPortal REST Client.

Thin synchronous HTTP layer shared by all services:
- Token authentication via a Bearer header.
- JSON request bodies and JSON response parsing.
- Structured errors for non-success status codes and transport failures.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests
from loguru import logger

from reportportal_client.config.settings import ClientConfig
from reportportal_client.errors import (
    DeserializationError,
    TransportError,
    build_service_error,
)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def join_url(base_url: str, path: str) -> str:
    """Join the API base URL and a relative path, keeping any trailing slash of the path."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def auth_headers(token: str) -> Dict[str, str]:
    headers = dict(DEFAULT_HEADERS)
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class RestClient:
    """
    Synchronous client for the ReportPortal REST API.

    One instance holds one ``requests.Session`` and may be shared by
    several services and threads. No retries are performed.

    Usage::

        client = RestClient(
            base_url="https://rp.example.com/api/v1",
            token="your-api-token",
        )
        body = client.execute("GET", "my_project/launch/42")
    """

    def __init__(
        self,
        base_url: str = "",
        token: str = "",
        timeout_sec: float = 30,
        verify_ssl: bool = True,
        config: Optional[ClientConfig] = None,
    ) -> None:
        """
        Initialize the REST client.

        Args:
            base_url: API base URL, e.g. "https://rp.example.com/api/v1".
            token: API token sent as a Bearer header.
            timeout_sec: Request timeout in seconds.
            verify_ssl: Whether to verify SSL certificates.
            config: Optional ClientConfig (overrides individual params).
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

        self._session: Optional[requests.Session] = None
        logger.info(f"RestClient initialized — url={self._config.endpoint}")

    @property
    def base_url(self) -> str:
        return self._config.endpoint

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session with authentication headers."""
        if self._session is None:
            self._session = requests.Session()
            self._session.verify = self._config.verify_ssl
            self._session.headers.update(auth_headers(self._config.token))
        return self._session

    def execute(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Execute a request and return the parsed JSON body.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            path: Path relative to the base URL, e.g. "project/launch/42".
            params: Query parameters.
            json_body: Request body, serialized as JSON.

        Returns:
            Parsed JSON response body.

        Raises:
            ServiceError: On a non-success status (NotFoundError for 404).
            TransportError: On connection failure or timeout.
            DeserializationError: If a success response is not valid JSON.
        """
        session = self._get_session()
        url = join_url(self._config.endpoint, path)
        logger.debug(f"ReportPortal API {method} {url}")

        try:
            response = session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self._config.timeout_sec,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"ReportPortal API timeout: {e}")
            raise TransportError(
                f"Request to {url} timed out after {self._config.timeout_sec}s"
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"ReportPortal API connection error: {e}")
            raise TransportError(f"Cannot connect to ReportPortal: {e}") from e

        if not 200 <= response.status_code < 300:
            try:
                body: Any = response.json()
            except ValueError:
                body = response.text
            error = build_service_error(response.status_code, response.reason, url, body)
            logger.error(f"ReportPortal API HTTP error: {error}")
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise DeserializationError(
                f"Response from {method} {url} is not valid JSON: {e}"
            ) from e

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None
            logger.debug("RestClient session closed")

    def __enter__(self) -> RestClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
