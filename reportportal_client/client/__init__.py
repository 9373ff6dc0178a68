"""
HTTP Client Module.

Shared HTTP clients used by the services:
- RestClient: synchronous, built on requests.
- AsyncRestClient: non-blocking, built on httpx.
"""

from reportportal_client.client.async_rest_client import AsyncRestClient
from reportportal_client.client.rest_client import RestClient

__all__ = ["AsyncRestClient", "RestClient"]
