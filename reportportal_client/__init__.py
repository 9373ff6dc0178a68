"""
ReportPortal Client - Core Package.

This package contains:
- Models: Launch records and request/response payloads.
- Filtering: Query criteria for list operations.
- Client: Shared synchronous (requests) and async (httpx) HTTP clients.
- Service: Launch operations (list, get, start, finish, delete, merge, update, analyze).
- Configuration: Client settings from YAML/JSON files and RP_* variables.
"""

from reportportal_client.errors import (
    DeserializationError,
    NotFoundError,
    ReportPortalError,
    ServiceError,
    TransportError,
)
from reportportal_client.service import AsyncService, Service

__version__ = "0.1.0"

__all__ = [
    "AsyncService",
    "DeserializationError",
    "NotFoundError",
    "ReportPortalError",
    "Service",
    "ServiceError",
    "TransportError",
]
