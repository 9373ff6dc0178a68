"""
Service Layer.

Resource-grouped operations against the ReportPortal API, sharing one
ServiceContext (HTTP client + project name).
"""

from reportportal_client.service.context import ServiceContext
from reportportal_client.service.launches import AsyncLaunchService, LaunchService
from reportportal_client.service.service import AsyncService, Service

__all__ = [
    "AsyncLaunchService",
    "AsyncService",
    "LaunchService",
    "Service",
    "ServiceContext",
]
