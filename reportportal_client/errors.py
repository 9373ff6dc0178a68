"""
Client Error Types.

Every failure surfaced by this library derives from ReportPortalError:
- ServiceError: the service answered with a non-success status code.
- NotFoundError: the requested entity does not exist (HTTP 404).
- TransportError: the request never produced a response (connection, timeout).
- DeserializationError: the response body could not be turned into a model.
"""

from __future__ import annotations

from typing import Any, Optional


class ReportPortalError(Exception):
    """Base class for all errors raised by the ReportPortal client."""


class ServiceError(ReportPortalError):
    """Raised when the service responds with a non-success status code."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[int] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.body = body


class NotFoundError(ServiceError):
    """Raised when the service responds with HTTP 404."""


class TransportError(ReportPortalError):
    """Raised when the HTTP request fails before a response is received."""


class DeserializationError(ReportPortalError):
    """Raised when a response body or wire value cannot be parsed."""


def build_service_error(
    status_code: int,
    reason: str,
    url: str,
    body: Any,
) -> ServiceError:
    """
    Build the error for a non-success response.

    ReportPortal error bodies look like ``{"errorCode": 4041, "message": "..."}``;
    when present, the service message is preferred over the HTTP reason phrase.

    Args:
        status_code: HTTP status code of the response.
        reason: HTTP reason phrase.
        url: Requested URL, included in the message.
        body: Parsed JSON body, raw text, or None.

    Returns:
        ServiceError (or NotFoundError for 404) describing the failure.
    """
    error_code = None
    detail = reason
    if isinstance(body, dict):
        error_code = body.get("errorCode")
        detail = body.get("message") or reason
    elif isinstance(body, str) and body:
        detail = body

    message = f"{status_code} {detail} ({url})"
    error_cls = NotFoundError if status_code == 404 else ServiceError
    return error_cls(message, status_code=status_code, error_code=error_code, body=body)
