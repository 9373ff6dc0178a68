"""
Root conftest.py — Shared Pytest fixtures.

Provides:
- Sample wire payloads for launches and list responses.
- A RestClient whose requests.Session is replaced by a MagicMock.
- A response factory mimicking requests.Response.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple
from unittest.mock import MagicMock

import pytest

from reportportal_client.client.rest_client import RestClient
from reportportal_client.service.service import Service

BASE_URL = "https://rp.example.com/api/v1"
PROJECT = "demo"


def make_response(
    status_code: int = 200,
    body: Any = None,
    reason: str = "OK",
    text: Optional[str] = None,
) -> MagicMock:
    """Build a MagicMock shaped like a requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    if text is not None:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1")
        response.text = text
    else:
        response.json.return_value = body
        response.text = ""
    return response


@pytest.fixture
def launch_payload() -> Dict[str, Any]:
    """Return a launch as sent by the service."""
    return {
        "id": "5a1b2c",
        "name": "Nightly",
        "description": "Nightly regression",
        "number": 7,
        "mode": "default",
        "start_time": "2017-03-14T09:26:53.589Z",
        "end_time": "2017-03-14T10:01:02.004Z",
        "tags": ["smoke", "ui"],
        "statistics": {
            "executions": {"total": 10, "passed": 7, "failed": 2, "skipped": 1},
            "defects": {
                "product_bugs": {"total": 1},
                "automation_bugs": {"total": 0},
                "system_issue": {"total": 1},
                "to_investigate": {"total": 0},
            },
        },
    }


@pytest.fixture
def launches_payload(launch_payload: Dict[str, Any]) -> Dict[str, Any]:
    """Return one page of launches as sent by the service."""
    return {
        "content": [launch_payload],
        "page": {"number": 1, "size": 20, "totalElements": 1, "totalPages": 1},
    }


@pytest.fixture
def mocked_client() -> Tuple[RestClient, MagicMock]:
    """RestClient with a mocked session; returns (client, session)."""
    client = RestClient(base_url=BASE_URL, token="secret-token")
    session = MagicMock()
    client._session = session
    return client, session


@pytest.fixture
def service(mocked_client: Tuple[RestClient, MagicMock]) -> Service:
    """Service bound to the mocked client and the demo project."""
    client, _ = mocked_client
    return Service(base_url=BASE_URL, project=PROJECT, client=client)


@pytest.fixture
def respond(mocked_client: Tuple[RestClient, MagicMock]) -> Callable[..., MagicMock]:
    """Queue a response on the mocked session and return the session."""
    _, session = mocked_client

    def _respond(status_code: int = 200, body: Any = None, **kwargs: Any) -> MagicMock:
        session.request.return_value = make_response(status_code, body, **kwargs)
        return session

    return _respond
