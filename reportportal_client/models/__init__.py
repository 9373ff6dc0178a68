"""
Model Layer.

Typed records for launches and the request/response bodies of the
launch API, with wire-name mapping and value conversion.
"""

from reportportal_client.models.common import Message
from reportportal_client.models.launch import (
    Defect,
    Defects,
    Executions,
    Launch,
    LaunchMode,
    LaunchesContainer,
    Page,
    Statistic,
)
from reportportal_client.models.payloads import (
    FinishLaunchRequest,
    MergeLaunchesRequest,
    MergeType,
    StartLaunchRequest,
    UpdateLaunchRequest,
)

__all__ = [
    "Defect",
    "Defects",
    "Executions",
    "FinishLaunchRequest",
    "Launch",
    "LaunchMode",
    "LaunchesContainer",
    "MergeLaunchesRequest",
    "MergeType",
    "Message",
    "Page",
    "StartLaunchRequest",
    "Statistic",
    "UpdateLaunchRequest",
]
