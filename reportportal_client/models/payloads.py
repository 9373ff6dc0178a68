"""
Request Payload Models.

Bodies sent with mutating launch operations:
- StartLaunchRequest: create a new launch.
- FinishLaunchRequest: finish or force-stop a launch.
- UpdateLaunchRequest: change description, mode or tags of a launch.
- MergeLaunchesRequest: merge several launches into one.

Optional fields left as None are not sent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from reportportal_client.models.converters import render_datetime, render_enum
from reportportal_client.models.launch import LaunchMode


class MergeType(Enum):
    """How launches are merged: BASIC keeps suites apart, DEEP merges equal suites."""

    BASIC = "BASIC"
    DEEP = "DEEP"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _drop_none(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


@dataclass
class StartLaunchRequest:
    """
    Payload for starting a launch.

    Attributes:
        name: Launch name.
        start_time: Launch start time (defaults to now, UTC).
        description: Optional description.
        mode: DEFAULT or DEBUG.
        tags: Tags attached to the launch.
    """

    name: str
    start_time: datetime = field(default_factory=utc_now)
    description: Optional[str] = None
    mode: LaunchMode = LaunchMode.DEFAULT
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "name": self.name,
            "description": self.description,
            "start_time": render_datetime(self.start_time),
            "mode": render_enum(self.mode),
            "tags": list(self.tags),
        })


@dataclass
class FinishLaunchRequest:
    """Payload for finishing (or force-stopping) a launch."""

    end_time: datetime = field(default_factory=utc_now)
    status: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "end_time": render_datetime(self.end_time),
            "status": self.status,
        })


@dataclass
class UpdateLaunchRequest:
    """Payload for updating launch metadata. Unset fields are left unchanged."""

    description: Optional[str] = None
    mode: Optional[LaunchMode] = None
    tags: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "description": self.description,
            "mode": render_enum(self.mode) if self.mode is not None else None,
            "tags": list(self.tags) if self.tags is not None else None,
        })


@dataclass
class MergeLaunchesRequest:
    """
    Payload for merging launches.

    Attributes:
        name: Name of the resulting launch.
        launches: Identifiers of the launches to merge.
        start_time: Start time of the resulting launch.
        end_time: End time of the resulting launch.
        description: Optional description.
        tags: Tags of the resulting launch.
        mode: Optional mode of the resulting launch.
        merge_type: BASIC or DEEP.
        extend_suites_description: Append source launch info to suite descriptions.
    """

    name: str
    launches: List[str]
    start_time: datetime
    end_time: datetime
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    mode: Optional[LaunchMode] = None
    merge_type: MergeType = MergeType.BASIC
    extend_suites_description: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "name": self.name,
            "description": self.description,
            "tags": list(self.tags),
            "start_time": render_datetime(self.start_time),
            "end_time": render_datetime(self.end_time),
            "mode": render_enum(self.mode) if self.mode is not None else None,
            "launches": list(self.launches),
            "merge_type": render_enum(self.merge_type),
            "extendSuitesDescription": self.extend_suites_description,
        })
