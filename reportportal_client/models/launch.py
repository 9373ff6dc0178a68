"""
Launch Models.

Data records for a ReportPortal launch and its nested statistics:
- Launch: a top-level test run.
- Statistic: execution counts plus categorized defect counts.
- LaunchesContainer: one page of launches returned by list operations.

Each record maps itself to and from its JSON wire representation with
explicit wire names; typed fields (mode, timestamps) are converted at
that boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from reportportal_client.errors import DeserializationError
from reportportal_client.models.converters import (
    parse_enum,
    parse_int,
    parse_optional_datetime,
    render_datetime,
    render_enum,
    require_mapping,
)


class LaunchMode(Enum):
    """Visibility mode of a launch."""

    DEFAULT = "default"
    DEBUG = "debug"


@dataclass
class Defect:
    """Count of defects in a single category."""

    total: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total}

    @classmethod
    def from_dict(cls, data: Any) -> Defect:
        data = require_mapping(data, cls.__name__)
        return cls(total=parse_int(data.get("total", 0), "total"))


@dataclass
class Defects:
    """
    Defect counts by category.

    Attributes:
        product_bugs: Failures caused by the product under test.
        automation_bugs: Failures caused by the test code.
        system_issues: Failures caused by the environment (wire name "system_issue").
        to_investigate: Failures not yet triaged.
    """

    product_bugs: Defect = field(default_factory=Defect)
    automation_bugs: Defect = field(default_factory=Defect)
    system_issues: Defect = field(default_factory=Defect)
    to_investigate: Defect = field(default_factory=Defect)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_bugs": self.product_bugs.to_dict(),
            "automation_bugs": self.automation_bugs.to_dict(),
            "system_issue": self.system_issues.to_dict(),
            "to_investigate": self.to_investigate.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Defects:
        data = require_mapping(data, cls.__name__)
        return cls(
            product_bugs=Defect.from_dict(data.get("product_bugs") or {}),
            automation_bugs=Defect.from_dict(data.get("automation_bugs") or {}),
            system_issues=Defect.from_dict(data.get("system_issue") or {}),
            to_investigate=Defect.from_dict(data.get("to_investigate") or {}),
        )


@dataclass
class Executions:
    """Test execution counts of a launch."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Executions:
        data = require_mapping(data, cls.__name__)
        return cls(
            total=parse_int(data.get("total", 0), "total"),
            passed=parse_int(data.get("passed", 0), "passed"),
            failed=parse_int(data.get("failed", 0), "failed"),
            skipped=parse_int(data.get("skipped", 0), "skipped"),
        )


@dataclass
class Statistic:
    """Aggregated statistics of a launch."""

    executions: Executions = field(default_factory=Executions)
    defects: Defects = field(default_factory=Defects)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "executions": self.executions.to_dict(),
            "defects": self.defects.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Statistic:
        data = require_mapping(data, cls.__name__)
        return cls(
            executions=Executions.from_dict(data.get("executions") or {}),
            defects=Defects.from_dict(data.get("defects") or {}),
        )


@dataclass
class Launch:
    """
    Representation of a launch as returned by the service.

    Attributes:
        id: Launch identifier.
        name: Launch name.
        description: Free-form description.
        number: Sequential number of the launch among launches with the same name.
        mode: DEFAULT or DEBUG.
        start_time: When the launch started (UTC).
        end_time: When the launch finished (UTC), None while in progress.
        tags: Ordered list of tags.
        statistics: Execution and defect counts.
    """

    id: str = ""
    name: str = ""
    description: str = ""
    number: int = 0
    mode: LaunchMode = LaunchMode.DEFAULT
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    tags: List[str] = field(default_factory=list)
    statistics: Statistic = field(default_factory=Statistic)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire representation, omitting unset timestamps."""
        result: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "number": self.number,
            "mode": render_enum(self.mode),
            "tags": list(self.tags),
            "statistics": self.statistics.to_dict(),
        }
        if self.start_time is not None:
            result["start_time"] = render_datetime(self.start_time)
        if self.end_time is not None:
            result["end_time"] = render_datetime(self.end_time)
        return result

    @classmethod
    def from_dict(cls, data: Any) -> Launch:
        """
        Build a Launch from its wire representation.

        Raises:
            DeserializationError: On a non-object body, an unknown mode,
                or a malformed timestamp.
        """
        data = require_mapping(data, cls.__name__)
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            description=data.get("description") or "",
            number=parse_int(data.get("number", 0), "number"),
            mode=parse_enum(LaunchMode, data.get("mode", LaunchMode.DEFAULT.value)),
            start_time=parse_optional_datetime(data.get("start_time")),
            end_time=parse_optional_datetime(data.get("end_time")),
            tags=list(data.get("tags") or []),
            statistics=Statistic.from_dict(data.get("statistics") or {}),
        )


@dataclass
class Page:
    """Paging metadata of a list response."""

    number: int = 0
    size: int = 0
    total_elements: int = 0
    total_pages: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "size": self.size,
            "totalElements": self.total_elements,
            "totalPages": self.total_pages,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Page:
        data = require_mapping(data, cls.__name__)
        return cls(
            number=parse_int(data.get("number", 0), "number"),
            size=parse_int(data.get("size", 0), "size"),
            total_elements=parse_int(data.get("totalElements", 0), "totalElements"),
            total_pages=parse_int(data.get("totalPages", 0), "totalPages"),
        )


@dataclass
class LaunchesContainer:
    """One page of launches (wire: ``{"content": [...], "page": {...}}``)."""

    launches: List[Launch] = field(default_factory=list)
    page: Page = field(default_factory=Page)

    def __len__(self) -> int:
        return len(self.launches)

    def __iter__(self):
        return iter(self.launches)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": [launch.to_dict() for launch in self.launches],
            "page": self.page.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> LaunchesContainer:
        data = require_mapping(data, cls.__name__)
        content = data.get("content") or []
        if not isinstance(content, list):
            raise DeserializationError(
                f"Field 'content' must be a list, got {type(content).__name__}"
            )
        return cls(
            launches=[Launch.from_dict(item) for item in content],
            page=Page.from_dict(data.get("page") or {}),
        )
