"""Shared response models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from reportportal_client.models.converters import require_mapping


@dataclass
class Message:
    """Acknowledgement returned by mutating operations (wire: ``{"msg": "..."}``)."""

    info: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"msg": self.info}

    @classmethod
    def from_dict(cls, data: Any) -> Message:
        data = require_mapping(data, cls.__name__)
        return cls(info=data.get("msg") or "")
