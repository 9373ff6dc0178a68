"""Shared state handed to every resource service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar
from urllib.parse import quote

ClientT = TypeVar("ClientT")


@dataclass(frozen=True)
class ServiceContext(Generic[ClientT]):
    """
    HTTP client handle plus the project every request is scoped to.

    Attributes:
        client: Shared RestClient or AsyncRestClient.
        project: Project name, used as the first path segment.
    """

    client: ClientT
    project: str

    def path(self, *segments: str, trailing_slash: bool = False) -> str:
        """
        Build a project-relative path.

        Example:
            ctx.path("launch", "42", "finish") -> "my_project/launch/42/finish"
        """
        parts = [quote(self.project, safe="")]
        parts.extend(quote(str(s), safe="") for s in segments)
        path = "/".join(parts)
        return f"{path}/" if trailing_slash else path
