from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Project


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: str) -> Optional[Project]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Project]:
        """Newest first."""

        raise NotImplementedError
