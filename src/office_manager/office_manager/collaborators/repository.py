from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Collaborator


class CollaboratorRepository(Protocol):
    def get_by_id(self, collaborator_id: str) -> Optional[Collaborator]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Collaborator]:
        raise NotImplementedError
