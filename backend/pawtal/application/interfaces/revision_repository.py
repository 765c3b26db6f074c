"""Abstract repository interface (port) for revision history."""

from abc import ABC, abstractmethod

from pawtal.domain.entities import Revision


class RevisionRepository(ABC):
    """Append-only store of revisions for one content type."""

    @abstractmethod
    async def append(self, revision: Revision) -> Revision:
        """Persist a revision, assigning the item's next revision number."""
        ...

    @abstractmethod
    async def list_for_item(self, item_id: str) -> list[Revision]:
        """All revisions of an item, newest first."""
        ...

    @abstractmethod
    async def get(self, item_id: str, revision_id: str) -> Revision | None:
        """A revision only if it belongs to ``item_id``."""
        ...

    @abstractmethod
    async def count_for_item(self, item_id: str) -> int:
        ...
