"""Abstract repository interface (port) for categories."""

from abc import ABC, abstractmethod

from pawtal.domain.entities import Category


class CategoryRepository(ABC):

    @abstractmethod
    async def get_by_id(self, category_id: str) -> Category | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Category]:
        """All categories ordered by name."""
        ...

    @abstractmethod
    async def find_id_by_slug(self, slug: str) -> str | None:
        ...

    @abstractmethod
    async def missing_ids(self, category_ids: list[str]) -> list[str]:
        """Return the subset of ``category_ids`` that do not exist."""
        ...

    @abstractmethod
    async def create(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def update(self, category: Category) -> Category:
        """Persist name and slug of an existing category."""
        ...

    @abstractmethod
    async def delete(self, category_id: str) -> bool:
        """Delete a category and its assignments. False if not found."""
        ...
