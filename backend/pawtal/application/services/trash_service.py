"""Trash Service — cross-type trash listing and on-demand emptying."""

from collections.abc import Mapping

from pawtal.application.interfaces import ContentRepository
from pawtal.application.services.retention_policy import TrashRetentionPolicy
from pawtal.domain.entities import ContentItem


class TrashService:
    """Works over every content type at once, keyed by content-type name."""

    def __init__(
        self,
        repositories: Mapping[str, ContentRepository],
        policy: TrashRetentionPolicy,
    ):
        self._repositories = repositories
        self._policy = policy

    async def list_trash(self) -> dict[str, list[ContentItem]]:
        """Trashed items per content type, most recently trashed first."""
        return {name: await repo.list_trashed() for name, repo in self._repositories.items()}

    async def empty_trash(self) -> dict[str, int]:
        """Erase items past the retention window. Recently trashed items stay."""
        return {name: await self._policy.sweep(repo) for name, repo in self._repositories.items()}
