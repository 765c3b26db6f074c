"""Abstract repository interface (port) for the audit sink."""

from abc import ABC, abstractmethod

from pawtal.domain.entities import AuditEntry


class AuditLogRepository(ABC):

    @abstractmethod
    async def record(self, entry: AuditEntry) -> None:
        """Append one entry. Must not invalidate the caller's transaction on failure."""
        ...
