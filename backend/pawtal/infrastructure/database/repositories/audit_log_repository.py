"""Audit trail repository backed by SQLAlchemy."""

from sqlalchemy.ext.asyncio import AsyncSession

from pawtal.application.interfaces import AuditLogRepository
from pawtal.domain.entities import AuditEntry
from pawtal.infrastructure.database.models import AuditLogModel
from pawtal.infrastructure.database.repositories._errors import storage_errors


class SQLAlchemyAuditLogRepository(AuditLogRepository):
    """Writes audit rows inside a SAVEPOINT.

    A failed insert rolls back only the savepoint, so the surrounding
    request transaction stays usable and the audited change still commits.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def record(self, entry: AuditEntry) -> None:
        with storage_errors("audit write"):
            async with self._session.begin_nested():
                self._session.add(
                    AuditLogModel(
                        id=entry.id,
                        actor_id=entry.actor_id,
                        verb=entry.verb,
                        entity_type=entry.entity_type,
                        entity_id=entry.entity_id,
                        details=dict(entry.details),
                        created_at=entry.created_at,
                    )
                )
