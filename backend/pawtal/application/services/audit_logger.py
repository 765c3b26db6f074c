"""Best-effort audit trail writer.

An audit failure never blocks or rolls back the operation that triggered it;
every failure is logged and swallowed here.
"""

import logging
from typing import Any

from pawtal.application.interfaces import AuditLogRepository
from pawtal.domain.entities import AuditEntry

logger = logging.getLogger(__name__)


class AuditLogger:
    """Single entry point for recording admin actions.

    Usage:
        audit = AuditLogger(audit_repository)
        await audit.record(
            actor_id=user_id,
            verb="publish",
            entity_type="page",
            entity_id=page.id,
        )
    """

    def __init__(self, repository: AuditLogRepository):
        self._repo = repository

    async def record(
        self,
        *,
        actor_id: str,
        verb: str,
        entity_type: str,
        entity_id: str,
        details: dict[str, Any] | None = None,
    ) -> bool:
        """Append one audit entry. Returns False when the write failed."""
        entry = AuditEntry(
            actor_id=actor_id,
            verb=verb,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details or {},
        )
        try:
            await self._repo.record(entry)
        except Exception:
            logger.exception(
                "Audit write failed (actor=%s verb=%s %s/%s)",
                actor_id,
                verb,
                entity_type,
                entity_id,
            )
            return False
        logger.debug("Audit: %s %s %s/%s", actor_id, verb, entity_type, entity_id)
        return True
