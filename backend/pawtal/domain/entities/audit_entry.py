"""Audit entry — one recorded action against an entity."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pawtal.domain.clock import utc_now


@dataclass(frozen=True)
class AuditEntry:
    actor_id: str
    verb: str
    entity_type: str
    entity_id: str
    details: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=utc_now)
