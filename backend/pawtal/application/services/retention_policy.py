"""Trash retention — how long trashed content survives before erasure."""

import logging
from datetime import datetime, timedelta

from pawtal.application.interfaces import ContentRepository
from pawtal.domain.clock import Clock, utc_now
from pawtal.domain.entities import ContentItem

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 30


class TrashRetentionPolicy:
    """Eligibility rule shared by "empty trash" and the scheduler sweep.

    An item is erasable once ``status == trashed`` and
    ``trashed_at < now - retention window``. Both erasure paths go through
    ``sweep`` so they stay interchangeable and idempotent.
    """

    def __init__(self, retention_days: int = DEFAULT_RETENTION_DAYS, clock: Clock = utc_now):
        if retention_days < 0:
            raise ValueError("retention_days must not be negative")
        self._window = timedelta(days=retention_days)
        self._clock = clock

    @property
    def window(self) -> timedelta:
        return self._window

    def cutoff(self, now: datetime | None = None) -> datetime:
        return (now or self._clock()) - self._window

    def is_eligible(self, item: ContentItem, now: datetime | None = None) -> bool:
        return item.is_purgeable(self.cutoff(now))

    async def sweep(self, repository: ContentRepository, now: datetime | None = None) -> int:
        """Erase every eligible item held by ``repository``."""
        cutoff = self.cutoff(now)
        deleted = await repository.purge_trashed(cutoff)
        if deleted:
            logger.info(
                "Erased %d trashed %s(s) older than %s",
                deleted,
                repository.content_type.name,
                cutoff.isoformat(),
            )
        return deleted
