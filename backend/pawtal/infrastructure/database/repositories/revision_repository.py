"""Append-only revision repositories backed by SQLAlchemy."""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pawtal.application.interfaces import RevisionRepository
from pawtal.domain.clock import ensure_utc
from pawtal.domain.entities import Revision
from pawtal.infrastructure.database.models import ArticleRevisionModel, PageRevisionModel
from pawtal.infrastructure.database.repositories._errors import (
    storage_errors,
    unique_constraint,
    violates,
)

logger = logging.getLogger(__name__)

# Concurrent writers to one item can read the same max(number).
APPEND_ATTEMPTS = 5


class _SQLAlchemyRevisionRepository(RevisionRepository):
    """Revisions for one content table. Rows are inserted, never updated."""

    model: Any
    number_constraint: str
    has_short_text: bool = False

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: Any) -> Revision:
        return Revision(
            id=model.id,
            item_id=model.item_id,
            number=model.number,
            title=model.title,
            content=model.content,
            short_text=model.short_text if self.has_short_text else None,
            author_id=model.author_id,
            created_at=ensure_utc(model.created_at),
        )

    def _to_model(self, revision: Revision, number: int) -> Any:
        model = self.model(
            id=revision.id,
            item_id=revision.item_id,
            number=number,
            title=revision.title,
            content=revision.content,
            author_id=revision.author_id,
            created_at=revision.created_at,
        )
        if self.has_short_text:
            model.short_text = revision.short_text or ""
        return model

    async def _next_number(self, item_id: str) -> int:
        stmt = select(func.max(self.model.number)).where(self.model.item_id == item_id)
        result = await self._session.execute(stmt)
        return (result.scalar_one_or_none() or 0) + 1

    async def append(self, revision: Revision) -> Revision:
        """Insert with the next free number.

        Each attempt runs in its own SAVEPOINT; when another writer took the
        number first, only that attempt is rolled back and the number is
        read again.
        """
        numbering = unique_constraint(self.model, self.number_constraint)
        with storage_errors("revision append"):
            for attempt in range(1, APPEND_ATTEMPTS + 1):
                number = await self._next_number(revision.item_id)
                model = self._to_model(revision, number)
                try:
                    async with self._session.begin_nested():
                        self._session.add(model)
                except IntegrityError as exc:
                    if attempt == APPEND_ATTEMPTS or not violates(exc, numbering):
                        raise
                    logger.info(
                        "Revision number %d of %s taken concurrently, retrying (attempt %d)",
                        number, revision.item_id, attempt,
                    )
                    continue
                return self._to_entity(model)

    async def list_for_item(self, item_id: str) -> list[Revision]:
        stmt = (
            select(self.model)
            .where(self.model.item_id == item_id)
            .order_by(self.model.number.desc())
        )
        with storage_errors("revision listing"):
            result = await self._session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    async def get(self, item_id: str, revision_id: str) -> Revision | None:
        with storage_errors("revision lookup"):
            model = await self._session.get(self.model, revision_id)
        if model is None or model.item_id != item_id:
            return None
        return self._to_entity(model)

    async def count_for_item(self, item_id: str) -> int:
        stmt = select(func.count()).select_from(self.model).where(self.model.item_id == item_id)
        with storage_errors("revision count"):
            result = await self._session.execute(stmt)
            return result.scalar_one()


class SQLAlchemyPageRevisionRepository(_SQLAlchemyRevisionRepository):
    model = PageRevisionModel
    number_constraint = "uq_page_revisions_number"


class SQLAlchemyArticleRevisionRepository(_SQLAlchemyRevisionRepository):
    model = ArticleRevisionModel
    number_constraint = "uq_article_revisions_number"
    has_short_text = True
