"""Session store sweep backed by SQLAlchemy."""

from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from pawtal.application.interfaces import SessionRepository
from pawtal.infrastructure.database.models import SessionModel
from pawtal.infrastructure.database.repositories._errors import storage_errors


class SQLAlchemySessionRepository(SessionRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def delete_expired(self, now: datetime) -> int:
        stmt = (
            delete(SessionModel)
            .where(SessionModel.expires_at < now)
            .execution_options(synchronize_session=False)
        )
        with storage_errors("session sweep"):
            result = await self._session.execute(stmt)
            return result.rowcount or 0
