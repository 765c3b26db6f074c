"""Abstract repository interface (port) for the authentication session store."""

from abc import ABC, abstractmethod
from datetime import datetime


class SessionRepository(ABC):
    """Only the expiry sweep is needed here; login/validation live elsewhere."""

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions with expires_at < now. Returns number of rows removed."""
        ...
