from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import (
    ArticleModel,
    ArticleRevisionModel,
    AuditLogModel,
    CategoryModel,
    PageModel,
    PageRevisionModel,
    SessionModel,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "ArticleModel",
    "ArticleRevisionModel",
    "AuditLogModel",
    "CategoryModel",
    "PageModel",
    "PageRevisionModel",
    "SessionModel",
]
