from .content_repository import SQLAlchemyArticleRepository, SQLAlchemyPageRepository
from .revision_repository import (
    SQLAlchemyArticleRevisionRepository,
    SQLAlchemyPageRevisionRepository,
)
from .audit_log_repository import SQLAlchemyAuditLogRepository
from .session_repository import SQLAlchemySessionRepository
from .category_repository import SQLAlchemyCategoryRepository

__all__ = [
    "SQLAlchemyArticleRepository",
    "SQLAlchemyPageRepository",
    "SQLAlchemyArticleRevisionRepository",
    "SQLAlchemyPageRevisionRepository",
    "SQLAlchemyAuditLogRepository",
    "SQLAlchemySessionRepository",
    "SQLAlchemyCategoryRepository",
]
