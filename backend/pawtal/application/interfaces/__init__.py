from .content_repository import ContentRepository
from .revision_repository import RevisionRepository
from .audit_log_repository import AuditLogRepository
from .session_repository import SessionRepository
from .category_repository import CategoryRepository

__all__ = [
    "ContentRepository",
    "RevisionRepository",
    "AuditLogRepository",
    "SessionRepository",
    "CategoryRepository",
]
