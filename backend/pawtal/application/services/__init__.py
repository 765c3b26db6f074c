from .audit_logger import AuditLogger
from .category_service import CategoryService
from .content_lifecycle_service import ContentLifecycleService, ContentListing
from .content_scheduler import ContentScheduler, MaintenanceRepositories, TickReport
from .retention_policy import TrashRetentionPolicy
from .revision_store import RevisionStore
from .slug_resolver import SlugResolver, slugify
from .trash_service import TrashService

__all__ = [
    "AuditLogger",
    "CategoryService",
    "ContentLifecycleService",
    "ContentListing",
    "ContentScheduler",
    "MaintenanceRepositories",
    "TickReport",
    "TrashRetentionPolicy",
    "RevisionStore",
    "SlugResolver",
    "slugify",
    "TrashService",
]
