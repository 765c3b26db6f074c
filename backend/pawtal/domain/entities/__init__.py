from .content import (
    ARTICLE,
    CONTENT_TYPES,
    PAGE,
    Article,
    ContentItem,
    ContentStatus,
    ContentType,
    Page,
    estimate_reading_time,
)
from .revision import Revision
from .audit_entry import AuditEntry
from .category import Category

__all__ = [
    "ARTICLE",
    "CONTENT_TYPES",
    "PAGE",
    "Article",
    "ContentItem",
    "ContentStatus",
    "ContentType",
    "Page",
    "estimate_reading_time",
    "Revision",
    "AuditEntry",
    "Category",
]
