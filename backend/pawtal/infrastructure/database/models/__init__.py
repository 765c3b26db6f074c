from .content import (
    ArticleCategoryModel,
    ArticleModel,
    ArticleRevisionModel,
    PageCategoryModel,
    PageModel,
    PageRevisionModel,
)
from .category import CategoryModel
from .audit_log import AuditLogModel
from .session import SessionModel

__all__ = [
    "ArticleCategoryModel",
    "ArticleModel",
    "ArticleRevisionModel",
    "PageCategoryModel",
    "PageModel",
    "PageRevisionModel",
    "CategoryModel",
    "AuditLogModel",
    "SessionModel",
]
