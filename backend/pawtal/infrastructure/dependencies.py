"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from pawtal.config import get_settings
from pawtal.application.services import (
    AuditLogger,
    CategoryService,
    ContentLifecycleService,
    MaintenanceRepositories,
    RevisionStore,
    SlugResolver,
    TrashRetentionPolicy,
    TrashService,
)
from pawtal.domain.entities import ARTICLE, PAGE, ContentType
from pawtal.infrastructure.database.session import get_db_session
from pawtal.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyArticleRevisionRepository,
    SQLAlchemyAuditLogRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemyPageRepository,
    SQLAlchemyPageRevisionRepository,
    SQLAlchemySessionRepository,
)

_CONTENT_REPOSITORIES = {
    PAGE.name: (SQLAlchemyPageRepository, SQLAlchemyPageRevisionRepository),
    ARTICLE.name: (SQLAlchemyArticleRepository, SQLAlchemyArticleRevisionRepository),
}


async def get_actor_id(
    x_actor_id: str | None = Header(None, alias="X-Actor-Id"),
) -> str:
    """Identity of the authenticated admin user.

    Session validation happens upstream; by the time a request reaches
    the admin API the caller's user id is carried in ``X-Actor-Id``.
    """
    if not x_actor_id or not x_actor_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Actor-Id header",
        )
    return x_actor_id.strip()


def build_retention_policy() -> TrashRetentionPolicy:
    return TrashRetentionPolicy(retention_days=get_settings().trash_retention_days)


def build_lifecycle_service(
    content_type: ContentType, session: AsyncSession
) -> ContentLifecycleService:
    """Assemble the lifecycle engine for one content type on one session."""
    repository_cls, revision_repository_cls = _CONTENT_REPOSITORIES[content_type.name]
    repository = repository_cls(session)
    return ContentLifecycleService(
        content_type=content_type,
        repository=repository,
        revisions=RevisionStore(revision_repository_cls(session), content_type),
        slugs=SlugResolver(repository, content_type.label),
        audit=AuditLogger(SQLAlchemyAuditLogRepository(session)),
        categories=SQLAlchemyCategoryRepository(session),
    )


def build_maintenance_repositories(session: AsyncSession) -> MaintenanceRepositories:
    """Repository bundle the ContentScheduler binds to each step's session."""
    return MaintenanceRepositories(
        content={
            name: repository_cls(session)
            for name, (repository_cls, _) in _CONTENT_REPOSITORIES.items()
        },
        sessions=SQLAlchemySessionRepository(session),
    )


async def get_page_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ContentLifecycleService, None]:
    """Provides the lifecycle engine bound to pages."""
    yield build_lifecycle_service(PAGE, session)


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ContentLifecycleService, None]:
    """Provides the lifecycle engine bound to articles."""
    yield build_lifecycle_service(ARTICLE, session)


async def get_trash_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[TrashService, None]:
    """Provides a TrashService over every content type."""
    repositories = build_maintenance_repositories(session).content
    yield TrashService(repositories, build_retention_policy())


async def get_category_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CategoryService, None]:
    """Provides a CategoryService instance with its repository wired up."""
    yield CategoryService(SQLAlchemyCategoryRepository(session))
