"""Article endpoints — admin management, public listing, lookup by slug and related reads."""

from pawtal.application.schemas import ArticleCreate, ArticleResponse, ArticleUpdate
from pawtal.domain.entities import ARTICLE
from pawtal.infrastructure.dependencies import get_article_service
from pawtal.presentation.api.v1.endpoints.content import build_admin_router, build_public_router

admin_router = build_admin_router(
    ARTICLE, get_article_service, ArticleCreate, ArticleUpdate, ArticleResponse
)
public_router = build_public_router(
    ARTICLE, get_article_service, ArticleResponse, with_listing=True, with_related=True
)
