"""Page endpoints — admin management and public lookup by slug."""

from pawtal.application.schemas import PageCreate, PageResponse, PageUpdate
from pawtal.domain.entities import PAGE
from pawtal.infrastructure.dependencies import get_page_service
from pawtal.presentation.api.v1.endpoints.content import build_admin_router, build_public_router

admin_router = build_admin_router(PAGE, get_page_service, PageCreate, PageUpdate, PageResponse)
public_router = build_public_router(PAGE, get_page_service, PageResponse)
