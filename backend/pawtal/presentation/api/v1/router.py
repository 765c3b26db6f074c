"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from pawtal.presentation.api.v1.endpoints.health import router as health_router
from pawtal.presentation.api.v1.endpoints.pages import admin_router as admin_pages_router
from pawtal.presentation.api.v1.endpoints.pages import public_router as public_pages_router
from pawtal.presentation.api.v1.endpoints.articles import admin_router as admin_articles_router
from pawtal.presentation.api.v1.endpoints.articles import public_router as public_articles_router
from pawtal.presentation.api.v1.endpoints.trash import router as trash_router
from pawtal.presentation.api.v1.endpoints.categories import router as categories_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(admin_pages_router)
router.include_router(admin_articles_router)
router.include_router(trash_router)
router.include_router(categories_router)
router.include_router(public_pages_router)
router.include_router(public_articles_router)
