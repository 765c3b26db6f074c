"""Map domain exceptions to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pawtal.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidSlugError,
    InvalidStateError,
    StorageError,
)

logger = logging.getLogger(__name__)

_INTERNAL_ERROR = {"detail": "Internal server error"}


def register_exception_handlers(app: FastAPI) -> None:
    """Install one handler per domain exception on ``app``."""

    @app.exception_handler(EntityNotFoundError)
    async def handle_not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
        return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(DuplicateEntityError)
    async def handle_duplicate(request: Request, exc: DuplicateEntityError) -> JSONResponse:
        return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_409_CONFLICT)

    @app.exception_handler(InvalidStateError)
    async def handle_invalid_state(request: Request, exc: InvalidStateError) -> JSONResponse:
        return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_409_CONFLICT)

    @app.exception_handler(InvalidSlugError)
    async def handle_invalid_slug(request: Request, exc: InvalidSlugError) -> JSONResponse:
        return JSONResponse({"detail": str(exc)}, status_code=422)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return JSONResponse(_INTERNAL_ERROR, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.exception_handler(SQLAlchemyError)
    async def handle_sqlalchemy_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(
            "%s %s failed in the database layer",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(_INTERNAL_ERROR, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
