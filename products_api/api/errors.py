"""
Translate store errors into client-facing HTTP responses
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound

from products_api.utils.logger import get_logger

logger = get_logger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NoResultFound)
    async def handle_not_found(request: Request, exc: NoResultFound):
        logger.info(f"{request.method} {request.url.path}: no matching product")
        return JSONResponse(status_code=404, content={"detail": "Product not found"})

    @app.exception_handler(IntegrityError)
    async def handle_integrity_error(request: Request, exc: IntegrityError):
        logger.warning(f"{request.method} {request.url.path}: constraint violation: {exc.orig}")
        return JSONResponse(status_code=409, content={"detail": "Constraint violation"})
