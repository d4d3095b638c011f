"""
Main FastAPI application
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from products_api.config import get_settings
from products_api.database import engine as default_engine, init_db, make_session_factory
from products_api.services.product_gateway import ProductGateway
from products_api.api.products import ProductHandler, build_router
from products_api.api.errors import register_exception_handlers
from products_api.utils.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)


def create_app(engine: Optional[AsyncEngine] = None) -> FastAPI:
    """Wire engine -> gateway -> handler -> routes and return the app"""
    engine = engine or default_engine

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_db(engine)
        logger.info("Database tables created")
        yield
        await engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    gateway = ProductGateway(make_session_factory(engine))
    handler = ProductHandler(gateway)
    app.state.product_gateway = gateway

    app.include_router(build_router(handler), prefix="/products", tags=["Products"])
    register_exception_handlers(app)

    @app.get("/")
    async def root():
        return {
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running"
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "products_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
