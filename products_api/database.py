"""
Database engine, session factory and schema creation.

The process-wide engine is built from ``DATABASE_URL``; tests and scripts can
build their own with ``build_engine`` and bind a factory to it with
``make_session_factory``.
"""
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from products_api.config import get_settings

settings = get_settings()

# Base class for models
Base = declarative_base()

ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "sqlite:///": "sqlite+aiosqlite:///",
}


def to_async_url(url: str) -> str:
    """Rewrite a plain database URL to use its async driver"""
    for prefix, async_prefix in ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return async_prefix + url[len(prefix):]
    return url


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    async_url = to_async_url(url)
    kwargs = {"echo": echo}
    # SQLite doesn't support pool_size
    if not async_url.startswith("sqlite"):
        kwargs.update(pool_size=20, max_overflow=10)
    return create_async_engine(async_url, **kwargs)


def make_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


async def init_db(bind: AsyncEngine = None) -> None:
    """Create all tables registered on Base"""
    # Register models on Base.metadata before create_all
    import products_api.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
AsyncSessionLocal = make_session_factory(engine)
