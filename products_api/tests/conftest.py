"""
Test fixtures - in-memory SQLite database + HTTP client bound to a fresh app
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from products_api.database import Base
from products_api.main import create_app
from products_api.models.product import Product
from products_api.services.product_gateway import ProductGateway


@pytest_asyncio.fixture()
async def engine():
    """Fresh in-memory SQLite database for each test, one shared connection"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def gateway(session_factory):
    return ProductGateway(session_factory)


@pytest_asyncio.fixture()
async def seed_data(db_session):
    """One live product and one already soft-deleted product"""
    from datetime import datetime

    widget = Product(name="Widget", price=10.0)
    gadget = Product(name="Gadget", price=25.5, deleted_at=datetime.utcnow())

    db_session.add_all([widget, gadget])
    await db_session.commit()
    await db_session.refresh(widget)
    await db_session.refresh(gadget)

    return {"widget": widget, "gadget": gadget}


@pytest_asyncio.fixture()
async def app(engine):
    return create_app(engine=engine)


@pytest_asyncio.fixture()
async def client(app):
    """httpx AsyncClient bound to the FastAPI app"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac
