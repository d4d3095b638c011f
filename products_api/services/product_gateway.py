"""
Data access gateway for products.

Every read and update only sees live rows (``deleted_at IS NULL``). Removal
stamps ``deleted_at`` instead of deleting the row, so there is no hard-delete
path. Store errors (``NoResultFound``, ``IntegrityError``) are raised as-is;
translating them to HTTP responses is the API layer's job.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker

from products_api.models.product import Product
from products_api.utils.logger import get_logger

logger = get_logger(__name__)


class ProductGateway:
    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _select(include_deleted: bool = False):
        """Base product query, live rows only unless include_deleted"""
        query = select(Product)
        if not include_deleted:
            query = query.where(Product.deleted_at.is_(None))
        return query

    async def create(self, data: Dict[str, Any]) -> Product:
        async with self.session_factory() as session:
            product = Product(**data)
            product.deleted_at = None
            session.add(product)
            await session.commit()
            await session.refresh(product)
            logger.info(f"Created product id={product.id}")
            return product

    async def find_all(self) -> List[Product]:
        async with self.session_factory() as session:
            result = await session.execute(self._select().order_by(Product.id))
            return list(result.scalars().all())

    async def find_one(self, product_id: int) -> Optional[Product]:
        async with self.session_factory() as session:
            result = await session.execute(
                self._select().where(Product.id == product_id)
            )
            return result.scalar_one_or_none()

    async def update(self, product_id: int, data: Dict[str, Any]) -> Product:
        """Apply the given fields to a live product.

        Raises ``NoResultFound`` if there is no live product with that id.
        """
        async with self.session_factory() as session:
            result = await session.execute(
                self._select().where(Product.id == product_id)
            )
            product = result.scalar_one()

            for key, value in data.items():
                setattr(product, key, value)

            await session.commit()
            await session.refresh(product)
            logger.info(f"Updated product id={product_id} fields={sorted(data)}")
            return product

    async def remove(self, product_id: int) -> Product:
        """Soft-delete a product, live or already removed.

        Removing an already removed product re-stamps ``deleted_at``.
        Raises ``NoResultFound`` only if no row with that id exists at all.
        """
        async with self.session_factory() as session:
            result = await session.execute(
                self._select(include_deleted=True).where(Product.id == product_id)
            )
            product = result.scalar_one()

            product.deleted_at = datetime.utcnow()

            await session.commit()
            await session.refresh(product)
            logger.info(f"Soft-deleted product id={product_id}")
            return product
