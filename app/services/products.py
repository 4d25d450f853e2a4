"""
Product CRUD with ownership enforcement.

Reads and creation are open to any authenticated user. Updates and
deletes first resolve the product (404), then consult ``can_mutate``
(403), and only then touch the row.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import Forbidden, NotFound
from app.core.policy import can_mutate
from app.models.product import Product
from app.schemas.product import ProductCreate, ProductUpdate
from app.schemas.token import Principal

logger = logging.getLogger(__name__)


def _not_found(product_id: uuid.UUID) -> NotFound:
    return NotFound(f'Product with ID "{product_id}" not found')


async def create(db: AsyncSession, attrs: ProductCreate, requester: Principal) -> Product:
    """Create a product owned by ``requester``."""
    product = Product(**attrs.model_dump(), owner_id=requester.id)
    db.add(product)
    await db.commit()
    await db.refresh(product)
    logger.info("Created product %s for owner %s", product.id, requester.id)
    return product


async def find_all(db: AsyncSession) -> list[Product]:
    result = await db.execute(select(Product).order_by(Product.created_at))
    return list(result.scalars().all())


async def find_one(db: AsyncSession, product_id: uuid.UUID) -> Product:
    product = await db.get(Product, product_id)
    if product is None:
        raise _not_found(product_id)
    return product


async def update(
    db: AsyncSession,
    product_id: uuid.UUID,
    patch: ProductUpdate,
    requester: Principal,
) -> Product:
    product = await find_one(db, product_id)

    if not can_mutate(requester.id, requester.role, product.owner_id):
        logger.warning("User %s denied update of product %s", requester.id, product_id)
        raise Forbidden("You are not allowed to update this product")

    for field, value in patch.model_dump(exclude_unset=True).items():
        setattr(product, field, value)

    try:
        await db.commit()
    except StaleDataError:
        # Row deleted between the lookup and the UPDATE
        await db.rollback()
        raise _not_found(product_id) from None
    await db.refresh(product)
    logger.info("Updated product %s", product_id)
    return product


async def remove(db: AsyncSession, product_id: uuid.UUID, requester: Principal) -> None:
    product = await find_one(db, product_id)

    if not can_mutate(requester.id, requester.role, product.owner_id):
        logger.warning("User %s denied delete of product %s", requester.id, product_id)
        raise Forbidden("You are not allowed to delete this product")

    result = await db.execute(delete(Product).where(Product.id == product_id))
    await db.commit()
    # Someone else may have deleted it between the lookup and the DELETE
    if result.rowcount == 0:
        raise _not_found(product_id)
    logger.info("Deleted product %s", product_id)
