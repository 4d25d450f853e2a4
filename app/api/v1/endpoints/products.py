"""
Product CRUD endpoints.

- Every route requires a bearer token.
- GET / POST are open to any authenticated user.
- PATCH / DELETE are limited to the product's owner or an admin.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_current_user, get_db
from app.models.product import Product
from app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from app.schemas.token import Principal
from app.services import products as products_service

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
) -> Product:
    return await products_service.create(db, body, current_user)


@router.get("", response_model=list[ProductRead])
async def list_products(
    db: AsyncSession = Depends(get_db),
    _user: Principal = Depends(get_current_user),
) -> list[Product]:
    return await products_service.find_all(db)


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: Principal = Depends(get_current_user),
) -> Product:
    return await products_service.find_one(db, product_id)


@router.patch("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: uuid.UUID,
    body: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
) -> Product:
    return await products_service.update(db, product_id, body, current_user)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
) -> Response:
    await products_service.remove(db, product_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
