"""Pydantic schemas for Product CRUD."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer, field_validator

# Two decimal places, never negative; rendered as a JSON number
Price = Annotated[
    Decimal,
    Field(ge=0, max_digits=12, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


def _clean_name(v: str) -> str:
    v = v.strip()
    if not 2 <= len(v) <= 120:
        raise ValueError("Name must be between 2 and 120 characters")
    return v


class ProductCreate(BaseModel):
    name: str
    description: str | None = None
    price: Price
    stock: int = Field(ge=0)

    model_config = {"extra": "forbid"}

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _clean_name(v)


class ProductUpdate(BaseModel):
    """Partial update: only the fields the client sends are applied."""

    name: str | None = None
    description: str | None = None
    price: Price | None = None
    stock: int | None = Field(default=None, ge=0)

    model_config = {"extra": "forbid"}

    @field_validator("name", "price", "stock")
    @classmethod
    def _not_null(cls, v: object) -> object:
        # Omitting a field is fine; sending null for a required column is not
        if v is None:
            raise ValueError("Field may be omitted but not null")
        return v

    @field_validator("name")
    @classmethod
    def _name(cls, v: str | None) -> str | None:
        return v if v is None else _clean_name(v)


class ProductRead(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None
    price: Price
    stock: int
    owner_id: uuid.UUID
    created_at: datetime | None
    updated_at: datetime | None

    model_config = {"from_attributes": True}
