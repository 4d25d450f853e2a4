"""
Product model. Every product has exactly one owner.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (Index("ix_products_name_price", "name", "price"),)

    id: uuid.UUID = Column(Uuid, primary_key=True, default=uuid.uuid4)  # type: ignore[assignment]
    name: str = Column(String(120), nullable=False)  # type: ignore[assignment]
    description: str | None = Column(Text, nullable=True)  # type: ignore[assignment]
    price: Decimal = Column(Numeric(12, 2), nullable=False, default=0)  # type: ignore[assignment]
    stock: int = Column(Integer, nullable=False, default=0)  # type: ignore[assignment]
    owner_id: uuid.UUID = Column(  # type: ignore[assignment]
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow)  # type: ignore[assignment]
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    owner = relationship("User", back_populates="products")
