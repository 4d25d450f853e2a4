"""
User model — credentials & role-based access control.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Uuid
from sqlalchemy.orm import relationship

from app.core.policy import Role
from app.db.base import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id: uuid.UUID = Column(Uuid, primary_key=True, default=uuid.uuid4)  # type: ignore[assignment]
    name: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    email: str = Column(String(320), unique=True, nullable=False, index=True)  # type: ignore[assignment]  # always lower-case
    hashed_password: str = Column(String(128), nullable=False)  # type: ignore[assignment]
    role: str = Column(  # type: ignore[assignment]
        String(20),
        nullable=False,
        default=Role.USER.value,
        server_default=Role.USER.value,
    )  # user | admin
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow)  # type: ignore[assignment]
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    products = relationship(
        "Product",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
