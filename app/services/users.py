"""
User persistence helpers.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateEmail
from app.core.policy import Role
from app.models.user import User
from app.schemas.user import UserRead

logger = logging.getLogger(__name__)


async def get_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    hashed_password: str,
    role: Role = Role.USER,
) -> User:
    """Persist a new user. Emails are unique regardless of case."""
    email = email.strip().lower()
    if await get_by_email(db, email) is not None:
        raise DuplicateEmail()

    user = User(
        name=name,
        email=email,
        hashed_password=hashed_password,
        role=Role(role).value,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        await db.rollback()
        raise DuplicateEmail() from None
    await db.refresh(user)
    logger.info("Created %s account %s", user.role, user.id)
    return user


async def list_users(db: AsyncSession) -> list[UserRead]:
    result = await db.execute(select(User).order_by(User.created_at))
    return [UserRead.model_validate(u) for u in result.scalars().all()]
