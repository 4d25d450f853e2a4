"""
Registration and login.

Login never tells the caller *why* it failed: an unknown email and a wrong
password raise the same ``InvalidCredentials`` and both pay for a bcrypt
verification.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidCredentials
from app.core.policy import Role
from app.core.security import (create_access_token, get_password_hash,
                               verify_password, verify_password_dummy)
from app.schemas.token import Token
from app.schemas.user import UserRead
from app.services import users

logger = logging.getLogger(__name__)


async def register(db: AsyncSession, name: str, email: str, password: str) -> UserRead:
    user = await users.create_user(
        db,
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
        role=Role.USER,
    )
    return UserRead.model_validate(user)


async def login(db: AsyncSession, email: str, password: str) -> Token:
    user = await users.get_by_email(db, email)

    if user is None:
        verify_password_dummy(password)
        logger.info("Failed login attempt (unknown email)")
        raise InvalidCredentials()
    if not verify_password(password, user.hashed_password):
        logger.info("Failed login attempt for user %s", user.id)
        raise InvalidCredentials()

    logger.info("User %s logged in", user.id)
    return Token(access_token=create_access_token(user.id, user.role))
