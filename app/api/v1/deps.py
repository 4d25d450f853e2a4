"""
FastAPI dependencies — auth guards and database session.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable, Coroutine
from typing import Any, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import Forbidden, InvalidToken
from app.core.policy import Role, has_role
from app.core.security import decode_access_token
from app.db.session import async_session_factory
from app.schemas.token import Principal

# auto_error=False so a missing header goes through our InvalidToken path
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_PREFIX}/auth/login", auto_error=False
)


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Auth dependencies ───────────────────────────────────────────────
async def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> Principal:
    """Identity from the bearer token alone, without a database round-trip."""
    if not token:
        raise InvalidToken()
    payload = decode_access_token(token)
    return Principal(id=payload.sub, role=payload.role)


def require_roles(*roles: Role) -> Callable[..., Coroutine[Any, Any, Principal]]:
    """Build a dependency that only lets the given roles through."""

    async def _guard(current_user: Principal = Depends(get_current_user)) -> Principal:
        if not has_role(current_user.role, roles):
            raise Forbidden("Insufficient role for this operation")
        return current_user

    return _guard


require_admin = require_roles(Role.ADMIN)
