"""
Auth endpoints — registration, login & current identity.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_current_user, get_db
from app.core.config import settings
from app.schemas.token import Principal, Token
from app.schemas.user import LoginRequest, UserRead, UserRegister
from app.services import auth as auth_service

# Rate limiter — keyed by client IP
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.REGISTER_RATE_LIMIT)
async def register(
    request: Request,
    body: UserRegister,
    db: AsyncSession = Depends(get_db),
) -> UserRead:
    """Create a regular user account. 409 if the email is taken."""
    return await auth_service.register(db, body.name, body.email, body.password)


@router.post("/login", response_model=Token)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> Token:
    """Exchange email + password for a bearer token."""
    return await auth_service.login(db, body.email, body.password)


@router.get("/me", response_model=Principal)
async def read_current_user(current_user: Principal = Depends(get_current_user)) -> Principal:
    """Return the identity carried by the caller's token."""
    return current_user
