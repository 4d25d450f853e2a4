"""
User listing (admin only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_db, require_admin
from app.schemas.token import Principal
from app.schemas.user import UserRead
from app.services import users as users_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead])
async def list_users(
    db: AsyncSession = Depends(get_db),
    _admin: Principal = Depends(require_admin),
) -> list[UserRead]:
    return await users_service.list_users(db)
