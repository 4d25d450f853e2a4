"""Pydantic schemas for JWT tokens and the authenticated identity."""

from __future__ import annotations

import uuid

from pydantic import BaseModel

from app.core.policy import Role


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenPayload(BaseModel):
    sub: uuid.UUID
    role: Role


class Principal(BaseModel):
    """Who is making the request, as stated by their token."""

    id: uuid.UUID
    role: Role

    model_config = {"frozen": True}
