"""
JWT token creation / verification and password hashing (bcrypt).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from app.core.config import settings
from app.core.exceptions import InvalidToken
from app.core.policy import Role
from app.schemas.token import TokenPayload

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_ALGORITHM = settings.ALGORITHM
_SECRET = settings.SECRET_KEY


# ── Passwords ───────────────────────────────────────────────────────
def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


# Verified against when the email is unknown, so that a missing account
# costs as much bcrypt work as a wrong password.
_DUMMY_HASH = get_password_hash("storefront-timing-equaliser")


def verify_password_dummy(plain: str) -> None:
    pwd_context.verify(plain, _DUMMY_HASH)


# ── JWT tokens ──────────────────────────────────────────────────────
def create_access_token(
    subject: str | Any,
    role: Role | str,
    expires_delta: timedelta | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    return jwt.encode(
        {"sub": str(subject), "role": Role(role).value, "iat": now, "exp": expire},
        _SECRET,
        algorithm=_ALGORITHM,
    )


def decode_access_token(token: str) -> TokenPayload:
    """Return the ``{sub, role}`` identity carried by a valid token.

    Bad signatures, expired tokens, garbage input and tokens with missing
    or unusable claims all raise the same :class:`InvalidToken`.
    """
    try:
        payload = jwt.decode(token, _SECRET, algorithms=[_ALGORITHM])
        return TokenPayload.model_validate(payload)
    except (JWTError, ValidationError):
        raise InvalidToken() from None
