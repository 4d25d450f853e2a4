"""
Declarative base shared by every ORM model.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Timezone-aware default for created_at / updated_at columns."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    # Models annotate plain ``Column`` attributes instead of ``Mapped[...]``
    __allow_unmapped__ = True
