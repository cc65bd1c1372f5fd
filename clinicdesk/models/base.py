"""
SQLAlchemy 2.0 base classes for the SQL storage backend
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Modern SQLAlchemy 2.0 DeclarativeBase"""
    pass


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps"""
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[Optional[datetime]] = mapped_column(default=utcnow, onupdate=utcnow)


class IdMixin:
    """Mixin for primary key id column"""
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)


class BaseModel(Base, IdMixin, TimestampMixin):
    """Base model with id and timestamps"""
    __abstract__ = True

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.id}>"
