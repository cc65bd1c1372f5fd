from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class User(BaseModel):
    """Practitioner account. Username and email are unique ignoring case."""
    __tablename__ = 'users'

    username: Mapped[str] = mapped_column(String(80), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(120), unique=True, nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    profession: Mapped[Optional[str]] = mapped_column(String(120))
    role: Mapped[str] = mapped_column(String(40), default='practitioner', nullable=False)

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.role})>"
