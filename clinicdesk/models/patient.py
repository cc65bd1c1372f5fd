from datetime import date
from typing import Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Patient(BaseModel):
    __tablename__ = 'patients'

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(120), nullable=False)
    phone: Mapped[str] = mapped_column(String(40), nullable=False)
    birth_date: Mapped[Optional[date]] = mapped_column()
    profession: Mapped[Optional[str]] = mapped_column(String(120))
    status: Mapped[str] = mapped_column(String(20), default='active', nullable=False)  # active, inactive
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False, index=True)
