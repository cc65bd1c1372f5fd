from datetime import date as Date, time as Time
from typing import Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Appointment(BaseModel):
    __tablename__ = 'appointments'

    patient_id: Mapped[int] = mapped_column(ForeignKey('patients.id'), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False, index=True)
    date: Mapped[Date] = mapped_column(nullable=False, index=True)
    start_time: Mapped[Time] = mapped_column(nullable=False)
    end_time: Mapped[Time] = mapped_column(nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)  # initial, followup, ...
    status: Mapped[str] = mapped_column(String(20), default='confirmed', nullable=False)  # confirmed, pending, canceled
    notes: Mapped[Optional[str]] = mapped_column(Text)
