from datetime import time

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class WhatsappTemplate(BaseModel):
    __tablename__ = 'whatsapp_templates'

    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    time_before_appointment: Mapped[str] = mapped_column(String(50), nullable=False)  # 1 day, 2 days, 1 week
    status: Mapped[str] = mapped_column(String(20), default='active', nullable=False)
    request_confirmation: Mapped[bool] = mapped_column(default=True, nullable=False)
    send_time: Mapped[time] = mapped_column(nullable=False)
