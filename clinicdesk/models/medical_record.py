from datetime import datetime

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, utcnow


class MedicalRecord(BaseModel):
    """Append-only clinical note; there is no update path."""
    __tablename__ = 'medical_records'

    patient_id: Mapped[int] = mapped_column(ForeignKey('patients.id'), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'), nullable=False, index=True)
    date: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    record_type: Mapped[str] = mapped_column(String(50), nullable=False)  # anamnesis, evolution, plan, ...
    content: Mapped[str] = mapped_column(Text, nullable=False)
