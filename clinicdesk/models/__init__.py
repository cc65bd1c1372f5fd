from .base import Base, BaseModel
from .user import User
from .patient import Patient
from .appointment import Appointment
from .medical_record import MedicalRecord
from .whatsapp_template import WhatsappTemplate

__all__ = [
    'Base', 'BaseModel',
    'User', 'Patient', 'Appointment', 'MedicalRecord', 'WhatsappTemplate'
]
