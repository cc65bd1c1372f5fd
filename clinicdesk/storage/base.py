"""
Record Store interface.

Five collections of integer-keyed records. Lookups of missing ids return
``None`` instead of raising; callers decide what absence means.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from clinicdesk.schemas import Appointment, MedicalRecord, Patient, Record, User, WhatsappTemplate


class Collection(str, Enum):
    USERS = 'users'
    PATIENTS = 'patients'
    APPOINTMENTS = 'appointments'
    MEDICAL_RECORDS = 'medical_records'
    WHATSAPP_TEMPLATES = 'whatsapp_templates'

    @property
    def record_type(self) -> type:
        return RECORD_TYPES[self]


RECORD_TYPES = {
    Collection.USERS: User,
    Collection.PATIENTS: Patient,
    Collection.APPOINTMENTS: Appointment,
    Collection.MEDICAL_RECORDS: MedicalRecord,
    Collection.WHATSAPP_TEMPLATES: WhatsappTemplate,
}


class Storage(ABC):
    """CRUD over the five collections. There is deliberately no delete."""

    backend_name = 'abstract'

    @abstractmethod
    def insert(self, collection: Collection, payload: dict) -> Record:
        """Assign the next id, store the payload and return the stored record."""

    @abstractmethod
    def get(self, collection: Collection, record_id: int) -> Optional[Record]:
        """Return the record or None."""

    @abstractmethod
    def update(self, collection: Collection, record_id: int, changes: dict) -> Optional[Record]:
        """Shallow-merge ``changes`` onto the stored record; None if absent."""

    @abstractmethod
    def list_where(self, collection: Collection, **equals) -> List[Record]:
        """Records whose fields equal every keyword given, in insertion order."""

    @abstractmethod
    def find_user_by_username(self, username: str) -> Optional[User]:
        """Case-insensitive username lookup."""

    @abstractmethod
    def find_user_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive email lookup."""

    def get_user(self, user_id: int) -> Optional[User]:
        return self.get(Collection.USERS, user_id)
