import logging
from typing import List, Optional

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinicdesk import models
from clinicdesk.schemas import MAX_ID, Record, User
from clinicdesk.storage.base import Collection, Storage

logger = logging.getLogger(__name__)

TABLES = {
    Collection.USERS: models.User,
    Collection.PATIENTS: models.Patient,
    Collection.APPOINTMENTS: models.Appointment,
    Collection.MEDICAL_RECORDS: models.MedicalRecord,
    Collection.WHATSAPP_TEMPLATES: models.WhatsappTemplate,
}


class SqlStorage(Storage):
    """Record Store backed by a relational database; ids come from the database."""

    backend_name = 'sql'

    def __init__(self, database_url, echo=False):
        engine_options = {'echo': echo, 'pool_pre_ping': True}
        if database_url.startswith('sqlite') and ':memory:' in database_url:
            # One shared connection, otherwise every session sees an empty database
            engine_options.update(
                connect_args={'check_same_thread': False},
                poolclass=StaticPool,
            )
        self.engine = create_engine(database_url, **engine_options)
        self._session_factory = sessionmaker(self.engine, expire_on_commit=False)

    def create_all(self):
        models.Base.metadata.create_all(self.engine)

    def drop_all(self):
        models.Base.metadata.drop_all(self.engine)

    def _to_record(self, collection: Collection, row) -> Record:
        return collection.record_type.model_validate(row, from_attributes=True)

    def insert(self, collection: Collection, payload: dict) -> Record:
        with self._session_factory.begin() as session:
            row = TABLES[collection](**payload)
            session.add(row)
            session.flush()
            return self._to_record(collection, row)

    def get(self, collection: Collection, record_id: int) -> Optional[Record]:
        if not _storable(record_id):
            return None
        with self._session_factory() as session:
            row = session.get(TABLES[collection], record_id)
            if row is None:
                return None
            return self._to_record(collection, row)

    def update(self, collection: Collection, record_id: int, changes: dict) -> Optional[Record]:
        if not _storable(record_id):
            return None
        with self._session_factory.begin() as session:
            row = session.get(TABLES[collection], record_id)
            if row is None:
                return None
            for field, value in changes.items():
                setattr(row, field, value)
            session.flush()
            return self._to_record(collection, row)

    def list_where(self, collection: Collection, **equals) -> List[Record]:
        table = TABLES[collection]
        stmt = select(table).filter_by(**equals).order_by(table.id)
        with self._session_factory() as session:
            return [self._to_record(collection, row) for row in session.scalars(stmt)]

    def _find_user(self, column, value: str) -> Optional[User]:
        stmt = select(models.User).where(func.lower(column) == value.lower())
        with self._session_factory() as session:
            row = session.scalars(stmt).first()
            if row is None:
                return None
            return self._to_record(Collection.USERS, row)

    def find_user_by_username(self, username: str) -> Optional[User]:
        return self._find_user(models.User.username, username)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self._find_user(models.User.email, email)


def _storable(record_id) -> bool:
    # The database driver overflows on ids outside a signed 64-bit column
    return -MAX_ID - 1 <= record_id <= MAX_ID
