import threading
from typing import Dict, List, Optional

from clinicdesk.schemas import Record, User
from clinicdesk.storage.base import Collection, Storage


class MemoryStorage(Storage):
    """Process-local store. Contents are lost when the process exits."""

    backend_name = 'memory'

    def __init__(self):
        self._rows: Dict[Collection, Dict[int, dict]] = {c: {} for c in Collection}
        self._next_ids: Dict[Collection, int] = {c: 1 for c in Collection}
        # Guards id allocation and row replacement, not read-modify-write across calls
        self._lock = threading.Lock()

    def _to_record(self, collection: Collection, row: dict) -> Record:
        return collection.record_type.model_validate(row)

    def insert(self, collection: Collection, payload: dict) -> Record:
        with self._lock:
            record_id = self._next_ids[collection]
            record = self._to_record(collection, {**payload, 'id': record_id})
            self._next_ids[collection] = record_id + 1
            # dict() keeps fields excluded from serialization (password)
            self._rows[collection][record_id] = dict(record)
        return record

    def get(self, collection: Collection, record_id: int) -> Optional[Record]:
        row = self._rows[collection].get(record_id)
        if row is None:
            return None
        return self._to_record(collection, row)

    def update(self, collection: Collection, record_id: int, changes: dict) -> Optional[Record]:
        with self._lock:
            row = self._rows[collection].get(record_id)
            if row is None:
                return None
            record = self._to_record(collection, {**row, **changes, 'id': record_id})
            # dict() keeps fields excluded from serialization (password)
            self._rows[collection][record_id] = dict(record)
        return record

    def list_where(self, collection: Collection, **equals) -> List[Record]:
        rows = list(self._rows[collection].values())
        return [
            self._to_record(collection, row)
            for row in rows
            if all(row.get(field) == value for field, value in equals.items())
        ]

    def _find_user(self, field: str, value: str) -> Optional[User]:
        wanted = value.lower()
        for row in list(self._rows[Collection.USERS].values()):
            if row[field].lower() == wanted:
                return self._to_record(Collection.USERS, row)
        return None

    def find_user_by_username(self, username: str) -> Optional[User]:
        return self._find_user('username', username)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self._find_user('email', email)
