# clinicdesk/services/auth.py
import logging

from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash

from clinicdesk.errors import DuplicateIdentity, InvalidCredentials
from clinicdesk.schemas import RegisterRequest, User
from clinicdesk.storage import Collection, Storage

logger = logging.getLogger(__name__)


class SessionUser(UserMixin):
    """flask-login adapter around a stored User record."""

    def __init__(self, record: User):
        self.record = record

    @property
    def id(self):
        return self.record.id

    def get_id(self):
        return str(self.record.id)

    def __repr__(self):
        return f"<SessionUser {self.record.username}>"


class AuthService:
    def __init__(self, storage: Storage, hash_method='scrypt'):
        self.storage = storage
        self.hash_method = hash_method
        # Compared against when the email is unknown so both failures cost the same
        self._dummy_hash = generate_password_hash('not-a-real-password', method=hash_method)

    def register_user(self, data: RegisterRequest) -> User:
        if self.storage.find_user_by_username(data.username):
            raise DuplicateIdentity('Username already exists')
        if self.storage.find_user_by_email(data.email):
            raise DuplicateIdentity('Email already registered')

        user = self.storage.insert(Collection.USERS, {
            'username': data.username,
            'email': data.email,
            'password': generate_password_hash(data.password, method=self.hash_method),
            'name': data.name,
            'profession': data.profession,
            'role': 'practitioner',
        })
        logger.info(f"Registered practitioner {user.id} ({user.username})")
        return user

    def authenticate_user(self, email: str, password: str) -> User:
        user = self.storage.find_user_by_email(email.strip())
        if user is None:
            check_password_hash(self._dummy_hash, password)
            logger.info("Failed login attempt")
            raise InvalidCredentials()
        if not check_password_hash(user.password, password):
            logger.info("Failed login attempt")
            raise InvalidCredentials()
        return user

    def load_session_user(self, user_id):
        try:
            user = self.storage.get_user(int(user_id))
        except (TypeError, ValueError):
            return None
        return SessionUser(user) if user else None
