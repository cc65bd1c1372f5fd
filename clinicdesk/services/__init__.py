from flask import current_app

from .access import ClinicRepository
from .auth import AuthService, SessionUser

__all__ = ['ClinicRepository', 'AuthService', 'SessionUser', 'get_repository', 'get_auth_service']


def get_repository() -> ClinicRepository:
    return current_app.extensions['clinicdesk.repository']


def get_auth_service() -> AuthService:
    return current_app.extensions['clinicdesk.auth']
