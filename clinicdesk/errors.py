# clinicdesk/errors.py
import logging

from flask import jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {'message': self.message}


class Unauthenticated(ApiError):
    status_code = 401
    message = 'Unauthorized'


class InvalidCredentials(ApiError):
    status_code = 401
    message = 'Invalid email or password'


class Forbidden(ApiError):
    status_code = 403
    message = 'Not authorized to access this resource'


class NotFound(ApiError):
    status_code = 404
    message = 'Resource not found'


class ValidationFailed(ApiError):
    status_code = 400
    message = 'Invalid data'

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, exc: ValidationError, message=None):
        errors = []
        for err in exc.errors(include_url=False):
            errors.append({
                'field': '.'.join(str(part) for part in err['loc']) or None,
                'message': err['msg'],
                'code': err['type'],
            })
        return cls(message, errors)

    def to_dict(self):
        return {'message': self.message, 'errors': self.errors}


class DuplicateIdentity(ApiError):
    status_code = 400
    message = 'Username or email already registered'


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if not request.path.startswith('/api'):
            return error.get_response()
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        return jsonify({'message': 'Internal server error'}), 500
