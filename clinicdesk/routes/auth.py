# clinicdesk/routes/auth.py
import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from clinicdesk.schemas import LoginRequest, RegisterRequest
from clinicdesk.services import SessionUser, get_auth_service

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    data = RegisterRequest.parse(request.get_json(silent=True))
    user = get_auth_service().register_user(data)
    login_user(SessionUser(user))
    return jsonify(user.to_json()), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = LoginRequest.parse(request.get_json(silent=True))
    user = get_auth_service().authenticate_user(data.email, data.password)
    login_user(SessionUser(user))
    logger.info(f"User {user.id} logged in")
    return jsonify(user.to_json()), 200


@auth_bp.route('/logout', methods=['POST'])
def logout():
    if current_user.is_authenticated:
        logger.info(f"User {current_user.id} logged out")
    logout_user()
    return jsonify({'message': 'Logged out'}), 200


@auth_bp.route('/user')
@login_required
def me():
    return jsonify(current_user.record.to_json())
