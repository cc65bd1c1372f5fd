# clinicdesk/__init__.py
import logging
import os

from flask import Flask
from flask_login import LoginManager

from config import config
from clinicdesk.errors import Unauthenticated, register_error_handlers
from clinicdesk.services import AuthService, ClinicRepository, get_auth_service
from clinicdesk.storage import build_storage

logger = logging.getLogger(__name__)


def create_app(config_name=None, storage=None):
    """Build the application around an explicitly constructed store.

    ``storage`` may be passed in (tests, scripts); otherwise it is built from
    the ``STORAGE_BACKEND`` setting.
    """
    app = Flask(__name__)
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'production')

    # Get config object and apply to app
    config_obj = config.get(config_name, config['default'])
    app.config.from_object(config_obj)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )

    if storage is None:
        _ensure_sqlite_directory(app.config)
        storage = build_storage(app.config)
    auth_service = AuthService(storage, hash_method=app.config['PASSWORD_HASH_METHOD'])

    app.extensions['clinicdesk.storage'] = storage
    app.extensions['clinicdesk.repository'] = ClinicRepository(storage)
    app.extensions['clinicdesk.auth'] = auth_service

    # Initialize extensions
    login_manager = LoginManager()
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return get_auth_service().load_session_user(user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        raise Unauthenticated()

    register_error_handlers(app)

    # Register blueprints
    from clinicdesk.routes.auth import auth_bp
    from clinicdesk.routes.patients import patients_bp
    from clinicdesk.routes.appointments import appointments_bp
    from clinicdesk.routes.medical_records import medical_records_bp
    from clinicdesk.routes.templates import templates_bp
    from clinicdesk.routes.dashboard import dashboard_bp

    for blueprint in (auth_bp, patients_bp, appointments_bp, medical_records_bp, templates_bp, dashboard_bp):
        app.register_blueprint(blueprint, url_prefix='/api')

    @app.route('/health')
    def health():
        return {'ok': True, 'storage': storage.backend_name}

    # Register CLI commands
    from clinicdesk.cli import register_commands
    register_commands(app)

    logger.info(f"clinicdesk started ({config_name}, storage={storage.backend_name})")
    return app


def _ensure_sqlite_directory(app_config):
    url = app_config.get('DATABASE_URL', '')
    if app_config.get('STORAGE_BACKEND') != 'sql' or not url.startswith('sqlite:///'):
        return
    path = url[len('sqlite:///'):]
    if path and path != ':memory:':
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
