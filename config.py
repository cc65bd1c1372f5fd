import os
from datetime import timedelta

from dotenv import load_dotenv

# Get the absolute path of the directory the config.py file is in.
basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, '.env'))


class Config:
    # Security
    SECRET_KEY = os.environ.get("SECRET_KEY", "a_very_secure_default_secret_key")
    PASSWORD_HASH_METHOD = os.environ.get('PASSWORD_HASH_METHOD', 'scrypt')

    # Storage
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'memory')  # 'memory' or 'sql'
    DATABASE_URL = os.environ.get(
        "DATABASE_URL"
    ) or "sqlite:///" + os.path.join(basedir, "instance", "clinicdesk.db")

    # Session configuration
    PERMANENT_SESSION_LIFETIME = timedelta(hours=int(os.environ.get('SESSION_LIFETIME_HOURS', '12')))
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'False').lower() == 'true'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Calendar day boundaries ("today") are computed in this zone
    PRACTICE_TIMEZONE = os.environ.get('PRACTICE_TIMEZONE', 'UTC')

    # Environment-specific settings
    ENV = os.environ.get('FLASK_ENV', 'production')
    DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True
    SESSION_COOKIE_SECURE = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    DEBUG = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    TESTING = True
    DEBUG = True
    SECRET_KEY = 'testing-secret-key'
    STORAGE_BACKEND = 'memory'
    DATABASE_URL = 'sqlite:///:memory:'
    SESSION_COOKIE_SECURE = False
    # Fast hashing keeps the suite quick
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': ProductionConfig
}
