from .base import Collection, Storage
from .memory import MemoryStorage
from .sql import SqlStorage

__all__ = ['Collection', 'Storage', 'MemoryStorage', 'SqlStorage', 'build_storage']


def build_storage(config):
    """Construct the store named by ``STORAGE_BACKEND`` in a Flask config mapping."""
    backend = config.get('STORAGE_BACKEND', 'memory')
    if backend == 'memory':
        return MemoryStorage()
    if backend == 'sql':
        storage = SqlStorage(config['DATABASE_URL'], echo=config.get('SQLALCHEMY_ECHO', False))
        storage.create_all()
        return storage
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")
