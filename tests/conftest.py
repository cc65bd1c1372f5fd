import pytest

from clinicdesk import create_app
from clinicdesk.storage import MemoryStorage, SqlStorage


def register(client, username, email, password='secret123', name=None, profession=None):
    payload = {
        'username': username,
        'email': email,
        'password': password,
        'name': name or username.title(),
    }
    if profession:
        payload['profession'] = profession
    return client.post('/api/register', json=payload)


def create_patient(client, **overrides):
    payload = {'name': 'Lucas Silva', 'email': 'lucas@x.com', 'phone': '11999990000'}
    payload.update(overrides)
    response = client.post('/api/patients', json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def create_appointment(client, patient_id, **overrides):
    payload = {
        'patientId': patient_id,
        'date': '2024-01-10',
        'startTime': '09:00',
        'endTime': '10:00',
        'type': 'initial',
    }
    payload.update(overrides)
    response = client.post('/api/appointments', json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


@pytest.fixture(params=['memory', 'sql'])
def storage(request):
    if request.param == 'memory':
        yield MemoryStorage()
        return
    sql_storage = SqlStorage('sqlite:///:memory:')
    sql_storage.create_all()
    yield sql_storage
    sql_storage.engine.dispose()


@pytest.fixture
def app(storage):
    return create_app('testing', storage=storage)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sofia(app):
    """Logged-in client for practitioner 'drsofia'."""
    client = app.test_client()
    response = register(client, 'drsofia', 'sofia@x.com', name='Sofia Mendes', profession='Nutricionista')
    assert response.status_code == 201
    return client


@pytest.fixture
def quentin(app):
    """Logged-in client for a second, unrelated practitioner."""
    client = app.test_client()
    response = register(client, 'drquentin', 'quentin@y.com', name='Quentin Alves')
    assert response.status_code == 201
    return client
