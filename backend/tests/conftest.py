"""
Shared fixtures: an application bound to a throwaway SQLite database and
helpers for registering users and posting readings.
"""
import pytest
from healthmon import create_app, db
from healthmon.utils.auth import decode_token

SECRET = 'test-secret-key'


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': SECRET,
        'SQLALCHEMY_DATABASE_URI': f'sqlite:///{tmp_path / "healthmon.db"}',
        'BCRYPT_LOG_ROUNDS': 4,
    })
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    """Sign up a user and return its id."""
    def _register(username='alice', email='alice@example.com', password='secret123'):
        resp = client.post('/signup', json={
            'username': username, 'email': email, 'password': password,
        })
        assert resp.status_code == 200, resp.get_json()
        resp = client.post('/signin', json={'username': username, 'password': password})
        return decode_token(resp.get_json()['token'], SECRET)['id']
    return _register


@pytest.fixture
def reading_body():
    return {
        'input_date': '2024-01-15',
        'input_time': '08:30',
        'systolic': 135,
        'diastolic': 85,
        'pulse_rate': 72,
    }
