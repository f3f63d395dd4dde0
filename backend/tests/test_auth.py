"""
Sign-up and sign-in tests.
"""
from healthmon.models import User
from healthmon.utils.auth import decode_token
from .conftest import SECRET


def _count_users(app, **filters):
    with app.app_context():
        return User.query.filter_by(**filters).count()


def test_signup_and_signin(client):
    resp = client.post('/signup', json={
        'username': 'alice', 'email': 'a@x.com', 'password': 'secret123',
    })
    assert resp.status_code == 200
    assert resp.get_json() == {'message': 'User has been registered successfully'}

    resp = client.post('/signin', json={'username': 'alice', 'password': 'secret123'})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['auth'] is True
    assert body['token']


def test_password_is_stored_hashed(app, client):
    client.post('/signup', json={
        'username': 'alice', 'email': 'a@x.com', 'password': 'secret123',
    })
    with app.app_context():
        user = User.query.filter_by(username='alice').one()
        assert user.password != 'secret123'
        assert user.password.startswith('$2b$04$')


def test_signup_duplicate_username_rejected(app, client):
    client.post('/signup', json={
        'username': 'alice', 'email': 'a@x.com', 'password': 'secret123',
    })
    resp = client.post('/signup', json={
        'username': 'alice', 'email': 'other@x.com', 'password': 'another1',
    })
    assert resp.status_code == 400
    assert resp.get_json() == {'message': 'Username or email already exist'}
    assert _count_users(app, username='alice') == 1
    assert _count_users(app, email='other@x.com') == 0


def test_signup_duplicate_email_rejected(app, client):
    client.post('/signup', json={
        'username': 'alice', 'email': 'a@x.com', 'password': 'secret123',
    })
    resp = client.post('/signup', json={
        'username': 'bob', 'email': 'a@x.com', 'password': 'secret123',
    })
    assert resp.status_code == 400
    assert _count_users(app, email='a@x.com') == 1
    assert _count_users(app, username='bob') == 0


def test_signup_validation_errors(app, client):
    resp = client.post('/signup', json={'username': '', 'email': 'not-an-email'})
    assert resp.status_code == 400
    errors = resp.get_json()['error']
    assert 'Username is required' in errors
    assert 'Invalid email format' in errors
    assert 'Password is required' in errors
    assert _count_users(app) == 0


def test_signup_rejects_overlong_password(client):
    resp = client.post('/signup', json={
        'username': 'alice', 'email': 'a@x.com', 'password': 'x' * 73,
    })
    assert resp.status_code == 400


def test_signup_without_json_body(client):
    resp = client.post('/signup', data='plain text')
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Request body is required'}


def test_token_carries_user_identity(client, register):
    user_id = register(username='alice', email='a@x.com', password='secret123')

    resp = client.post('/signin', json={'email': 'a@x.com', 'password': 'secret123'})
    assert resp.status_code == 200

    claims = decode_token(resp.get_json()['token'], SECRET)
    assert claims['id'] == user_id
    assert claims['username'] == 'alice'
    assert claims['email'] == 'a@x.com'
    assert claims['exp'] - claims['iat'] == 86400


def test_signin_wrong_password(client, register):
    register(username='alice', email='a@x.com', password='secret123')

    resp = client.post('/signin', json={'username': 'alice', 'password': 'wrong-pass'})
    assert resp.status_code == 400
    assert resp.get_json() == {'auth': False, 'token': None}


def test_signin_unknown_user(client):
    resp = client.post('/signin', json={'username': 'nobody', 'password': 'secret123'})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body['auth'] is False
    assert body['token'] is None
    assert body['message'] == 'Incorrect username or email'


def test_signin_requires_identifier_and_password(client):
    resp = client.post('/signin', json={})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == [
        'Username or email is required',
        'Password is required',
    ]


def test_signup_race_caught_by_unique_constraint(app, client, monkeypatch):
    client.post('/signup', json={
        'username': 'alice', 'email': 'a@x.com', 'password': 'secret123',
    })

    # Simulate a concurrent sign-up that slipped past the existence check
    monkeypatch.setattr(app.extensions['record_store'], 'find_user_by_login',
                        lambda **kwargs: None)

    resp = client.post('/signup', json={
        'username': 'alice', 'email': 'a@x.com', 'password': 'secret123',
    })
    assert resp.status_code == 400
    assert resp.get_json() == {'message': 'Username or email already exist'}
    assert _count_users(app, username='alice') == 1


def test_signin_strips_whitespace_like_signup(client):
    resp = client.post('/signup', json={
        'username': ' alice ', 'email': ' a@x.com ', 'password': 'secret123',
    })
    assert resp.status_code == 200

    resp = client.post('/signin', json={'username': ' alice ', 'password': 'secret123'})
    assert resp.status_code == 200
    assert resp.get_json()['auth'] is True

    resp = client.post('/signin', json={'email': 'a@x.com ', 'password': 'secret123'})
    assert resp.status_code == 200
