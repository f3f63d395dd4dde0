"""
Sign-up and sign-in routes.
"""
from flask import Blueprint, request, jsonify, current_app
from healthmon.routes import get_store
from healthmon.store import DuplicateUserError
from healthmon.utils.audit_logger import audit_log
from healthmon.utils.auth import generate_token
from healthmon.utils.errors import handle_internal_errors
from healthmon.utils.passwords import hash_password, verify_password
from healthmon.utils.validators import validate_signup, validate_signin

auth_bp = Blueprint('auth', __name__)

DUPLICATE_MESSAGE = 'Username or email already exist'


@auth_bp.route('/signup', methods=['POST'])
@handle_internal_errors
def signup():
    """Register a new user with a bcrypt-hashed password."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body is required'}), 400

    errors = validate_signup(data)
    if errors:
        return jsonify({'error': errors}), 400

    username = str(data['username']).strip()
    email = str(data['email']).strip()

    store = get_store()
    if store.find_user_by_login(username=username, email=email):
        return jsonify({'message': DUPLICATE_MESSAGE}), 400

    hashed = hash_password(str(data['password']), rounds=current_app.config['BCRYPT_LOG_ROUNDS'])

    try:
        user = store.add_user(username, email, hashed)
    except DuplicateUserError:
        return jsonify({'message': DUPLICATE_MESSAGE}), 400

    audit_log('CREATE', 'user', resource_id=user.id,
              details={'action': 'signup'}, user_id=user.id)

    return jsonify({'message': 'User has been registered successfully'}), 200


@auth_bp.route('/signin', methods=['POST'])
@handle_internal_errors
def signin():
    """Verify credentials and issue a signed token valid for 24 hours."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body is required'}), 400

    errors = validate_signin(data)
    if errors:
        return jsonify({'error': errors}), 400

    username = str(data.get('username') or '').strip()
    email = str(data.get('email') or '').strip()
    user = get_store().find_user_by_login(username=username, email=email)

    if not user:
        audit_log('LOGIN_FAILED', 'user', details={'reason': 'not_found'})
        return jsonify({
            'auth': False,
            'token': None,
            'message': 'Incorrect username or email',
        }), 400

    if not verify_password(str(data['password']), user.password):
        audit_log('LOGIN_FAILED', 'user', resource_id=user.id,
                  details={'reason': 'invalid_password'}, user_id=user.id)
        return jsonify({'auth': False, 'token': None}), 400

    token = generate_token(user.token_claims(),
                           current_app.config['SECRET_KEY'],
                           expires_in=current_app.config['JWT_EXPIRES_IN'])

    audit_log('LOGIN', 'user', resource_id=user.id,
              details={'action': 'signin'}, user_id=user.id)

    return jsonify({'auth': True, 'token': token}), 200
