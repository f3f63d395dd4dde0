"""
User and profile routes.
"""
from flask import Blueprint, request, jsonify
from healthmon.models.user import PROFILE_FIELDS
from healthmon.routes import get_store
from healthmon.utils.audit_logger import audit_log
from healthmon.utils.errors import handle_internal_errors
from healthmon.utils.validators import validate_profile_update, profile_fields

users_bp = Blueprint('users', __name__)


@users_bp.route('/user/<int:id>', methods=['GET'])
@handle_internal_errors
def get_user(id):
    """Return the user record without the password hash."""
    user = get_store().get_user(id)
    if not user:
        return jsonify({'error': 'user not found'}), 404

    return jsonify(user.to_dict()), 200


@users_bp.route('/userinfo/<int:id>', methods=['GET'])
@handle_internal_errors
def get_user_info(id):
    user = get_store().get_user(id)
    if not user:
        return jsonify({'error': 'User not found'}), 400

    return jsonify(user.profile_dict()), 200


@users_bp.route('/userinfo/<int:id>', methods=['PUT'])
@handle_internal_errors
def update_user_info(id):
    """Replace the profile fields. Fields missing from the body are cleared."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body is required'}), 400

    errors = validate_profile_update(data)
    if errors:
        return jsonify({'error': errors}), 400

    user = get_store().update_profile(id, profile_fields(data))
    if not user:
        return jsonify({'error': 'User not found'}), 400

    audit_log('UPDATE', 'user', resource_id=id,
              details={'action': 'profile_update',
                       'fields_changed': sorted(k for k in data if k in PROFILE_FIELDS)},
              user_id=id)

    return jsonify(user.to_dict()), 200
