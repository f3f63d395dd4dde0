"""
Blood pressure reading routes.
"""
from flask import Blueprint, request, jsonify
from healthmon.routes import get_store
from healthmon.utils.audit_logger import audit_log
from healthmon.utils.errors import handle_internal_errors
from healthmon.utils.validators import validate_reading, reading_fields

readings_bp = Blueprint('readings', __name__)

READING_NOT_FOUND = 'High blood pressure post not found'


def _reading_payload(require_user_id=False):
    """Return (data, error_response) for a reading request body."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, (jsonify({'error': 'Request body is required'}), 400)

    errors = validate_reading(data, require_user_id=require_user_id)
    if errors:
        return None, (jsonify({'error': errors}), 400)

    return data, None


@readings_bp.route('/highBP/user/<int:user_id>', methods=['GET'])
@handle_internal_errors
def list_user_readings(user_id):
    """Return every reading of a user, newest observation first."""
    readings = get_store().list_readings(user_id)
    if not readings:
        return jsonify({'error': 'No data found for this user'}), 404

    return jsonify([r.to_dict() for r in readings]), 200


@readings_bp.route('/highBP/user/<int:id>', methods=['POST'])
@handle_internal_errors
def create_user_reading(id):
    """Add a reading for the user in the path.

    Answers with a one-element list whose ``input_date`` is a plain
    ``YYYY-MM-DD`` calendar date.
    """
    data, error = _reading_payload()
    if error:
        return error

    reading = get_store().add_reading(id, reading_fields(data))
    if not reading:
        return jsonify({'error': 'User not found'}), 400

    audit_log('CREATE', 'reading', resource_id=reading.id, user_id=id)

    return jsonify([reading.to_dict()]), 200


@readings_bp.route('/highBP', methods=['POST'])
@handle_internal_errors
def create_reading():
    """Add a reading for the ``user_id`` given in the body."""
    data, error = _reading_payload(require_user_id=True)
    if error:
        return error

    user_id = int(data['user_id'])
    reading = get_store().add_reading(user_id, reading_fields(data))
    if not reading:
        return jsonify({'error': 'User not found'}), 400

    audit_log('CREATE', 'reading', resource_id=reading.id, user_id=user_id)

    return jsonify(reading.to_dict(iso_date=False)), 200


@readings_bp.route('/highBP/<int:id>', methods=['PUT'])
@handle_internal_errors
def update_reading(id):
    data, error = _reading_payload()
    if error:
        return error

    reading = get_store().update_reading(id, reading_fields(data))
    if not reading:
        return jsonify({'error': READING_NOT_FOUND}), 400

    audit_log('UPDATE', 'reading', resource_id=id, user_id=reading.user_id)

    return jsonify(reading.to_dict()), 200


@readings_bp.route('/highBP/<int:id>', methods=['DELETE'])
@handle_internal_errors
def delete_reading(id):
    if not get_store().delete_reading(id):
        return jsonify({'error': READING_NOT_FOUND}), 400

    audit_log('DELETE', 'reading', resource_id=id)

    return jsonify({'message': 'Successfully deleted'}), 200
