"""
Input validation for sign-up, sign-in, readings, and profile updates.
"""
import math
from datetime import datetime
from email_validator import validate_email, EmailNotValidError
from healthmon.models import MAX_ID

TIME_FORMATS = ('%H:%M:%S', '%H:%M')

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _parse_date(value):
    return datetime.strptime(str(value), '%Y-%m-%d').date()


def _parse_time(value):
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(str(value), fmt).time()
        except ValueError:
            continue
    raise ValueError(f'Unrecognized time: {value!r}')


def _check_int_range(data, key, label, low, high, errors, required=True):
    value = data.get(key)
    if value is None:
        if required:
            errors.append(f'{label} is required')
        return
    # JSON true/false and fractional numbers are not integers
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        errors.append(f'{label} must be an integer')
        return
    try:
        v = int(value)
        if v < low or v > high:
            errors.append(f'{label} must be between {low} and {high}')
    except (ValueError, TypeError):
        errors.append(f'{label} must be an integer')


def validate_signup(data: dict) -> list:
    """Validate sign-up input. Returns list of error strings (empty = valid)."""
    errors = []

    username = str(data.get('username') or '').strip()
    if not username:
        errors.append('Username is required')
    elif len(username) > 100:
        errors.append('Username must be 100 characters or fewer')

    email = str(data.get('email') or '').strip()
    if not email:
        errors.append('Email is required')
    else:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            errors.append('Invalid email format')

    password = data.get('password')
    if not password:
        errors.append('Password is required')
    elif len(str(password).encode('utf-8')) > MAX_PASSWORD_BYTES:
        errors.append(f'Password must be {MAX_PASSWORD_BYTES} bytes or fewer')

    return errors


def validate_signin(data: dict) -> list:
    """Validate sign-in input. Either username or email identifies the user."""
    errors = []

    if not data.get('username') and not data.get('email'):
        errors.append('Username or email is required')

    password = data.get('password')
    if not password:
        errors.append('Password is required')
    elif len(str(password).encode('utf-8')) > MAX_PASSWORD_BYTES:
        errors.append(f'Password must be {MAX_PASSWORD_BYTES} bytes or fewer')

    return errors


def validate_reading(data: dict, require_user_id: bool = False) -> list:
    """Validate blood pressure reading input. Returns list of error strings."""
    errors = []

    if require_user_id:
        _check_int_range(data, 'user_id', 'User ID', 1, MAX_ID, errors)

    input_date = data.get('input_date')
    if not input_date:
        errors.append('Input date is required')
    else:
        try:
            _parse_date(input_date)
        except ValueError:
            errors.append('Input date must be in YYYY-MM-DD format')

    input_time = data.get('input_time')
    if not input_time:
        errors.append('Input time is required')
    else:
        try:
            _parse_time(input_time)
        except ValueError:
            errors.append('Input time must be in HH:MM or HH:MM:SS format')

    _check_int_range(data, 'systolic', 'Systolic', 60, 300, errors)
    _check_int_range(data, 'diastolic', 'Diastolic', 30, 200, errors)
    _check_int_range(data, 'pulse_rate', 'Pulse rate', 30, 250, errors)

    return errors


def reading_fields(data: dict) -> dict:
    """Convert validated reading input into column values."""
    return {
        'input_date': _parse_date(data['input_date']),
        'input_time': _parse_time(data['input_time']),
        'systolic': int(data['systolic']),
        'diastolic': int(data['diastolic']),
        'pulse_rate': int(data['pulse_rate']),
    }


def validate_profile_update(data: dict) -> list:
    """Validate profile update input. Returns list of error strings (empty = valid)."""
    errors = []

    full_name = data.get('full_name')
    if full_name is not None and len(str(full_name).strip()) > 200:
        errors.append('Full name must be 200 characters or fewer')

    gender = data.get('gender')
    if gender is not None and len(str(gender)) > 50:
        errors.append('Gender must be 50 characters or fewer')

    _check_int_range(data, 'age', 'Age', 0, 150, errors, required=False)

    for key, label in (('height', 'Height'), ('weight', 'Weight')):
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, bool):
            errors.append(f'{label} must be a number')
            continue
        try:
            v = float(value)
        except (ValueError, TypeError):
            errors.append(f'{label} must be a number')
            continue
        if not math.isfinite(v) or v <= 0:
            errors.append(f'{label} must be a positive number')

    return errors


def profile_fields(data: dict) -> dict:
    """Convert validated profile input into column values. Absent fields become None."""
    full_name = data.get('full_name')
    return {
        'full_name': str(full_name).strip() if full_name is not None else None,
        'age': int(data['age']) if data.get('age') is not None else None,
        'gender': data.get('gender'),
        'height': float(data['height']) if data.get('height') is not None else None,
        'weight': float(data['weight']) if data.get('weight') is not None else None,
        'ongoing_med': data.get('ongoing_med'),
    }
