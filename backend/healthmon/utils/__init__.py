from .passwords import hash_password, verify_password
from .audit_logger import audit_log
from .auth import generate_token, decode_token
from .errors import handle_internal_errors
from .validators import validate_signup, validate_signin, validate_reading, validate_profile_update
