"""
Error boundary for request handlers.
"""
import logging
import uuid
from functools import wraps
from flask import jsonify
from werkzeug.exceptions import HTTPException
from healthmon import db

logger = logging.getLogger(__name__)


def handle_internal_errors(f):
    """Decorator that turns unexpected failures into an opaque 500 response.

    The full exception is logged under a generated error id; the client only
    receives the id. HTTP errors raised by Flask itself pass through.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except HTTPException:
            raise
        except Exception:
            db.session.rollback()
            error_id = uuid.uuid4().hex
            logger.exception('Unhandled error in %s (error_id=%s)', f.__name__, error_id)
            return jsonify({'error': 'Internal server error', 'error_id': error_id}), 500
    return wrapper
