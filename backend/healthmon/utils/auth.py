"""
Authentication utilities for JWT tokens.
"""
import jwt
from datetime import datetime, timedelta, timezone

DEFAULT_EXPIRES_IN = 86400  # 24 hours


def generate_token(claims: dict, secret: str, expires_in: int = DEFAULT_EXPIRES_IN) -> str:
    """
    Sign a JWT carrying the user's id, username and email.
    Token expires after ``expires_in`` seconds.
    """
    if not secret:
        raise RuntimeError('SECRET_KEY is required to sign tokens')

    now = datetime.now(timezone.utc)
    payload = {
        'id': claims['id'],
        'username': claims['username'],
        'email': claims['email'],
        'iat': now,
        'exp': now + timedelta(seconds=expires_in),
    }

    return jwt.encode(payload, secret, algorithm='HS256')


def decode_token(token: str, secret: str) -> dict:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, secret, algorithms=['HS256'])
        return payload
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None
