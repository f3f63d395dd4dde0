"""
Password hashing with bcrypt.
"""
import bcrypt

DEFAULT_ROUNDS = 12


def hash_password(plaintext: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with a fresh salt. The salt and cost are embedded in the result."""
    hashed = bcrypt.hashpw(plaintext.encode('utf-8'), bcrypt.gensalt(rounds=rounds))
    return hashed.decode('utf-8')


def verify_password(plaintext: str, hashed: str) -> bool:
    """Check a candidate password against a stored bcrypt hash."""
    return bcrypt.checkpw(plaintext.encode('utf-8'), hashed.encode('utf-8'))
