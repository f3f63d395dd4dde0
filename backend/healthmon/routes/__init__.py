"""
API routes.
"""
from flask import current_app


def get_store():
    """Record store registered on the running application."""
    return current_app.extensions['record_store']
