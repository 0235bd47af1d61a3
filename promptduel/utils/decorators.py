"""
Authentication Decorators

Contains decorators for HTTP authentication.
"""

from functools import wraps
from flask import request, jsonify, current_app

from ..services.identity import resolve_user_id


def _bearer_token():
    auth_header = request.headers.get('Authorization')
    if auth_header and auth_header.startswith('Bearer '):
        return auth_header.split(' ', 1)[1]
    return None


def optional_auth(f):
    """
    Decorator that attaches ``request.user_id`` from a Bearer token.

    Anonymous requests are allowed: ``request.user_id`` is None when the
    header is missing or the token does not verify.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        request.user_id = resolve_user_id(_bearer_token(), current_app.config.get('JWT_SECRET'))
        return f(*args, **kwargs)

    return decorated_function


def require_auth(f):
    """
    Decorator to require authentication for protected HTTP endpoints.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return jsonify({
                'success': False,
                'error': 'Authorization token required'
            }), 401

        user_id = resolve_user_id(token, current_app.config.get('JWT_SECRET'))
        if not user_id:
            return jsonify({
                'success': False,
                'error': 'Invalid or expired token'
            }), 401

        request.user_id = user_id
        return f(*args, **kwargs)

    return decorated_function
