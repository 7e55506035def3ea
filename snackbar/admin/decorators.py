"""
Admin Decorator

Every admin view sits behind ``admin_required``. Any signed-in session
may use every admin page; the ``role`` column is not consulted.
"""

from collections import namedtuple
from functools import wraps

from flask import current_app, redirect, session, url_for

SESSION_TOKEN_KEY = 'admin_token'
SESSIONS_EXTENSION_KEY = 'admin_sessions'

AuthDecision = namedtuple('AuthDecision', ['allowed', 'redirect_to'])


def get_session_manager():
    return current_app.extensions[SESSIONS_EXTENSION_KEY]


def current_token():
    """Admin session token carried in the signed cookie, if any."""
    return session.get(SESSION_TOKEN_KEY)


def require_auth(sessions, token):
    """Allow iff ``token`` maps to a live session; otherwise send the browser to the login page."""
    if sessions.current_user(token) is not None:
        return AuthDecision(True, None)
    return AuthDecision(False, url_for('admin.login'))


def admin_required(f):
    """Decorator to ensure the request carries a live admin session.
    
    The wrapped view receives the ``SessionContext`` as its first argument.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        sessions = get_session_manager()
        token = current_token()
        decision = require_auth(sessions, token)
        if not decision.allowed:
            session.pop(SESSION_TOKEN_KEY, None)
            return redirect(decision.redirect_to)
        return f(sessions.context(token), *args, **kwargs)
    return wrapper
