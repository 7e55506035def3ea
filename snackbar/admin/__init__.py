"""
Admin Blueprint

Admin authentication is session-based: the cookie holds an opaque token,
the signed-in user snapshot lives in the server-side session store.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from snackbar.admin import routes  # noqa: E402, F401
