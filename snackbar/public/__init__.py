"""
Public Blueprint

Home, blog and contact pages.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__)

from snackbar.public import routes  # noqa: E402, F401
