"""
Flask Extensions

Admin identity lives in a server-side session store; Flask-Login only
exposes the resolved snapshot to templates as ``current_user``.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager (request loader resolves the admin session token)
login_manager = LoginManager()
