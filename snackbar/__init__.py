"""
La Quinta Snack Bar - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

import click
from flask import Flask, current_app, session

from snackbar.extensions import db, login_manager
from snackbar.config import Config

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    # Per-application collaborators, looked up by the views
    from snackbar.admin.decorators import SESSIONS_EXTENSION_KEY
    from snackbar.services import ContentRepository, SessionManager, UploadStore
    from snackbar.services.repository import EXTENSION_KEY as REPOSITORY_KEY
    from snackbar.services.uploads import EXTENSION_KEY as UPLOADS_KEY

    app.extensions[REPOSITORY_KEY] = ContentRepository(db.session)
    app.extensions[SESSIONS_EXTENSION_KEY] = SessionManager(
        idle_timeout=app.config['ADMIN_SESSION_IDLE_TIMEOUT'])
    app.extensions[UPLOADS_KEY] = UploadStore(
        app.config.get('UPLOAD_FOLDER') or os.path.join(app.static_folder, 'uploads'))

    # Register blueprints
    from snackbar.public import public_bp
    from snackbar.admin import admin_bp

    app.register_blueprint(public_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')

    # Expose the admin session snapshot to templates as current_user
    @login_manager.request_loader
    def load_admin(request):
        from snackbar.admin.decorators import SESSION_TOKEN_KEY
        return current_app.extensions[SESSIONS_EXTENSION_KEY].current_user(session.get(SESSION_TOKEN_KEY))

    @app.cli.command('init-db')
    def init_db_command():
        """Create missing tables and default rows."""
        from snackbar.services import initialize_database
        initialize_database(app)
        click.echo('Database initialized.')

    # Create database tables
    uri = app.config['SQLALCHEMY_DATABASE_URI']
    if uri.startswith('sqlite:///'):
        db_dir = os.path.dirname(uri[len('sqlite:///'):])
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    from snackbar.services import initialize_database
    initialize_database(app)
    logger.info('Application ready (%s)', uri)

    return app
