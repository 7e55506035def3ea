"""
Configuration settings for the La Quinta Snack Bar site
"""
import os


class Config:
    """Flask application configuration"""
    
    # Flask secret key for the signed session cookie
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'la-quinta-snack-bar-secret-key-2024'
    
    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'database.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    
    # Session cookie is not TLS-only; the site is served over plain HTTP too
    SESSION_COOKIE_SECURE = False
    
    # Admin bootstrap credentials (hashed into the users table on first boot)
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME') or 'admin'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'
    
    # Idle seconds before an admin session is dropped
    ADMIN_SESSION_IDLE_TIMEOUT = int(os.environ.get('ADMIN_SESSION_IDLE_TIMEOUT', 24 * 60 * 60))
    
    # Uploaded media (None means <static folder>/uploads)
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER')
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    
    # Home page section sizes
    HOME_GALLERY_LIMIT = 6
    HOME_POSTS_LIMIT = 3
    
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
