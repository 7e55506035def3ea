"""
Services Package

Exports all services for easy importing.
"""

from snackbar.services.auth import AuthFailure, CredentialStore, hash_password
from snackbar.services.sessions import SessionManager, SessionContext, SessionUser
from snackbar.services.repository import ContentRepository, WriteResult, get_repository
from snackbar.services.seed import initialize_database, initialize_schema, seed_defaults
from snackbar.services.uploads import UploadStore

__all__ = [
    'AuthFailure',
    'CredentialStore',
    'hash_password',
    'SessionManager',
    'SessionContext',
    'SessionUser',
    'ContentRepository',
    'WriteResult',
    'get_repository',
    'initialize_database',
    'initialize_schema',
    'seed_defaults',
    'UploadStore',
]
