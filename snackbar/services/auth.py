"""
Credential Store

Verifies admin login attempts against the salted password hashes kept
in the users table.
"""

import logging

from werkzeug.security import generate_password_hash, check_password_hash

from snackbar.models import User

logger = logging.getLogger(__name__)

HASH_METHOD = 'pbkdf2:sha256'

# Compared against when the username is unknown so both failure paths do the same work
_DUMMY_HASH = generate_password_hash('not-a-real-password', method=HASH_METHOD)


class AuthFailure(Exception):
    """Login rejected. Deliberately carries no detail about which field was wrong."""

    def __init__(self):
        super().__init__('invalid credentials')


def hash_password(password):
    """Return a salted hash suitable for ``User.password``."""
    return generate_password_hash(password, method=HASH_METHOD)


class CredentialStore:
    """Looks up users by exact username and checks their password hash."""

    def __init__(self, session):
        self.session = session

    def find_user(self, username):
        return self.session.query(User).filter(User.username == username).first()

    def verify(self, username, password):
        """Return the matching ``User`` or raise ``AuthFailure``.

        The lookup is case-sensitive. Unknown users and wrong passwords
        raise the same exception.
        """
        user = self.find_user(username) if username else None
        stored_hash = user.password if user is not None else _DUMMY_HASH
        password_ok = check_password_hash(stored_hash, password or '')
        if user is None or not password_ok:
            logger.warning('Rejected admin login for %r', username)
            raise AuthFailure()
        return user
