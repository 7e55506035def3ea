"""
Session Manager

Server-side admin sessions. The browser only ever holds an opaque token
(inside Flask's signed session cookie); the user snapshot stays here.
"""

import logging
import secrets
import threading
import time

from flask_login import UserMixin

logger = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT = 24 * 60 * 60


class SessionUser(UserMixin):
    """Copy of the user fields taken at login time.

    Later changes to the users table do not touch an active session.
    """

    def __init__(self, id, username, role):
        self.id = id
        self.username = username
        self.role = role

    @classmethod
    def from_user(cls, user):
        return cls(id=user.id, username=user.username, role=user.role)

    def __eq__(self, other):
        if not isinstance(other, SessionUser):
            return NotImplemented
        return (self.id, self.username, self.role) == (other.id, other.username, other.role)

    def __hash__(self):
        return hash((self.id, self.username, self.role))

    def __repr__(self):
        return f'<SessionUser {self.username}>'


class SessionContext:
    """Per-request view of who is signed in, handed to admin views."""

    def __init__(self, token, user):
        self.token = token
        self.user = user

    @property
    def is_authenticated(self):
        return self.user is not None


class _SessionRecord:
    __slots__ = ('user', 'created_at', 'last_seen')

    def __init__(self, user, now):
        self.user = user
        self.created_at = now
        self.last_seen = now


class SessionManager:
    """In-memory token -> ``SessionUser`` store with an idle timeout."""

    def __init__(self, idle_timeout=DEFAULT_IDLE_TIMEOUT, clock=time.monotonic):
        self.idle_timeout = idle_timeout
        self._clock = clock
        self._sessions = {}
        self._lock = threading.Lock()

    def login(self, user):
        """Start a session for ``user`` and return its token."""
        token = secrets.token_urlsafe(32)
        now = self._clock()
        record = _SessionRecord(SessionUser.from_user(user), now)
        with self._lock:
            self._drop_expired(now)
            self._sessions[token] = record
        logger.info('Admin session started for %s', user.username)
        return token

    def _expired(self, record, now):
        return bool(self.idle_timeout) and now - record.last_seen > self.idle_timeout

    def _drop_expired(self, now):
        """Forget idle sessions whose tokens were never presented again. Caller holds the lock."""
        stale = [token for token, record in self._sessions.items() if self._expired(record, now)]
        for token in stale:
            del self._sessions[token]
        if stale:
            logger.info('Dropped %d idle admin session(s)', len(stale))

    def current_user(self, token):
        """Return the ``SessionUser`` for ``token`` or None."""
        if not token:
            return None
        now = self._clock()
        with self._lock:
            record = self._sessions.get(token)
            if record is None:
                return None
            if self._expired(record, now):
                del self._sessions[token]
                logger.info('Admin session for %s expired after inactivity', record.user.username)
                return None
            record.last_seen = now
            return record.user

    def logout(self, token):
        """Destroy the session. Unknown or already destroyed tokens are ignored."""
        if not token:
            return
        with self._lock:
            record = self._sessions.pop(token, None)
        if record is not None:
            logger.info('Admin session ended for %s', record.user.username)

    def context(self, token):
        return SessionContext(token, self.current_user(token))

    def __len__(self):
        with self._lock:
            return len(self._sessions)
