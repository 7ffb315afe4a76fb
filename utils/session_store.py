import json
import logging

from models.staff import SessionUser

logger = logging.getLogger(__name__)

SESSION_KEY = 'rlh-session'


class SessionStore:
    """The signed-in staff member, kept as JSON text under one key."""

    def __init__(self, storage):
        self.storage = storage

    def load(self):
        raw = self.storage.get(SESSION_KEY)
        if not raw:
            return None

        try:
            return SessionUser.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning('Clearing corrupt session record: %s', e)
            self.clear()
            return None

    def save(self, user):
        if user is None:
            self.clear()
            return
        self.storage[SESSION_KEY] = json.dumps(user.to_dict())

    def clear(self):
        self.storage.pop(SESSION_KEY, None)
