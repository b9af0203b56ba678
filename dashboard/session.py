"""Session credential storage (token + user record under fixed keys)."""
import json
import logging
from typing import MutableMapping, Optional

from dashboard.config import TOKEN_KEY, USER_KEY

logger = logging.getLogger(__name__)


class SessionStore:
    """Get/set/clear access to the persisted session credential.

    ``storage`` is any mutable mapping: a plain dict in tests and scripts,
    ``st.session_state`` inside the Streamlit app. The user record is kept
    as JSON text, the same shape the browser build keeps in localStorage.
    """

    def __init__(self, storage: Optional[MutableMapping] = None):
        self.storage = storage if storage is not None else {}

    def get_token(self) -> Optional[str]:
        return self.storage.get(TOKEN_KEY) or None

    def get_user(self) -> Optional[dict]:
        raw = self.storage.get(USER_KEY)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding unreadable %s entry", USER_KEY)
            self.storage.pop(USER_KEY, None)
            return None

    def set(self, token: str, user: dict):
        self.storage[TOKEN_KEY] = token
        self.storage[USER_KEY] = json.dumps(user)

    def clear(self) -> bool:
        """Remove both entries. Returns True only if something was removed."""
        removed_token = self.storage.pop(TOKEN_KEY, None)
        removed_user = self.storage.pop(USER_KEY, None)
        return removed_token is not None or removed_user is not None

    @property
    def is_authenticated(self) -> bool:
        return self.get_token() is not None
