"""Session store: the current identity and bearer token in persistent storage."""
import json
import logging
from typing import Optional

from pydantic import ValidationError

from core.constants import ROLE_ADMIN, STORAGE_TOKEN_KEY, STORAGE_USER_KEY
from core.schemas import Identity
from core.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class SessionStore:
    """Holds one session per storage; overwritten on login, cleared on logout.

    No network calls and no token validation: token presence is the only
    authentication signal. An expired token surfaces as a failed API call.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def set_session(self, identity: Identity) -> None:
        """Persist identity and token, replacing any previous session."""
        self.storage.set_item(STORAGE_USER_KEY, json.dumps(identity.model_dump()))
        self.storage.set_item(STORAGE_TOKEN_KEY, identity.token)

    def get_identity(self) -> Optional[Identity]:
        raw = self.storage.get_item(STORAGE_USER_KEY)
        if not raw:
            return None
        try:
            return Identity.model_validate(json.loads(raw))
        except (ValueError, ValidationError):
            logger.warning("Stored user record is unreadable; ignoring it")
            return None

    def get_token(self) -> Optional[str]:
        token = self.storage.get_item(STORAGE_TOKEN_KEY)
        return token or None

    def clear_session(self) -> None:
        self.storage.remove_item(STORAGE_USER_KEY)
        self.storage.remove_item(STORAGE_TOKEN_KEY)

    def is_authenticated(self) -> bool:
        return bool(self.get_token())

    def is_admin(self) -> bool:
        identity = self.get_identity()
        return identity is not None and identity.role == ROLE_ADMIN
