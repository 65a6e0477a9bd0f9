"""Client-side key-value storage shared by the session store and the email log.

Values are strings, like browser ``localStorage``. Storage is scoped to one
browser session: the app backs it with ``st.session_state``, so two browsers
never see each other's session or email log.
"""
import logging
from typing import Dict, MutableMapping, Optional

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """Minimal storage interface."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    """In-process storage, used by tests and as a scratch store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class SessionStateStorage(MemoryStorage):
    """Storage kept inside a per-browser state mapping.

    ``st.session_state`` is passed in by the app; tests use a plain dict.
    The values live under one namespace key so they survive reruns and are
    dropped with the browser session.
    """

    NAMESPACE = "client_storage"

    def __init__(self, state: MutableMapping, namespace: str = NAMESPACE):
        if not isinstance(state.get(namespace), dict):
            if namespace in state:
                logger.warning("Discarding unreadable client storage under %s", namespace)
            state[namespace] = {}
        self._data = state[namespace]
