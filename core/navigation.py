"""Navigation state and the role-dependent menu."""
import logging
from typing import List, MutableMapping, NamedTuple, Optional

from core.constants import (
    MENU_ADMIN_TOOLS,
    MENU_DASHBOARD,
    MENU_INVENTORY,
    MENU_ORDERS,
    MENU_STAFF,
    ROUTE_ADMIN_TOOLS,
    ROUTE_DASHBOARD,
    ROUTE_INVENTORY,
    ROUTE_LOGIN,
    ROUTE_ORDERS,
    ROUTE_STAFF,
)
from core.session import SessionStore

logger = logging.getLogger(__name__)


class Navigator:
    """Current route plus a back stack, kept in a dict-like state store.

    ``st.session_state`` is passed in by the app; tests use a plain dict.
    """

    ROUTE_KEY = "nav_route"
    HISTORY_KEY = "nav_history"

    def __init__(self, state: MutableMapping, default_route: str = ROUTE_DASHBOARD):
        self.state = state
        if self.ROUTE_KEY not in self.state:
            self.state[self.ROUTE_KEY] = default_route
        if self.HISTORY_KEY not in self.state:
            self.state[self.HISTORY_KEY] = []

    @property
    def current(self) -> str:
        return self.state[self.ROUTE_KEY]

    @property
    def history(self) -> List[str]:
        return list(self.state[self.HISTORY_KEY])

    def push(self, route: str) -> None:
        if route == self.current:
            return
        self.state[self.HISTORY_KEY] = self.history + [self.current]
        self.state[self.ROUTE_KEY] = route

    def replace(self, route: str) -> None:
        """Swap the current route without leaving a history entry."""
        self.state[self.ROUTE_KEY] = route

    def reset(self, route: str) -> None:
        """Start a fresh history at ``route``. Used when the session changes hands."""
        self.state[self.HISTORY_KEY] = []
        self.state[self.ROUTE_KEY] = route

    def can_go_back(self) -> bool:
        return bool(self.state[self.HISTORY_KEY])

    def back(self) -> Optional[str]:
        history = self.history
        if not history:
            return None
        route = history.pop()
        self.state[self.HISTORY_KEY] = history
        self.state[self.ROUTE_KEY] = route
        return route


class NavItem(NamedTuple):
    path: str
    label: str


BASE_NAV_ITEMS: List[NavItem] = [
    NavItem(ROUTE_DASHBOARD, MENU_DASHBOARD),
    NavItem(ROUTE_INVENTORY, MENU_INVENTORY),
    NavItem(ROUTE_ORDERS, MENU_ORDERS),
]
ADMIN_NAV_ITEMS: List[NavItem] = [
    NavItem(ROUTE_STAFF, MENU_STAFF),
    NavItem(ROUTE_ADMIN_TOOLS, MENU_ADMIN_TOOLS),
]


def nav_items(session: SessionStore) -> List[NavItem]:
    """Base items, plus the admin-only items for admins."""
    items = list(BASE_NAV_ITEMS)
    if session.is_admin():
        items.extend(ADMIN_NAV_ITEMS)
    return items


def active_item(items: List[NavItem], path: str) -> Optional[NavItem]:
    return next((item for item in items if item.path == path), None)


def logout(session: SessionStore, navigator: Navigator) -> None:
    """Clear the session and go to the login view."""
    identity = session.get_identity()
    session.clear_session()
    navigator.reset(ROUTE_LOGIN)
    logger.info("Logged out %s", identity.email if identity else "unknown user")
