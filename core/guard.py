"""Route guard.

The guard is advisory: it only keeps visitors away from views. The back end
stays the authority for every call, whatever the client shows.
"""
import logging
from typing import NamedTuple, Optional

from core.constants import ADMIN_ROUTES, ROUTE_DASHBOARD, ROUTE_LOGIN
from core.navigation import Navigator
from core.session import SessionStore

logger = logging.getLogger(__name__)


class GuardDecision(NamedTuple):
    allowed: bool
    redirect_to: Optional[str] = None


class RouteGuard:
    """Wraps a view: open to any authenticated user, or admin-only."""

    def __init__(self, session: SessionStore, admin_only: bool = False):
        self.session = session
        self.admin_only = admin_only

    def check(self) -> GuardDecision:
        if not self.session.is_authenticated():
            return GuardDecision(False, ROUTE_LOGIN)
        if self.admin_only and not self.session.is_admin():
            return GuardDecision(False, ROUTE_DASHBOARD)
        return GuardDecision(True)

    def enforce(self, navigator: Navigator) -> bool:
        """Redirect (replace) when not allowed. Returns True if the view may render."""
        decision = self.check()
        if not decision.allowed:
            logger.info("Guard redirect %s -> %s", navigator.current, decision.redirect_to)
            navigator.replace(decision.redirect_to)
        return decision.allowed


def guard_for(route: str, session: SessionStore) -> RouteGuard:
    """Build the guard configured for a protected route."""
    return RouteGuard(session, admin_only=route in ADMIN_ROUTES)
