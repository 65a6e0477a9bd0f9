"""Per-run application context handed to every page renderer."""
from typing import Callable, NamedTuple

import streamlit as st

from core.api import ApiClient
from core.controllers import ViewLifetime
from core.navigation import Navigator
from core.services import EmailLog
from core.session import SessionStore


class AppContext(NamedTuple):
    api: ApiClient
    session: SessionStore
    navigator: Navigator
    lifetime: ViewLifetime
    email_log: EmailLog
    # True on the first run after navigating to the current route
    new_visit: bool


def page_controller(ctx: AppContext, key: str, factory: Callable):
    """Return the controller for this page visit, fetching on entry.

    A fresh controller is built for each visit, so drafts and filters do not
    survive leaving the page and every navigation re-fetches.
    """
    state_key = f"controller_{key}"
    controller = st.session_state.get(state_key)
    if controller is None or ctx.new_visit:
        controller = factory()
        st.session_state[state_key] = controller
        with st.spinner("Loading..."):
            controller.enter()
    return controller
