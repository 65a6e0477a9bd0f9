"""InvManager back-office dashboard - Main Application Entry Point."""
import logging

import streamlit as st

from core.api import ApiClient
from core.config import configure_logging, get_api_url
from core.constants import (
    PUBLIC_ROUTES,
    ROUTE_ADMIN_TOOLS,
    ROUTE_DASHBOARD,
    ROUTE_INVENTORY,
    ROUTE_LOGIN,
    ROUTE_ORDERS,
    ROUTE_REGISTER,
    ROUTE_STAFF,
)
from core.context import AppContext
from core.controllers import ViewLifetime
from core.guard import guard_for
from core.navigation import Navigator
from core.services import EmailLog
from core.session import SessionStore
from core.storage import SessionStateStorage
from core.styles import apply_styles
from ui.sidebar import render_sidebar_menu

# Import page render functions
from page_modules import admin_tools, dashboard, inventory, login, orders, register, staff

# Page configuration
st.set_page_config(
    page_title="InvManager",
    page_icon="📦",
    layout="wide",
)

configure_logging()
logger = logging.getLogger(__name__)

apply_styles()


# Shared API client (created once per server process)
@st.cache_resource
def get_api_client():
    logger.info("Using inventory API at %s", get_api_url())
    return ApiClient(get_api_url())


# Session and email log belong to this browser session only
storage = SessionStateStorage(st.session_state)
session = SessionStore(storage)
navigator = Navigator(st.session_state, default_route=ROUTE_DASHBOARD)
if "view_lifetime" not in st.session_state:
    st.session_state.view_lifetime = ViewLifetime()

# Page routing
pages = {
    ROUTE_LOGIN: login.render,
    ROUTE_REGISTER: register.render,
    ROUTE_DASHBOARD: dashboard.render,
    ROUTE_INVENTORY: inventory.render,
    ROUTE_ORDERS: orders.render,
    ROUTE_STAFF: staff.render,
    ROUTE_ADMIN_TOOLS: admin_tools.render,
}
if navigator.current not in pages:
    navigator.replace(ROUTE_DASHBOARD)

# Check authorization for protected routes (redirects replace the route)
route = navigator.current
if route not in PUBLIC_ROUTES and not guard_for(route, session).enforce(navigator):
    st.rerun()

new_visit = st.session_state.get("last_route") != route
st.session_state.last_route = route
if new_visit:
    # Leaving a page invalidates its pending fetches
    st.session_state.view_lifetime.end()

flash = st.session_state.pop("flash", None)
if flash:
    st.toast(flash, icon="✅")

ctx = AppContext(
    api=get_api_client(),
    session=session,
    navigator=navigator,
    lifetime=st.session_state.view_lifetime,
    email_log=EmailLog(storage),
    new_visit=new_visit,
)

if route not in PUBLIC_ROUTES:
    render_sidebar_menu(session, navigator)

pages[route](ctx)
