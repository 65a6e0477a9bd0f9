"""Sidebar shell: navigation rail, identity summary and logout."""
import streamlit as st

from core.constants import ROLE_ADMIN
from core.navigation import Navigator, active_item, logout, nav_items
from core.session import SessionStore


def _icon(label: str) -> str:
    return label.split(" ", 1)[0]


def render_sidebar_menu(session: SessionStore, navigator: Navigator) -> None:
    """Render the navigation rail. Admin items appear for admins only."""
    if "sidebar_open" not in st.session_state:
        st.session_state.sidebar_open = True
    expanded = st.session_state.sidebar_open

    toggle_label = "✖ Collapse" if expanded else "☰"
    if st.sidebar.button(toggle_label, key="sidebar_toggle"):
        st.session_state.sidebar_open = not expanded
        st.rerun()

    if expanded:
        st.sidebar.markdown("### 📦 InvManager")

    items = nav_items(session)
    current = active_item(items, navigator.current)
    for item in items:
        is_active = current is not None and item.path == current.path
        label = item.label if expanded else _icon(item.label)
        if st.sidebar.button(
            label,
            key=f"nav_{item.path}",
            type="primary" if is_active else "secondary",
            width="stretch",
        ):
            navigator.push(item.path)
            st.rerun()

    if navigator.can_go_back():
        if st.sidebar.button("← Back" if expanded else "←", key="nav_back"):
            navigator.back()
            st.rerun()

    st.sidebar.markdown("---")
    render_user_summary(session, navigator, expanded)


def render_user_summary(session: SessionStore, navigator: Navigator, expanded: bool) -> None:
    identity = session.get_identity()
    if expanded and identity is not None:
        initial = (identity.name or "?")[:1].upper()
        role_label = "Admin" if identity.role == ROLE_ADMIN else "Staff"
        st.sidebar.markdown(f"**{initial} · {identity.name}**")
        st.sidebar.caption(identity.email)
        st.sidebar.caption(f"Role: {role_label}")

    if st.sidebar.button("🚪 Logout" if expanded else "🚪", key="sidebar_logout"):
        logout(session, navigator)
        st.session_state["flash"] = "Logged out successfully"
        st.rerun()
