"""Login page."""
import streamlit as st

from core.constants import ROUTE_DASHBOARD, ROUTE_REGISTER
from core.controllers import LoginController
from ui.components import render_notices


def render(ctx):
    """Display the login form."""
    if "login_controller" not in st.session_state:
        st.session_state.login_controller = LoginController(ctx.api, ctx.session)
    controller = st.session_state.login_controller
    render_notices(controller.pop_notices())

    st.markdown("### \U0001F510 Login")
    st.caption("Sign in to manage your inventory")
    with st.form("login_form", clear_on_submit=False):
        username = st.text_input("Username or email")
        password = st.text_input("Password", type="password")
        submit = st.form_submit_button("Login", width="stretch")

    if submit:
        with st.spinner("Signing in..."):
            ok = controller.submit(username, password)
        if ok:
            welcome = controller.pop_notices()
            if welcome:
                st.session_state["flash"] = welcome[-1].text
            ctx.navigator.reset(ROUTE_DASHBOARD)
        st.rerun()

    if st.button("\U0001F4DD Don't have an account? Sign up here"):
        ctx.navigator.push(ROUTE_REGISTER)
        st.rerun()
