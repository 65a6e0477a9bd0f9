"""Account registration page."""
import streamlit as st

from core.constants import ROLES, ROUTE_LOGIN
from core.controllers import RegisterController
from ui.components import render_notices


def render(ctx):
    """Display the sign-up form."""
    if "register_controller" not in st.session_state:
        st.session_state.register_controller = RegisterController(ctx.api)
    controller = st.session_state.register_controller
    render_notices(controller.pop_notices())

    st.markdown("### \U0001F4DD Create Account")
    st.caption("Join our inventory management system")
    draft = controller.draft
    with st.form("register_form", clear_on_submit=False):
        col1, col2 = st.columns(2)
        name = col1.text_input("Full Name", value=draft["name"], placeholder="John Doe")
        email = col2.text_input("Email", value=draft["email"], placeholder="john@example.com")
        password = col1.text_input("Password", type="password")
        phone = col2.text_input("Phone Number", value=draft["phone_number"])
        designation = col1.text_input("Designation", value=draft["designation"])
        department = col2.text_input("Department", value=draft["department"])
        rights = st.selectbox(
            "Role",
            ROLES,
            index=ROLES.index(draft["rights"]) if draft["rights"] in ROLES else 0,
        )
        submit = st.form_submit_button(
            "Creating account..." if controller.submitting else "Create Account",
            width="stretch",
            disabled=controller.submitting,
        )

    if submit:
        with st.spinner("Creating account..."):
            ok = controller.submit({
                "name": name,
                "email": email,
                "password": password,
                "phone_number": phone,
                "designation": designation,
                "department": department,
                "rights": rights,
            })
        if ok:
            ctx.navigator.push(ROUTE_LOGIN)
            # The login page shows the confirmation
            st.session_state["flash"] = "Registration successful! Please login."
            controller.pop_notices()
        st.rerun()

    if st.button("\U0001F510 Already have an account? Login here"):
        ctx.navigator.push(ROUTE_LOGIN)
        st.rerun()
