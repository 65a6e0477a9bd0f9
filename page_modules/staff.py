"""Staff management page - Admin only."""
import streamlit as st
from streamlit_free_text_select import st_free_text_select

from core.constants import ROLE_ADMIN, ROLES, STAFF_STATUSES
from core.context import page_controller
from core.controllers import StaffController
from ui.components import badge, confirm_box, render_notices

FORM_PREFIX = "staff_form_"


def _clear_form_state():
    for key in [k for k in st.session_state.keys() if str(k).startswith(FORM_PREFIX)]:
        del st.session_state[key]


def _render_form(controller: StaffController):
    draft = controller.draft
    editing = controller.editing_id is not None
    suffix = f"{controller.editing_id if editing else 'new'}"

    def key(field):
        return f"{FORM_PREFIX}{field}_{suffix}"

    with st.container(border=True):
        st.subheader("Edit Staff" if editing else "Add New Staff")
        name = st.text_input("Full Name", value=draft["name"], key=key("name"))
        email = st.text_input("Email", value=draft["email"], key=key("email"))
        password = st.text_input(
            "Password (leave blank to keep current)" if editing else "Password",
            type="password",
            key=key("password"),
        )
        phone = st.text_input("Phone Number", value=draft["phone_number"], key=key("phone"))
        col1, col2 = st.columns(2)
        with col1:
            designation = st.text_input("Designation", value=draft["designation"], key=key("designation"))
        with col2:
            departments = controller.departments
            department = st_free_text_select(
                "Department",
                departments,
                index=departments.index(draft["department"]) if draft["department"] in departments else None,
                key=key("department"),
                placeholder="Type to search or add",
            )
        col3, col4 = st.columns(2)
        rights = col3.selectbox(
            "Role", ROLES, index=ROLES.index(draft["rights"]) if draft["rights"] in ROLES else 0, key=key("rights")
        )
        status = col4.selectbox(
            "Status",
            STAFF_STATUSES,
            index=STAFF_STATUSES.index(draft["status"]) if draft["status"] in STAFF_STATUSES else 0,
            key=key("status"),
        )
        col_a, col_b = st.columns(2)
        submitted = col_a.button(
            "Update Staff" if editing else "Add Staff", type="primary", width="stretch"
        )
        cancelled = col_b.button("Cancel", key="staff_cancel", width="stretch")

    if cancelled:
        controller.reset_form()
        _clear_form_state()
        st.rerun()
    if submitted:
        with st.spinner("Saving..."):
            ok = controller.submit({
                "name": name,
                "email": email,
                "password": password,
                "phone_number": phone,
                "designation": designation,
                "department": (department or "").strip(),
                "rights": rights,
                "status": status,
            })
        if ok:
            _clear_form_state()
        st.rerun()


def render(ctx):
    """Render staff management page."""
    controller = page_controller(
        ctx, "staff", lambda: StaffController(ctx.api, ctx.session, ctx.lifetime)
    )
    render_notices(controller.pop_notices())

    col_title, col_add = st.columns([4, 1])
    with col_title:
        st.title("\U0001F465 Staff Management")
        st.caption("Manage your team members")
    with col_add:
        if st.button("➕ Add Staff", width="stretch"):
            _clear_form_state()
            controller.start_add()
            st.rerun()

    if controller.dialog_open:
        _render_form(controller)

    controller.search = st.text_input(
        "Search by name, email, or department...", value=controller.search
    )

    if controller.pending_delete is not None:
        decision = confirm_box("Are you sure you want to delete this staff member?", "staff_delete")
        if decision is True:
            with st.spinner("Deleting..."):
                controller.confirm_delete()
            st.rerun()
        elif decision is False:
            controller.cancel_delete()
            st.rerun()

    members = controller.filtered
    if not members:
        st.info("No staff members found")
        return

    for idx, member in enumerate(members):
        with st.container():
            col1, col2, col3, col4 = st.columns([3, 3, 2, 1])
            with col1:
                st.write(f"**{member.name}**")
                st.caption(member.email)
                st.caption(f"\U0001F4DE {member.phone_number or '-'}")
            with col2:
                st.caption(f"Department: {member.department or '-'}")
                st.caption(f"Designation: {member.designation or '-'}")
            with col3:
                role_class = "badge-primary" if member.rights == ROLE_ADMIN else "badge-muted"
                status_class = "badge-success" if member.status == "ACTIVE" else "badge-muted"
                st.markdown(
                    f"{badge(member.rights or '-', role_class)} {badge(member.status or '-', status_class)}",
                    unsafe_allow_html=True,
                )
            with col4:
                if st.button("✏️", key=f"staff_edit_{member.id}_{idx}"):
                    _clear_form_state()
                    controller.start_edit(member)
                    st.rerun()
                if st.button("\U0001F5D1️", key=f"staff_del_{member.id}_{idx}"):
                    controller.request_delete(member.id)
                    st.rerun()
            st.divider()

    st.header("\U0001F4CA Statistics")
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Staff", len(controller.members))
    col2.metric("Active", sum(1 for m in controller.members if m.status == "ACTIVE"))
    col3.metric("Admins", sum(1 for m in controller.members if m.rights == ROLE_ADMIN))
