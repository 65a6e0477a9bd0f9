"""Admin tools: email center, low stock alerts and email history."""
import streamlit as st

from core.constants import LOW_STOCK_THRESHOLD
from core.context import page_controller
from core.controllers import AdminToolsController
from core.services import low_stock_label
from ui.components import badge, format_timestamp, money, render_notices, stat_card


def _render_email_center(controller: AdminToolsController):
    st.subheader("✉️ Email Communication Center")
    st.caption("Send emails to staff and suppliers")
    draft = controller.email_draft
    with st.form("send_email_form", clear_on_submit=False):
        recipient = st.text_input("Recipient Email", value=draft["recipient"], placeholder="recipient@example.com")
        subject = st.text_input("Subject", value=draft["subject"], placeholder="Email subject")
        message = st.text_area("Message", value=draft["message"], height=220, placeholder="Type your message here...")
        col1, col2 = st.columns(2)
        send = col1.form_submit_button(
            "Sending..." if controller.sending else "\U0001F4E8 Send Email",
            type="primary",
            disabled=controller.sending,
            width="stretch",
        )
        load_alert = col2.form_submit_button("⚠️ Load Low Stock Alert", width="stretch")

    if load_alert:
        controller.load_low_stock_alert()
        st.rerun()
    if send:
        with st.spinner("Sending..."):
            controller.send_email({"recipient": recipient, "subject": subject, "message": message})
        st.rerun()


def _render_low_stock(controller: AdminToolsController):
    items = controller.low_stock
    col1, col2, col3 = st.columns(3)
    stat_card(col1, "Low Stock Items", len(items))
    stat_card(col2, "Total Units", controller.low_stock_units)
    stat_card(col3, "Total Value", money(controller.low_stock_value))

    col_title, col_btn = st.columns([4, 1])
    with col_title:
        st.subheader("\U0001F6A8 Low Stock Alert")
        st.caption(f"Items with less than {LOW_STOCK_THRESHOLD} units in stock")
    with col_btn:
        if st.button("✉️ Create Alert Email", width="stretch"):
            controller.load_low_stock_alert()
            st.rerun()

    if not items:
        st.info("No low stock items - All inventory levels are healthy!")
        return

    header = st.columns([3, 2, 2, 2, 2, 1])
    for col, title in zip(header, ["Product Name", "Model", "Current Stock", "Price/Unit", "Total Value", "Status"]):
        col.markdown(f"**{title}**")
    for item in items:
        label = low_stock_label(item.unit)
        css = "badge-danger" if label == "Critical" else "badge-warning"
        row = st.columns([3, 2, 2, 2, 2, 1])
        row[0].write(item.product_name)
        row[1].write(item.model_name or "-")
        row[2].markdown(badge(f"{item.unit} units", css), unsafe_allow_html=True)
        row[3].write(money(item.price_per_quantity))
        row[4].write(money(item.total_price))
        row[5].markdown(badge(label, css), unsafe_allow_html=True)


def _render_history(controller: AdminToolsController):
    st.subheader("\U0001F4DC Email History")
    st.caption("View all sent emails and their status")
    records = controller.sent_emails
    if not records:
        st.info("No emails sent yet. Emails you send will appear here.")
        return
    for record in records:
        with st.container(border=True):
            sent = record.status == "success"
            st.markdown(
                f"✉️ **{record.recipient}** "
                + badge("Sent" if sent else "Failed", "badge-success" if sent else "badge-danger"),
                unsafe_allow_html=True,
            )
            st.write(f"**{record.subject}**")
            preview = record.message if len(record.message) <= 200 else record.message[:200] + "..."
            st.caption(preview)
            st.caption(f"\U0001F552 {format_timestamp(record.sent_at)}")


def render(ctx):
    """Render the admin tools page."""
    controller = page_controller(
        ctx,
        "admin_tools",
        lambda: AdminToolsController(ctx.api, ctx.session, ctx.email_log, ctx.lifetime),
    )
    render_notices(controller.pop_notices())

    st.title("⚙️ Admin Tools")
    st.caption("Advanced features for administrators")

    email_tab, low_stock_tab, history_tab = st.tabs(["Email Center", "Low Stock", "Email History"])
    with email_tab:
        _render_email_center(controller)
    with low_stock_tab:
        _render_low_stock(controller)
    with history_tab:
        _render_history(controller)
