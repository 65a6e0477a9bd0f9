"""Orders page: place orders and track their status."""
import streamlit as st

from core.constants import ORDER_FILTER_LABELS
from core.context import page_controller
from core.controllers import OrdersController
from ui.components import render_notices, render_orders_table


def _render_form(controller: OrdersController):
    draft = controller.draft
    with st.container(border=True):
        st.subheader("Place New Order")
        with st.form("place_order_form", clear_on_submit=False):
            product_name = st.text_input("Product Name", value=draft["product_name"])
            model_name = st.text_input("Model Name", value=draft["model_name"])
            quantity = st.text_input("Quantity", value=draft["quantity_ordered"], placeholder="1")
            customer_name = st.text_input("Customer Name", value=draft["customer_name"])
            customer_email = st.text_input("Customer Email", value=draft["customer_email"])
            col_a, col_b = st.columns(2)
            submitted = col_a.form_submit_button("Place Order", type="primary", width="stretch")
            cancelled = col_b.form_submit_button("Cancel", width="stretch")

    if cancelled:
        controller.reset_form()
        st.rerun()
    if submitted:
        with st.spinner("Placing order..."):
            controller.submit({
                "product_name": product_name,
                "model_name": model_name,
                "quantity_ordered": quantity,
                "customer_name": customer_name,
                "customer_email": customer_email,
            })
        st.rerun()


def render(ctx):
    """Render the orders page."""
    controller = page_controller(
        ctx, "orders", lambda: OrdersController(ctx.api, ctx.session, ctx.lifetime)
    )
    render_notices(controller.pop_notices())

    col_title, col_add = st.columns([4, 1])
    with col_title:
        st.header("\U0001F6D2 Orders Management")
        st.caption("Track and manage customer orders")
    with col_add:
        if st.button("➕ Place Order", width="stretch"):
            controller.dialog_open = True
            st.rerun()

    if controller.dialog_open:
        _render_form(controller)

    filters = list(ORDER_FILTER_LABELS)
    controller.status_filter = st.selectbox(
        "Filter by status",
        filters,
        index=filters.index(controller.status_filter),
        format_func=lambda value: ORDER_FILTER_LABELS[value],
    )
    render_orders_table(controller.filtered)
