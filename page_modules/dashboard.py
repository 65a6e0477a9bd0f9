"""Dashboard page with inventory and order overview."""
import pandas as pd
import plotly.express as px
import streamlit as st

from core.context import page_controller
from core.controllers import DashboardController
from core.services import format_status
from ui.components import (
    ORDER_STATUS_BADGES,
    ORDER_STATUS_COLORS,
    badge,
    money,
    render_notices,
    stat_card,
)


def render(ctx):
    """Render the dashboard page."""
    controller = page_controller(
        ctx, "dashboard", lambda: DashboardController(ctx.api, ctx.session, ctx.lifetime)
    )
    render_notices(controller.pop_notices())

    st.header("\U0001F4C8 Dashboard Overview")
    st.caption("Welcome back! Here's what's happening today.")

    stats = controller.stats
    col1, col2, col3, col4 = st.columns(4)
    stat_card(col1, "Total Items", stats["total_items"])
    stat_card(col2, "Total Orders", stats["total_orders"])
    stat_card(col3, "Total Value", f"${stats['total_value']:,}")
    stat_card(col4, "Low Stock Items", stats["low_stock"])

    st.markdown("---")
    left, right = st.columns(2)

    # Top 5 products by stock (Bar chart)
    with left:
        st.subheader("\U0001F4CA Top 5 Products by Stock")
        top = controller.top_products
        if top:
            chart_df = pd.DataFrame(
                {
                    "name": [(item.product_name or "Unknown")[:10] for item in top],
                    "stock": [item.unit for item in top],
                    "value": [item.total_price or 0 for item in top],
                }
            )
            fig = px.bar(
                chart_df,
                x="name",
                y="stock",
                labels={"name": "Product", "stock": "Units"},
                hover_data=["value"],
            )
            st.plotly_chart(fig, width="stretch")
        else:
            st.info("No products to display")

    # Order status distribution (Pie chart)
    with right:
        st.subheader("\U0001F6D2 Order Status Distribution")
        counts = controller.status_counts
        if sum(counts.values()) > 0:
            status_df = pd.DataFrame(
                {"status": [format_status(s) for s in counts], "orders": list(counts.values())}
            )
            fig = px.pie(
                status_df,
                values="orders",
                names="status",
                color="status",
                color_discrete_map={format_status(s): c for s, c in ORDER_STATUS_COLORS.items()},
            )
            st.plotly_chart(fig, width="stretch")
        else:
            st.info("No orders yet")

    st.subheader("\U0001F501 Recent Orders")
    recent = controller.recent_orders
    if not recent:
        st.info("No recent orders")
        return
    for order in recent:
        col1, col2 = st.columns([4, 1])
        with col1:
            st.write(f"**{order.product_name}**")
            st.caption(order.customer_name or "")
        with col2:
            st.write(f"**{money(order.total_amount)}**")
            st.markdown(
                badge(order.order_status or "", ORDER_STATUS_BADGES.get(order.order_status, "badge-muted")),
                unsafe_allow_html=True,
            )
        st.divider()
