"""Reusable UI components."""
from html import escape
from typing import Iterable, List, Optional

import pandas as pd
import streamlit as st

from core.controllers import Notice
from core.schemas import InventoryItem, Order
from core.services import format_status, stock_tier

NOTICE_ICONS = {
    "success": "✅",
    "error": "❌",
    "info": "ℹ️",
}

ORDER_STATUS_BADGES = {
    "PLACED": "badge-success",
    "INSUFFICIENT_STOCK": "badge-warning",
    "CANCELLED": "badge-danger",
}

ORDER_STATUS_COLORS = {
    "PLACED": "#10b981",
    "INSUFFICIENT_STOCK": "#f59e0b",
    "CANCELLED": "#ef4444",
}


def render_notices(notices: Iterable[Notice]) -> None:
    """Show controller notices as transient toasts."""
    for notice in notices:
        st.toast(notice.text, icon=NOTICE_ICONS.get(notice.level, "ℹ️"))


def stat_card(container, title: str, value, caption: Optional[str] = None) -> None:
    html = (
        '<div class="stat-card">'
        f'<p class="stat-title">{escape(str(title))}</p>'
        f'<p class="stat-value">{escape(str(value))}</p>'
        "</div>"
    )
    container.markdown(html, unsafe_allow_html=True)
    if caption:
        container.caption(caption)


def badge(text: str, css_class: str = "badge-muted") -> str:
    return f'<span class="badge {css_class}">{escape(text)}</span>'


def money(value) -> str:
    return f"${(value or 0):,.2f}"


def render_inventory_table(items: List[InventoryItem], empty_text: str = "No items found") -> None:
    """Render inventory items with a stock-level column."""
    if not items:
        st.info(empty_text)
        return
    stock_labels = {"critical": "🔴", "warning": "🟠", "healthy": "🟢"}
    df = pd.DataFrame(
        [
            {
                "Product Name": item.product_name,
                "Model": item.model_name or "-",
                "Price/Unit": money(item.price_per_quantity),
                "Quantity": f"{stock_labels[stock_tier(item.unit)]} {item.unit} units",
                "Total Value": money(item.total_price),
                "Status": item.status or "Available",
            }
            for item in items
        ]
    )
    st.dataframe(df, width="stretch", hide_index=True)


def format_order_date(value: Optional[str]) -> str:
    dt = pd.to_datetime(value, errors="coerce")
    if pd.isna(dt):
        return "" if value is None else str(value)
    return dt.strftime("%d/%m/%Y")


def render_orders_table(orders: List[Order], empty_text: str = "No orders found") -> None:
    if not orders:
        st.info(empty_text)
        return
    df = pd.DataFrame(
        [
            {
                "Order ID": f"#{order.order_id}" if order.order_id is not None else "-",
                "Product": order.product_name,
                "Model": order.model_name or "",
                "Customer": order.customer_name or "",
                "Customer Email": order.customer_email or "",
                "Quantity": f"{order.quantity_ordered} units",
                "Total Amount": money(order.total_amount),
                "Status": format_status(order.order_status),
                "Date": format_order_date(order.order_date),
            }
            for order in orders
        ]
    )
    st.dataframe(df, width="stretch", hide_index=True)


def confirm_box(message: str, key: str):
    """Two-button confirmation. Returns True, False, or None while undecided."""
    st.warning(message)
    col1, col2, _ = st.columns([1, 1, 4])
    if col1.button("Yes, delete", key=f"{key}_yes", type="primary"):
        return True
    if col2.button("Cancel", key=f"{key}_no"):
        return False
    return None


def format_timestamp(value: Optional[str]) -> str:
    dt = pd.to_datetime(value, errors="coerce", utc=True)
    if pd.isna(dt):
        return "" if value is None else str(value)
    return dt.strftime("%d/%m/%Y %H:%M UTC")
