"""Inventory management page."""
import streamlit as st

from core.context import page_controller
from core.controllers import InventoryController
from core.exports import inventory_frame, to_excel_bytes, to_pdf_bytes
from ui.components import confirm_box, money, render_inventory_table, render_notices


def _render_form(controller: InventoryController):
    draft = controller.draft
    editing = controller.editing_id is not None
    with st.container(border=True):
        st.subheader("Edit Item" if editing else "Add New Item")
        with st.form("inventory_item_form", clear_on_submit=False):
            product_name = st.text_input("Product Name", value=draft["product_name"])
            model_name = st.text_input("Model Name", value=draft["model_name"])
            col1, col2 = st.columns(2)
            price = col1.text_input("Price per Unit", value=draft["price_per_quantity"], placeholder="0.00")
            unit = col2.text_input("Quantity", value=draft["unit"], placeholder="0")
            status = st.text_input("Status", value=draft["status"])
            col_a, col_b = st.columns(2)
            submitted = col_a.form_submit_button(
                "Update Item" if editing else "Add Item", type="primary", width="stretch"
            )
            cancelled = col_b.form_submit_button("Cancel", width="stretch")

    if cancelled:
        controller.reset_form()
        st.rerun()
    if submitted:
        with st.spinner("Saving..."):
            controller.submit({
                "product_name": product_name,
                "model_name": model_name,
                "price_per_quantity": price,
                "unit": unit,
                "status": status,
            })
        st.rerun()


def _render_exports(controller: InventoryController, items):
    st.subheader("Export")
    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("\U0001F4E5 Export CSV", width="stretch"):
            with st.spinner("Exporting..."):
                st.session_state["inventory_csv"] = controller.export_csv()
            st.rerun()
        exported = st.session_state.get("inventory_csv")
        if exported:
            filename, content = exported
            st.download_button(
                f"Download {filename}",
                data=content,
                file_name=filename,
                mime="text/csv",
                width="stretch",
            )
    if not items:
        return
    # Exports of the current (filtered) view
    df = inventory_frame(items)
    with col2:
        st.download_button(
            "Export to Excel",
            data=to_excel_bytes(df),
            file_name="inventory_export.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            width="stretch",
        )
    with col3:
        st.download_button(
            "Export to PDF",
            data=to_pdf_bytes(df),
            file_name="inventory_export.pdf",
            mime="application/pdf",
            width="stretch",
        )


def render(ctx):
    """Render the inventory page."""
    if ctx.new_visit:
        st.session_state.pop("inventory_csv", None)
    controller = page_controller(
        ctx, "inventory", lambda: InventoryController(ctx.api, ctx.session, ctx.lifetime)
    )
    render_notices(controller.pop_notices())

    col_title, col_add = st.columns([4, 1])
    with col_title:
        st.header("\U0001F4E6 Inventory Management")
        st.caption("Manage your product inventory")
    with col_add:
        if st.button("➕ Add Item", width="stretch"):
            controller.start_add()
            st.rerun()

    if controller.dialog_open:
        _render_form(controller)

    controller.search = st.text_input(
        "Search by product or model name...", value=controller.search
    )
    items = controller.filtered
    render_inventory_table(items)

    if controller.pending_delete is not None:
        decision = confirm_box("Are you sure you want to delete this item?", "inventory_delete")
        if decision is True:
            with st.spinner("Deleting..."):
                controller.confirm_delete()
            st.rerun()
        elif decision is False:
            controller.cancel_delete()
            st.rerun()

    if items:
        st.caption("Edit or delete an item")
        for idx, item in enumerate(items):
            col1, col2, col3 = st.columns([10, 1, 1])
            with col1:
                st.text(f"{item.product_name} - {item.model_name or '-'} - {item.unit} units - {money(item.total_price)}")
            with col2:
                if st.button("✏️", key=f"inv_edit_{item.product_id}_{idx}"):
                    controller.start_edit(item)
                    st.rerun()
            with col3:
                if st.button("\U0001F5D1️", key=f"inv_del_{item.product_id}_{idx}"):
                    controller.request_delete(item.product_id)
                    st.rerun()

    st.divider()
    _render_exports(controller, items)
