"""Excel and PDF exports of the inventory table currently on screen."""
from io import BytesIO
from typing import Iterable

import pandas as pd
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table as XlTable, TableStyleInfo as XlTableStyleInfo
from reportlab.lib import colors
from reportlab.lib.pagesizes import landscape, letter
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle

from core.schemas import InventoryItem

EXPORT_COLUMNS = {
    "product_name": "Product Name",
    "model_name": "Model",
    "price_per_quantity": "Price/Unit",
    "unit": "Quantity",
    "total_price": "Total Value",
    "status": "Status",
}


def inventory_frame(items: Iterable[InventoryItem]) -> pd.DataFrame:
    """Inventory items as a DataFrame with friendly column names."""
    rows = [item.model_dump() for item in items]
    df = pd.DataFrame(rows, columns=["product_id"] + list(EXPORT_COLUMNS))
    df = df[list(EXPORT_COLUMNS)].rename(columns=EXPORT_COLUMNS)
    return df


def to_excel_bytes(df: pd.DataFrame, sheet_name: str = "inventory") -> bytes:
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
        ws = writer.sheets[sheet_name]
        max_col = len(df.columns)
        max_row = len(df) + 1
        # A table needs at least one data row
        if max_col and max_row > 1:
            last_col = get_column_letter(max_col)
            table = XlTable(displayName="InventoryExport", ref=f"A1:{last_col}{max_row}")
            table.tableStyleInfo = XlTableStyleInfo(
                name="TableStyleMedium9",
                showFirstColumn=False,
                showLastColumn=False,
                showRowStripes=True,
                showColumnStripes=False,
            )
            ws.add_table(table)
        for idx, col_name in enumerate(df.columns, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = max(12, len(str(col_name)) + 2)
    return buf.getvalue()


def to_pdf_bytes(df: pd.DataFrame) -> bytes:
    buf = BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=landscape(letter))
    data = [list(df.columns)] + df.fillna("").astype(str).values.tolist()
    table = Table(data)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ]
        )
    )
    doc.build([table])
    return buf.getvalue()
