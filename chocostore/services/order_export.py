# chocostore/services/order_export.py
import io
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from chocostore.models.order import Order

EXPORT_COLUMNS = [
    "Order ID",
    "Customer Name",
    "Customer Email",
    "Customer Phone",
    "City",
    "Pincode",
    "Subtotal",
    "Delivery Charge",
    "Total Amount",
    "Status",
    "Date",
]


def export_orders_xlsx(orders: Iterable[Order]) -> io.BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = "Orders"

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill("solid", fgColor="5C3317")
    thin = Border(
        left=Side(style="thin"),
        right=Side(style="thin"),
        top=Side(style="thin"),
        bottom=Side(style="thin"),
    )
    center = Alignment(horizontal="center", vertical="center")
    currency = "#,##0.00"

    ws.append(EXPORT_COLUMNS)
    for cell in ws[1]:
        cell.font = header_font
        cell.fill = header_fill
        cell.border = thin
        cell.alignment = center

    for o in orders:
        ws.append([
            o.order_number,
            o.customer_name,
            o.customer_email,
            o.customer_phone,
            o.city,
            o.pincode,
            float(o.subtotal),
            float(o.delivery_charge),
            float(o.total_amount),
            o.status,
            o.created_at.date().isoformat(),
        ])

    for row in ws.iter_rows(min_row=2):
        for cell in row[6:9]:
            cell.number_format = currency
        for cell in row:
            cell.border = thin

    # auto width, at least 15 characters
    for index, title in enumerate(EXPORT_COLUMNS, start=1):
        letter = ws.cell(row=1, column=index).column_letter
        ws.column_dimensions[letter].width = max(len(title), 15)

    buffer = io.BytesIO()
    wb.save(buffer)
    buffer.seek(0)
    return buffer
