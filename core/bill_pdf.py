"""
Printable bill PDF. Content: venue name, bill number, KOT number and type,
customer, date, payment method and status, line table (SN, Item, Price,
Qty, Total), then total, service charge, tax, discount and final amount.
"""
from io import BytesIO

from django.conf import settings
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas as pdf_canvas


def bill_pdf_bytes(bill, title='Bill'):
    """
    Generate PDF bytes for a bill.
    bill: Bill with select_related('kot', 'generated_by'); KOT lines are read
    through kot.items with their menu items.
    """
    buf = BytesIO()
    c = pdf_canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f'{title} {bill.bill_number}')
    width, height = A4
    y = height - 40
    left = 50
    right_col = 350
    kot = bill.kot

    c.setFont('Helvetica-Bold', 14)
    c.drawString(left, y, getattr(settings, 'POS_VENUE_NAME', 'Restaurant'))
    y -= 18
    c.setFont('Helvetica', 9)
    c.drawString(left, y, f'KOT: {kot.kot_number} ({kot.get_type_display()})')
    y -= 12
    c.drawString(left, y, f'Customer: {kot.customer_name}')
    y -= 12
    cashier = bill.generated_by
    c.drawString(left, y, f'Billed by: {cashier.get_full_name() or cashier.username}')
    y -= 24

    c.setFont('Helvetica-Bold', 11)
    c.drawString(right_col, height - 40, f'{title}: {bill.bill_number}')
    c.setFont('Helvetica', 9)
    c.drawString(right_col, height - 54, f'Date: {bill.created_at.strftime("%Y-%m-%d %H:%M")}')
    status = 'paid' if bill.is_paid else 'unpaid'
    c.drawString(right_col, height - 68, f'Payment: {bill.get_payment_method_display() or "-"}  |  Status: {status}')

    c.setFont('Helvetica-Bold', 9)
    c.drawString(left, y, 'SN')
    c.drawString(left + 30, y, 'Item')
    c.drawString(280, y, 'Price')
    c.drawString(340, y, 'Qty')
    c.drawString(400, y, 'Total')
    y -= 14
    c.setFont('Helvetica', 9)

    for item in kot.items.select_related('menu_item').all():
        c.drawString(left, y, str(item.line_number))
        c.drawString(left + 30, y, item.menu_item.name[:35])
        c.drawString(280, y, str(item.unit_price))
        c.drawString(340, y, str(item.quantity))
        c.drawString(400, y, str(item.total_price))
        y -= 12
        if y < 140:
            c.showPage()
            y = height - 40
            c.setFont('Helvetica', 9)

    y -= 8
    c.drawString(right_col, y, f'Total: {bill.total_amount}')
    y -= 12
    c.drawString(right_col, y, f'Service charge: {bill.service_charge}')
    y -= 12
    c.drawString(right_col, y, f'Tax: {bill.tax}')
    y -= 12
    if bill.discount:
        c.drawString(right_col, y, f'Discount: -{bill.discount}')
        y -= 12
    c.setFont('Helvetica-Bold', 10)
    c.drawString(right_col, y, f'Final amount: {bill.final_amount}')

    c.showPage()
    c.save()
    buf.seek(0)
    return buf.getvalue()
