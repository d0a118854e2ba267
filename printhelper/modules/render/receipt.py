"""Fixed receipt document used for test prints."""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from html import escape

VAT_RATE = Decimal("0.18")
CURRENCY = "TL"


@dataclass(frozen=True)
class ReceiptLine:
    name: str
    quantity: int
    amount: Decimal


DEFAULT_LINES = (
    ReceiptLine("Bread", 2, Decimal("6.00")),
    ReceiptLine("Milk 1L", 1, Decimal("12.50")),
    ReceiptLine("Tomatoes 1kg", 1, Decimal("15.00")),
    ReceiptLine("Cheese 500g", 1, Decimal("45.00")),
)

RECEIPT_CSS = """
body {
    font-family: 'Courier New', monospace;
    font-size: 12pt;
    margin: 10mm;
    line-height: 1.2;
    width: 70mm;
}
.center { text-align: center; }
.bold { font-weight: bold; }
.line { border-top: 1px dashed #000; margin: 5px 0; }
.total { font-size: 14pt; font-weight: bold; }
.row { display: flex; justify-content: space-between; }
@page { size: 80mm 200mm; margin: 5mm; }
"""


def _money(value: Decimal) -> str:
    return f"{value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)} {CURRENCY}"


def build_receipt_html(
    receipt_no: str,
    issued_at: datetime | None = None,
    lines: tuple[ReceiptLine, ...] = DEFAULT_LINES,
    footer: str = "Thank you!",
) -> str:
    """Render the receipt markup. ``receipt_no`` is printed verbatim."""
    issued_at = issued_at or datetime.now()
    subtotal = sum((line.amount for line in lines), Decimal("0"))
    vat = (subtotal * VAT_RATE).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    total = subtotal + vat

    items = "\n".join(
        f'<div class="row"><span>{escape(line.name)} x{line.quantity}</span>'
        f"<span>{_money(line.amount)}</span></div>"
        for line in lines
    )

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <style>{RECEIPT_CSS}</style>
</head>
<body>
    <div class="center bold">MARKET RECEIPT</div>
    <div class="line"></div>
    <div>Date: {issued_at:%d.%m.%Y}</div>
    <div>Time: {issued_at:%H:%M:%S}</div>
    <div>Receipt No: {escape(receipt_no)}</div>
    <div class="line"></div>
    <div class="bold">ITEMS:</div>
    {items}
    <div class="line"></div>
    <div class="row"><span>Subtotal:</span><span>{_money(subtotal)}</span></div>
    <div class="row"><span>VAT ({int(VAT_RATE * 100)}%):</span><span>{_money(vat)}</span></div>
    <div class="line"></div>
    <div class="total center">TOTAL: {_money(total)}</div>
    <div class="line"></div>
    <div class="center">{escape(footer)}</div>
</body>
</html>"""
