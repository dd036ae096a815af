from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def format_currency(value: Decimal) -> str:
    cents = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    # Avoid printing "-0.00" for dust.
    if cents == 0:
        cents = abs(cents)
    return f"{cents:.2f}"


def format_signed_currency(value: Decimal) -> str:
    text = format_currency(value)
    if text.startswith("-") or text == "0.00":
        return text
    return f"+{text}"
