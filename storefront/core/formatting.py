"""Display formatting for prices"""

from decimal import Decimal, ROUND_HALF_UP

CURRENCY_SYMBOL = "₫"


def format_price(price: float) -> str:
    """
    Format an amount in Vietnamese dong, e.g. 29990000 -> "29.990.000 ₫".

    Dong has no minor unit, so amounts are rounded to whole numbers,
    halves away from zero.
    """
    amount = int(Decimal(str(price)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    digits = f"{abs(amount):,}".replace(",", ".")
    sign = "-" if amount < 0 else ""
    return f"{sign}{digits} {CURRENCY_SYMBOL}"
