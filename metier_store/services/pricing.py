# metier_store/services/pricing.py
"""
Order totals for a cart subtotal.

    shipping = 0 when subtotal >= FREE_SHIPPING_THRESHOLD, else FLAT_SHIPPING_FEE
    tax      = subtotal * TAX_RATE
    total    = subtotal + shipping + tax

Every derived amount is quantized to cents (ROUND_HALF_UP) before it is
summed, so totals never carry fractional cents.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from metier_store.config import settings
from metier_store.schemas.checkout_schemas import OrderTotals

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_money(value: Number) -> Decimal:
    # floats go through str() so 0.1 stays 0.1
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def shipping_fee(
    subtotal: Number,
    *,
    threshold: Optional[Decimal] = None,
    flat_fee: Optional[Decimal] = None,
) -> Decimal:
    threshold = settings.FREE_SHIPPING_THRESHOLD if threshold is None else threshold
    flat_fee = settings.FLAT_SHIPPING_FEE if flat_fee is None else flat_fee
    if to_money(subtotal) >= threshold:
        return to_money(0)
    return to_money(flat_fee)


def tax_amount(subtotal: Number, *, rate: Optional[Decimal] = None) -> Decimal:
    rate = settings.TAX_RATE if rate is None else rate
    return to_money(to_money(subtotal) * rate)


def compute_order_totals(subtotal: Number) -> OrderTotals:
    subtotal = to_money(subtotal)
    if subtotal < 0:
        raise ValueError("Subtotal cannot be negative")

    shipping = shipping_fee(subtotal)
    tax = tax_amount(subtotal)

    return OrderTotals(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=to_money(subtotal + shipping + tax),
    )
