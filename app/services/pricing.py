# app/services/pricing.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from app.utils.settings import TAX_RATE, SHIPPING_FEE

CENT = Decimal("0.01")


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def compute_pricing(
    lines: Iterable[Tuple[Decimal, int]],
    tax_rate: Decimal = TAX_RATE,
    shipping: Decimal = SHIPPING_FEE,
) -> PriceBreakdown:
    """
    Czysta funkcja: (cena jednostkowa, ilosc) -> subtotal, podatek, wysylka, total.

    Subtotal nie jest zaokraglany per pozycja. Podatek zaokraglamy do 2 miejsc
    przed dodaniem, a potem jeszcze raz caly total.
    """
    subtotal = Decimal("0")
    for unit_price, quantity in lines:
        unit_price = Decimal(str(unit_price))
        if unit_price < 0:
            raise ValueError("Unit price cannot be negative")
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")
        subtotal += unit_price * quantity

    shipping = Decimal(str(shipping))
    tax = round_money(subtotal * Decimal(str(tax_rate)))
    total = round_money(subtotal + tax + shipping)

    return PriceBreakdown(subtotal=subtotal, tax=tax, shipping=shipping, total=total)
