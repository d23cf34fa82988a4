# storefront/domain/pricing.py
"""
Liczenie cen dla koszyka, zamowien i klienta.

Wszystkie kwoty sa liczbami calkowitymi (pelne jednostki waluty). Podatek
liczony jest na Decimal i zaokraglany do pelnej jednostki, float nie jest
uzywany nigdzie po drodze. Stawka podatku zawsze przychodzi od wywolujacego.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Protocol


class Priced(Protocol):
    price: int
    discount_price: int | None


class Line(Protocol):
    quantity: int

    @property
    def product(self) -> Priced: ...


@dataclass(frozen=True)
class CartTotals:
    item_count: int
    subtotal: int
    tax: int
    total: int


def effective_price(product: Priced) -> int:
    """Cena faktycznie placona: discount_price jesli jest i jest nizsza od price."""
    discount = product.discount_price
    if discount is not None and discount < product.price:
        return discount
    return product.price


def line_total(unit_price: int, quantity: int) -> int:
    return unit_price * quantity


def line_subtotal(item: Line) -> int:
    return line_total(effective_price(item.product), item.quantity)


def cart_total(items: Iterable[Line]) -> int:
    return sum(line_subtotal(i) for i in items)


def tax_amount(subtotal: int, tax_rate: Decimal) -> int:
    # str(): float 0.08 nie moze wniesc binarnego szumu do podatku
    tax = Decimal(subtotal) * Decimal(str(tax_rate))
    return int(tax.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def final_total(items: Iterable[Line], tax_rate: Decimal) -> int:
    subtotal = cart_total(items)
    return subtotal + tax_amount(subtotal, tax_rate)


def summarize(items: Iterable[Line], tax_rate: Decimal) -> CartTotals:
    items = list(items)
    subtotal = cart_total(items)
    tax = tax_amount(subtotal, tax_rate)
    return CartTotals(
        item_count=sum(i.quantity for i in items),
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
    )


def format_money(amount: int, currency: str) -> str:
    return f"{currency} {amount:,}"
