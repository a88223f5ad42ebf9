"""Price and stock status rules applied to outgoing product payloads."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storeclone.domain.model import PriceInfo, Product

_DEFAULT_DECIMALS = 2


def _parse_amount(candidate: str, minor_unit: int | None) -> Decimal | None:
    text = candidate.strip()
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    if minor_unit is not None and minor_unit > 0 and text.isascii() and text.isdigit():
        amount = amount.scaleb(-minor_unit)
    return amount


def format_amount(amount: Decimal, minor_unit: int | None = None) -> str:
    """Render ``amount`` with two decimals, or as many as the currency's minor unit needs."""

    decimals = max(_DEFAULT_DECIMALS, minor_unit or 0)
    quantum = Decimal(1).scaleb(-decimals)
    return str(amount.quantize(quantum, rounding=ROUND_HALF_UP))


def _resolve(candidates: tuple[str | None, ...], minor_unit: int | None) -> str | None:
    for candidate in candidates:
        if candidate is None or not candidate.strip():
            continue
        amount = _parse_amount(candidate, minor_unit)
        if amount is None:
            return candidate
        return format_amount(amount, minor_unit)
    return None


def resolve_price(prices: PriceInfo | None) -> str | None:
    """Regular price for the target, falling back to ``price`` and then ``sale_price``.

    Integer strings are read as minor units when the currency declares a
    positive minor unit (``"1999"`` at 2 becomes ``"19.99"``). Values that do
    not parse as a number are passed through unchanged.
    """

    if prices is None:
        return None
    return _resolve(
        (prices.regular_price, prices.price, prices.sale_price), prices.currency_minor_unit
    )


def resolve_sale_price(prices: PriceInfo | None) -> str | None:
    if prices is None:
        return None
    return _resolve((prices.sale_price,), prices.currency_minor_unit)


def resolve_stock_status(product: Product) -> str | None:
    if product.stock_status and product.stock_status.strip():
        return product.stock_status.strip()
    if product.is_in_stock is None:
        return None
    return "instock" if product.is_in_stock else "outofstock"
