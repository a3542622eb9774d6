"""Invoice line amounts.

Rounding is half-up to two decimals and cascades: the net amount is rounded
before VAT is derived from it, and gross is the rounded sum of the two
rounded parts. Document totals are sums of the already rounded line values.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class LineAmounts:
    net: Decimal
    vat: Decimal
    gross: Decimal


@dataclass(frozen=True)
class DocumentTotals:
    net_total: Decimal
    vat_total: Decimal
    gross_total: Decimal


def to_decimal(value) -> Decimal:
    """Coerce form input to a Decimal; blank or invalid values become zero."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    else:
        raw = str(value).strip().replace(",", ".")
        if not raw:
            return ZERO
        try:
            result = Decimal(raw)
        except InvalidOperation:
            return ZERO
    if not result.is_finite():
        return ZERO
    return result


def money(value) -> Decimal:
    """Round to cents, half-up. Values too large to quantize become zero."""
    try:
        return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return ZERO


def calculate(quantity, unit_price, vat_rate) -> LineAmounts:
    net = money(to_decimal(quantity) * to_decimal(unit_price))
    vat = money(net * to_decimal(vat_rate) / HUNDRED)
    gross = money(net + vat)
    return LineAmounts(net=net, vat=vat, gross=gross)


def recompute(line):
    """Overwrite ``net``, ``vat`` and ``gross`` on ``line`` from its inputs."""
    amounts = calculate(line.quantity, line.unit_price, line.vat_rate)
    line.net = amounts.net
    line.vat = amounts.vat
    line.gross = amounts.gross
    return line


def aggregate(lines: Iterable) -> DocumentTotals:
    net_total = ZERO
    vat_total = ZERO
    gross_total = ZERO
    for line in lines:
        net_total += money(line.net)
        vat_total += money(line.vat)
        gross_total += money(line.gross)
    return DocumentTotals(
        net_total=money(net_total),
        vat_total=money(vat_total),
        gross_total=money(gross_total),
    )
