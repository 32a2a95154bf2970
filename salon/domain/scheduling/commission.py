"""Commission arithmetic. All money stays in Decimal."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from ...errors import ValidationError
from ...shared.validators import to_decimal

Amount = Union[Decimal, int, float, str]

HUNDRED = Decimal("100")
ZERO = Decimal("0")
CENT = Decimal("0.01")


def compute_commission(unit_price: Amount, commission_rate_percent: Amount) -> Decimal:
    """
    Commission owed on a charged price: ``unit_price * (rate / 100)``.

    Args:
        unit_price: Price actually charged for the service
        commission_rate_percent: Manicurist share as a percentage (0-100)

    Raises:
        ValidationError: negative price or a rate outside 0-100
    """
    try:
        price = to_decimal(unit_price)
        rate = to_decimal(commission_rate_percent)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    if price < ZERO:
        raise ValidationError("Service price cannot be negative")
    if rate < ZERO or rate > HUNDRED:
        raise ValidationError("Commission rate must be between 0 and 100")

    return price * (rate / HUNDRED)


def quantize_money(amount: Amount) -> Decimal:
    """Round to cents, the precision of every money column"""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def resolve_charged_price(default_price: Amount, override: Optional[Amount] = None) -> Decimal:
    """The stored commission follows the price charged, not the list price"""
    if override is not None:
        return to_decimal(override)
    return to_decimal(default_price)


def summarize_commissions(records: Iterable) -> dict:
    """
    Totals over commission rows (service_price, commission_amount, is_paid).
    A None entry stands for a record without a commission row and only counts
    toward total_works.
    """
    total_works = 0
    total_paid = ZERO
    total_commission = ZERO
    total_paid_commission = ZERO
    total_pending_commission = ZERO

    for record in records:
        total_works += 1
        if record is None:
            continue
        if record.service_price is not None:
            total_paid += to_decimal(record.service_price)
        if record.commission_amount is None:
            continue
        amount = to_decimal(record.commission_amount)
        total_commission += amount
        if record.is_paid:
            total_paid_commission += amount
        else:
            total_pending_commission += amount

    return {
        "total_works": total_works,
        "total_paid": total_paid,
        "total_commission": total_commission,
        "total_paid_commission": total_paid_commission,
        "total_pending_commission": total_pending_commission,
    }
