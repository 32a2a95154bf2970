"""
Commission arithmetic: charged price times rate, kept in Decimal.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from salon.domain.scheduling import compute_commission, quantize_money, resolve_charged_price, summarize_commissions
from salon.errors import ValidationError


def test_commission_on_list_price():
    assert compute_commission(Decimal("50000"), Decimal("40")) == Decimal("20000")


def test_commission_follows_charged_price():
    charged = resolve_charged_price(Decimal("50000"), Decimal("30000"))
    assert charged == Decimal("30000")
    assert compute_commission(charged, Decimal("40")) == Decimal("12000")


def test_no_override_uses_list_price():
    assert resolve_charged_price(Decimal("50000"), None) == Decimal("50000")


@pytest.mark.parametrize(
    "price, rate",
    [
        (Decimal("12345.67"), Decimal("37.5")),
        (Decimal("0.10"), Decimal("10")),
        (Decimal("99999.99"), Decimal("33.33")),
    ],
)
def test_commission_is_linear_in_price(price, rate):
    assert compute_commission(price * 2, rate) == compute_commission(price, rate) * 2


def test_float_inputs_do_not_drift():
    assert compute_commission(0.1, 10) == Decimal("0.01")


@pytest.mark.parametrize("rate, expected", [(Decimal("0"), Decimal("0")), (Decimal("100"), Decimal("50000"))])
def test_rate_boundaries(rate, expected):
    assert compute_commission(Decimal("50000"), rate) == expected


@pytest.mark.parametrize("rate", [Decimal("-1"), Decimal("100.01")])
def test_rate_out_of_range_rejected(rate):
    with pytest.raises(ValidationError):
        compute_commission(Decimal("50000"), rate)


def test_negative_price_rejected():
    with pytest.raises(ValidationError):
        compute_commission(Decimal("-5"), Decimal("40"))


def test_garbage_amount_rejected():
    with pytest.raises(ValidationError):
        compute_commission("not-a-number", Decimal("40"))


def test_summary_splits_paid_and_pending():
    rows = [
        SimpleNamespace(service_price=Decimal("50000"), commission_amount=Decimal("20000"), is_paid=True),
        SimpleNamespace(service_price=Decimal("30000"), commission_amount=Decimal("12000"), is_paid=False),
        None,
    ]

    summary = summarize_commissions(rows)

    assert summary["total_works"] == 3
    assert summary["total_paid"] == Decimal("80000")
    assert summary["total_commission"] == Decimal("32000")
    assert summary["total_paid_commission"] == Decimal("20000")
    assert summary["total_pending_commission"] == Decimal("12000")


def test_summary_of_nothing_is_zero():
    summary = summarize_commissions([])
    assert summary["total_works"] == 0
    assert summary["total_commission"] == Decimal("0")


@pytest.mark.parametrize(
    "amount, expected",
    [
        (Decimal("4938.268"), Decimal("4938.27")),
        (Decimal("0.005"), Decimal("0.01")),
        (Decimal("20000"), Decimal("20000.00")),
    ],
)
def test_quantize_money_rounds_half_up_to_cents(amount, expected):
    assert str(quantize_money(amount)) == str(expected)
