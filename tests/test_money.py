from decimal import Decimal

from src.office_manager.office_manager.common.money import (
    floor2,
    from_cents,
    round2,
    sum_amounts,
    to_cents,
    to_decimal,
)


def test_to_decimal_keeps_float_digits():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(333.33) == Decimal("333.33")


def test_to_decimal_degrades_to_zero():
    assert to_decimal("abc") == Decimal("0.00")
    assert to_decimal(None) == Decimal("0.00")
    assert to_decimal("nan") == Decimal("0.00")


def test_round2_is_half_up():
    assert round2("0.005") == Decimal("0.01")
    assert round2("2.675") == Decimal("2.68")
    assert round2(1) == Decimal("1.00")


def test_floor2_truncates():
    assert floor2(Decimal("333.3333")) == Decimal("333.33")
    assert floor2(Decimal("0.019")) == Decimal("0.01")


def test_cents_round_trip_and_exact_sum():
    assert to_cents("1000.00") == 100000
    assert from_cents(66667) == Decimal("666.67")
    assert sum_amounts([0.1, 0.2, "0.3"]) == Decimal("0.60")
