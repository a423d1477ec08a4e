"""
Unit tests for the interest and metal pricing engine.
"""

import dataclasses
import decimal
from datetime import date
from decimal import Decimal

import pytest

from jewel_calc import engine
from jewel_calc.config import MAX_AMOUNT
from jewel_calc.data_models import COMPOUND, SIMPLE, InterestRequest, MetalRequest
from jewel_calc.engine import (
    accrue_interest,
    calculate_metal_price,
    compute_interest,
    compute_metal_price,
)
from jewel_calc.exceptions import ErrorKind, ValidationError


def loan(end=date(2024, 7, 1), mode=SIMPLE, **overrides):
    fields = dict(
        principal=Decimal("100000"),
        monthly_rate_percent=Decimal("2"),
        start=date(2024, 1, 1),
        end=end,
        mode=mode,
    )
    fields.update(overrides)
    return InterestRequest(**fields)


def gold(**overrides):
    fields = dict(
        metal="gold",
        rate_for_unit=Decimal("64000"),
        weight_grams=Decimal("10"),
        wastage_percent=Decimal("5"),
        making_charge=Decimal("500"),
    )
    fields.update(overrides)
    return MetalRequest(**fields)


class TestSimpleInterest:

    def test_six_whole_months(self):
        result = compute_interest(loan())
        assert result.total_interest == Decimal("12000.00")
        assert result.final_amount == Decimal("112000.00")
        assert result.months_charged == 6
        assert result.day_interest == 0
        assert result.periods == ()

    def test_partial_days_use_thirty_day_month(self):
        result = compute_interest(loan(end=date(2024, 7, 16)))
        assert result.elapsed.days == 15
        assert result.month_interest == Decimal("12000")
        assert result.total_interest == Decimal("13000.00")
        assert result.final_amount == Decimal("113000.00")

    def test_notice_charge_only_affects_final_amount(self):
        result = compute_interest(loan(notice_charge=Decimal("500")))
        assert result.total_interest == Decimal("12000.00")
        assert result.final_amount == Decimal("112500.00")

    def test_doubling_months_doubles_month_interest(self):
        three = compute_interest(loan(end=date(2024, 4, 1)))
        six = compute_interest(loan(end=date(2024, 7, 1)))
        assert three.elapsed.days == six.elapsed.days == 0
        assert six.month_interest == 2 * three.month_interest

    def test_same_day_settlement(self):
        result = compute_interest(loan(end=date(2024, 1, 1)))
        assert result.total_interest == 0
        assert result.final_amount == Decimal("100000.00")

    def test_float_inputs_accepted(self):
        result = compute_interest(loan(principal=100000.0, monthly_rate_percent=2))
        assert result.total_interest == Decimal("12000.00")

    def test_mode_is_case_insensitive(self):
        assert compute_interest(loan(mode="Simple")).mode == SIMPLE


class TestCompoundInterest:

    def test_single_period_matches_simple(self):
        result = compute_interest(loan(mode=COMPOUND))
        assert result.total_interest == Decimal("12000.00")
        assert result.final_amount == Decimal("112000.00")
        assert len(result.periods) == 1
        assert result.periods[0].interest == Decimal("12000")
        assert result.periods[0].principal_after == Decimal("112000")
        assert result.months_charged == 0

    def test_two_periods_compound(self):
        result = compute_interest(loan(end=date(2025, 1, 1), mode=COMPOUND))
        assert [p.interest for p in result.periods] == [Decimal("12000"), Decimal("13440")]
        assert result.total_interest == Decimal("25440.00")
        assert result.final_amount == Decimal("125440.00")

    def test_remaining_months_and_days_use_compounded_principal(self):
        # 1 year, 1 month, 10 days
        result = compute_interest(loan(end=date(2025, 2, 11), mode=COMPOUND))
        assert result.elapsed.total_months == 13
        assert result.elapsed.days == 10
        assert result.months_charged == 1
        assert result.month_interest == Decimal("2508.8")
        assert result.total_interest == Decimal("28785.07")
        assert result.final_amount == Decimal("128785.07")

    def test_short_loan_never_compounds(self):
        simple = compute_interest(loan(end=date(2024, 5, 20)))
        compound = compute_interest(loan(end=date(2024, 5, 20), mode=COMPOUND))
        assert compound.periods == ()
        assert compound.total_interest == simple.total_interest

    @pytest.mark.parametrize(
        "end",
        [date(2024, 7, 2), date(2024, 12, 15), date(2025, 1, 1), date(2026, 3, 31)],
    )
    def test_compound_exceeds_simple_after_first_period(self, end):
        simple = compute_interest(loan(end=end))
        compound = compute_interest(loan(end=end, mode=COMPOUND))
        assert compound.total_interest > simple.total_interest

    def test_compound_equals_simple_on_period_boundary(self):
        simple = compute_interest(loan())
        compound = compute_interest(loan(mode=COMPOUND))
        assert compound.total_interest == simple.total_interest


class TestInterestValidation:

    @pytest.mark.parametrize(
        "overrides,kind",
        [
            ({"principal": Decimal("0")}, ErrorKind.INVALID_AMOUNT),
            ({"principal": Decimal("-5")}, ErrorKind.INVALID_AMOUNT),
            ({"principal": float("nan")}, ErrorKind.INVALID_AMOUNT),
            ({"monthly_rate_percent": Decimal("0")}, ErrorKind.INVALID_AMOUNT),
            ({"monthly_rate_percent": float("inf")}, ErrorKind.INVALID_AMOUNT),
            ({"notice_charge": Decimal("-1")}, ErrorKind.INVALID_AMOUNT),
            ({"start": None}, ErrorKind.INVALID_DATE),
            ({"end": None}, ErrorKind.INVALID_DATE),
            ({"end": date(2023, 12, 31)}, ErrorKind.INVALID_DATE_RANGE),
            ({"mode": "daily"}, ErrorKind.INVALID_CHOICE),
        ],
    )
    def test_rejected_requests(self, overrides, kind):
        request = loan(**overrides)
        with pytest.raises(ValidationError) as exc_info:
            compute_interest(request)
        assert exc_info.value.kind == kind

        result = accrue_interest(request)
        assert not result
        assert result.value is None
        assert result.error_type == kind
        assert result.error

    def test_accrue_interest_success(self):
        result = accrue_interest(loan())
        assert result.success
        assert result.value.final_amount == Decimal("112000.00")
        assert result.unwrap() is result.value

    def test_unwrap_failure_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            accrue_interest(loan(principal=Decimal("0"))).unwrap()
        assert exc_info.value.kind == ErrorKind.INVALID_AMOUNT

    def test_result_is_immutable(self):
        result = compute_interest(loan())
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.total_interest = Decimal("0")


class TestMetalPricing:

    def test_gold_scenario(self):
        result = compute_metal_price(gold())
        assert result.unit_grams == 8
        assert result.per_gram_rate == Decimal("8000")
        assert result.adjusted_weight == Decimal("10.5")
        assert result.metal_cost == Decimal("84000")
        assert result.total_amount == Decimal("84500.00")

    def test_silver_uses_ten_gram_rate(self):
        result = compute_metal_price(
            gold(metal="silver", rate_for_unit=Decimal("900"), weight_grams=Decimal("100"),
                 wastage_percent=Decimal("0"), making_charge=Decimal("0"))
        )
        assert result.unit_grams == 10
        assert result.per_gram_rate == Decimal("90")
        assert result.total_amount == Decimal("9000.00")

    def test_price_is_linear_in_weight(self):
        making = Decimal("250")
        prices = [
            compute_metal_price(
                gold(weight_grams=Decimal(w), wastage_percent=Decimal("10"), making_charge=making)
            ).total_amount - making
            for w in ("3", "6", "12")
        ]
        assert prices[1] == 2 * prices[0]
        assert prices[2] == 4 * prices[0]

    @pytest.mark.parametrize("wastage", ["0", "100"])
    def test_wastage_bounds_inclusive(self, wastage):
        assert compute_metal_price(gold(wastage_percent=Decimal(wastage))).total_amount > 0

    @pytest.mark.parametrize(
        "overrides,kind",
        [
            ({"wastage_percent": Decimal("-1")}, ErrorKind.INVALID_WASTAGE),
            ({"wastage_percent": Decimal("101")}, ErrorKind.INVALID_WASTAGE),
            ({"wastage_percent": float("nan")}, ErrorKind.INVALID_WASTAGE),
            ({"weight_grams": Decimal("0")}, ErrorKind.INVALID_AMOUNT),
            ({"weight_grams": float("inf")}, ErrorKind.INVALID_AMOUNT),
            ({"rate_for_unit": Decimal("0")}, ErrorKind.INVALID_AMOUNT),
            ({"making_charge": Decimal("-1")}, ErrorKind.INVALID_AMOUNT),
            ({"metal": "platinum"}, ErrorKind.INVALID_CHOICE),
        ],
    )
    def test_rejected_requests(self, overrides, kind):
        request = gold(**overrides)
        with pytest.raises(ValidationError) as exc_info:
            compute_metal_price(request)
        assert exc_info.value.kind == kind

        result = calculate_metal_price(request)
        assert not result
        assert result.error_type == kind

    def test_calculate_metal_price_success(self):
        result = calculate_metal_price(gold())
        assert result
        assert result.value.total_amount == Decimal("84500.00")


class TestAmountLimits:

    def test_largest_accepted_principal(self):
        result = compute_interest(loan(principal=MAX_AMOUNT))
        assert result.total_interest == Decimal("120000000000.00")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"principal": Decimal("1e27")},
            {"principal": MAX_AMOUNT + 1},
            {"monthly_rate_percent": Decimal("1e20")},
            {"notice_charge": Decimal("1e30")},
        ],
    )
    def test_oversized_interest_inputs(self, overrides):
        result = accrue_interest(loan(**overrides))
        assert not result
        assert result.error_type == ErrorKind.INVALID_AMOUNT

    @pytest.mark.parametrize(
        "overrides",
        [
            {"weight_grams": Decimal("1e25")},
            {"rate_for_unit": Decimal("1e13")},
            {"making_charge": Decimal("1e13")},
        ],
    )
    def test_oversized_metal_inputs(self, overrides):
        result = calculate_metal_price(gold(**overrides))
        assert not result
        assert result.error_type == ErrorKind.INVALID_AMOUNT

    def test_total_too_large_to_round(self):
        # in-range inputs compounded over 30 years exceed 28 digits
        request = loan(
            principal=MAX_AMOUNT,
            monthly_rate_percent=MAX_AMOUNT,
            start=date(2000, 1, 1),
            end=date(2030, 1, 1),
            mode=COMPOUND,
        )
        with pytest.raises(ValidationError) as exc_info:
            compute_interest(request)
        assert exc_info.value.kind == ErrorKind.INVALID_AMOUNT

        result = accrue_interest(request)
        assert not result
        assert result.error_type == ErrorKind.INVALID_AMOUNT

    def test_decimal_errors_do_not_escape(self, monkeypatch):
        def overflow(request):
            raise decimal.Overflow("too big")

        monkeypatch.setattr(engine, "compute_interest", overflow)
        monkeypatch.setattr(engine, "compute_metal_price", overflow)

        interest = engine.accrue_interest(loan())
        metal = engine.calculate_metal_price(gold())
        assert not interest and not metal
        assert interest.error_type == metal.error_type == ErrorKind.INVALID_AMOUNT
        assert interest.value is None
