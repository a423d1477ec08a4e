"""Core calculation engine for the jewelry calculators.

This module implements the two calculations the shop quotes from: interest
accrued on a pawn loan between two dates (simple, or compounded every six
months) and the price of a gold or silver item from the market rate, its
weight, a wastage percentage and a making charge.

``compute_interest`` and ``compute_metal_price`` validate their request,
raise ``ValidationError`` on bad input and otherwise return a frozen result
whose ``steps`` trail is projected from the computed numbers.
``accrue_interest`` and ``calculate_metal_price`` wrap them for callers that
want a ``Result`` instead of an exception.
"""

from __future__ import annotations

import dataclasses
import logging
from decimal import Decimal, DecimalException, getcontext
from typing import List

from .config import (
    COMPOUNDING_PERIOD_MONTHS,
    DAYS_PER_INTEREST_MONTH,
    MAX_AMOUNT,
    MAX_WASTAGE_PERCENT,
    METAL_UNIT_GRAMS,
    MIN_WASTAGE_PERCENT,
)
from .data_models import (
    COMPOUND,
    INTEREST_MODES,
    METALS,
    CompoundPeriod,
    InterestRequest,
    InterestResult,
    MetalRequest,
    MetalResult,
)
from .exceptions import ErrorKind, ValidationError
from .result import Result
from .steps import interest_steps, metal_steps
from .utils import date_difference, round_money, to_decimal

getcontext().prec = 28  # increase precision for financial calculations

logger = logging.getLogger(__name__)


def _require_positive(value, field: str, message: str) -> Decimal:
    number = to_decimal(value, field)
    if not number.is_finite() or number <= 0 or number > MAX_AMOUNT:
        raise ValidationError(message, ErrorKind.INVALID_AMOUNT, {"field": field, "value": str(value)})
    return number


def _require_non_negative(value, field: str, message: str) -> Decimal:
    number = to_decimal(value, field)
    if not number.is_finite() or number < 0 or number > MAX_AMOUNT:
        raise ValidationError(message, ErrorKind.INVALID_AMOUNT, {"field": field, "value": str(value)})
    return number


def compute_interest(request: InterestRequest) -> InterestResult:
    """Compute the interest due on a loan between two dates.

    Whole months are charged at the monthly rate. Leftover days are charged
    at the monthly rate divided by a fixed 30-day month, whatever the real
    length of the month.

    In compound mode interest is added to the principal every six whole
    months. Months left after the last full block, and leftover days, are
    charged at simple interest on the compounded principal.

    Parameters
    ----------
    request: InterestRequest
        Principal, monthly rate in percent, dates, mode and an optional
        notice charge added to the final amount.

    Returns
    -------
    InterestResult
        ``total_interest`` and ``final_amount`` are rounded to two decimals;
        the components they were built from are not.

    Raises
    ------
    ValidationError
        For a non-positive principal or rate, a negative notice charge, a
        missing date, an end date before the start date or an unknown mode.
    """
    principal = _require_positive(
        request.principal, "principal", "Please enter a valid principal greater than 0."
    )
    rate_percent = _require_positive(
        request.monthly_rate_percent, "monthly_rate_percent", "Please enter a valid monthly interest rate."
    )
    notice_charge = _require_non_negative(
        request.notice_charge, "notice_charge", "Notice charge cannot be negative."
    )
    if request.start is None or request.end is None:
        raise ValidationError(
            "Please enter valid start and end dates (e.g., 31-10-2025 or 31/10/2025).",
            ErrorKind.INVALID_DATE,
        )
    mode = (request.mode or "").lower()
    if mode not in INTEREST_MODES:
        raise ValidationError(
            f"Interest type must be 'simple' or 'compound'; got {request.mode!r}",
            ErrorKind.INVALID_CHOICE,
        )
    elapsed = date_difference(request.start, request.end)

    monthly_rate = rate_percent / Decimal(100)
    total_interest = Decimal("0")
    current_principal = principal
    remaining_months = elapsed.total_months
    periods: List[CompoundPeriod] = []

    if mode == COMPOUND:
        while remaining_months >= COMPOUNDING_PERIOD_MONTHS:
            period_interest = current_principal * monthly_rate * COMPOUNDING_PERIOD_MONTHS
            total_interest += period_interest
            current_principal += period_interest
            remaining_months -= COMPOUNDING_PERIOD_MONTHS
            periods.append(
                CompoundPeriod(
                    number=len(periods) + 1,
                    interest=period_interest,
                    principal_after=current_principal,
                )
            )

    # Simple mode charges every month here; compound mode only the remainder
    month_interest = current_principal * monthly_rate * remaining_months
    total_interest += month_interest

    day_interest = Decimal("0")
    if elapsed.days > 0:
        day_interest = (current_principal * monthly_rate / DAYS_PER_INTEREST_MONTH) * elapsed.days
        total_interest += day_interest

    final_amount = principal + total_interest + notice_charge

    result = InterestResult(
        principal=principal,
        monthly_rate_percent=rate_percent,
        mode=mode,
        start=request.start,
        end=request.end,
        notice_charge=notice_charge,
        elapsed=elapsed,
        periods=tuple(periods),
        months_charged=remaining_months,
        month_interest=month_interest,
        day_interest=day_interest,
        total_interest=round_money(total_interest),
        final_amount=round_money(final_amount),
    )
    logger.debug(
        "%s interest on %s at %s%%/month over %s: %s",
        mode,
        principal,
        rate_percent,
        elapsed.as_text(),
        result.total_interest,
    )
    return dataclasses.replace(result, steps=interest_steps(result))


def compute_metal_price(request: MetalRequest) -> MetalResult:
    """Price a gold or silver item.

    The market rate is quoted per 8 g of gold or per 10 g of silver and is
    first brought down to a per-gram rate. Wastage is added to the weight as
    a percentage and the making charge is added after the metal cost.

    Raises
    ------
    ValidationError
        For an unknown metal, a non-positive rate or weight, a negative
        making charge, or wastage outside 0-100 %.
    """
    metal = (request.metal or "").lower()
    if metal not in METALS:
        raise ValidationError(
            f"Metal must be 'gold' or 'silver'; got {request.metal!r}",
            ErrorKind.INVALID_CHOICE,
        )
    rate = _require_positive(request.rate_for_unit, "rate_for_unit", "Please enter a valid metal rate.")
    weight = _require_positive(request.weight_grams, "weight_grams", "Please enter a valid weight in grams.")
    making_charge = _require_non_negative(
        request.making_charge, "making_charge", "Please enter a valid making charge."
    )
    wastage = to_decimal(request.wastage_percent, "wastage_percent")
    if not wastage.is_finite() or not MIN_WASTAGE_PERCENT <= wastage <= MAX_WASTAGE_PERCENT:
        raise ValidationError(
            "Wastage must be between 0% and 100%.",
            ErrorKind.INVALID_WASTAGE,
            {"value": str(request.wastage_percent)},
        )

    unit_grams = METAL_UNIT_GRAMS[metal]
    per_gram_rate = rate / unit_grams
    adjusted_weight = weight * (1 + wastage / Decimal(100))
    metal_cost = adjusted_weight * per_gram_rate
    total_amount = metal_cost + making_charge

    result = MetalResult(
        metal=metal,
        rate_for_unit=rate,
        unit_grams=unit_grams,
        per_gram_rate=per_gram_rate,
        weight_grams=weight,
        wastage_percent=wastage,
        adjusted_weight=adjusted_weight,
        metal_cost=metal_cost,
        making_charge=making_charge,
        total_amount=round_money(total_amount),
    )
    logger.debug("%s %sg at %s per %sg: %s", metal, weight, rate, unit_grams, result.total_amount)
    return dataclasses.replace(result, steps=metal_steps(result))


_TOO_LARGE = "Amounts are too large to calculate."


def accrue_interest(request: InterestRequest) -> Result[InterestResult]:
    """Run ``compute_interest`` and report any failure as a ``Result``."""
    try:
        return Result.ok(compute_interest(request))
    except ValidationError as exc:
        logger.info("Interest request rejected (%s): %s", exc.kind, exc.message)
        return Result.from_error(exc)
    except DecimalException:
        logger.warning("Interest calculation out of decimal range", exc_info=True)
        return Result.fail(_TOO_LARGE, ErrorKind.INVALID_AMOUNT)


def calculate_metal_price(request: MetalRequest) -> Result[MetalResult]:
    """Run ``compute_metal_price`` and report any failure as a ``Result``."""
    try:
        return Result.ok(compute_metal_price(request))
    except ValidationError as exc:
        logger.info("Metal request rejected (%s): %s", exc.kind, exc.message)
        return Result.from_error(exc)
    except DecimalException:
        logger.warning("Metal price calculation out of decimal range", exc_info=True)
        return Result.fail(_TOO_LARGE, ErrorKind.INVALID_AMOUNT)
