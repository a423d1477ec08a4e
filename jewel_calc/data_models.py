"""Data models for the jewelry calculators.

This module defines the dataclasses passed into and returned from the
calculation engine: the elapsed time between two dates, the interest and
metal pricing requests, and their results. All of them are frozen; a request
is built once from user input, consumed by a single calculation and the
result is handed on unchanged to printing, sharing or export.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

SIMPLE = "simple"
COMPOUND = "compound"
INTEREST_MODES = (SIMPLE, COMPOUND)

GOLD = "gold"
SILVER = "silver"
METALS = (GOLD, SILVER)


@dataclass(frozen=True)
class ElapsedTime:
    """Time between two calendar dates after month-level carry/borrow.

    Attributes
    ----------
    years, months, days: int
        The calendar breakdown. ``days`` is always the non-negative remainder
        left after borrowing from preceding months.
    total_months: int
        ``years * 12 + months``. Interest is charged per whole month on this
        figure and per day on ``days``.
    """

    years: int
    months: int
    days: int
    total_months: int

    def as_text(self) -> str:
        return f"{self.years} years, {self.months} months, {self.days} days"


@dataclass(frozen=True)
class InterestRequest:
    """Inputs for an interest settlement on a pawn loan.

    ``monthly_rate_percent`` is quoted per month (``2`` means 2 % a month).
    ``start`` and ``end`` may be ``None`` when the caller could not supply
    them; the engine rejects such requests before doing any arithmetic.
    """

    principal: Decimal
    monthly_rate_percent: Decimal
    start: Optional[date]
    end: Optional[date]
    mode: str = SIMPLE  # 'simple' or 'compound'
    notice_charge: Decimal = Decimal("0")


@dataclass(frozen=True)
class CompoundPeriod:
    """One six-month compounding block."""

    number: int
    interest: Decimal
    principal_after: Decimal


@dataclass(frozen=True)
class InterestResult:
    """Outcome of an interest calculation.

    ``total_interest`` and ``final_amount`` are rounded to two decimals. The
    components (``month_interest``, ``day_interest`` and each period's
    interest) are kept unrounded so they add up exactly.

    In simple mode ``months_charged`` equals ``elapsed.total_months`` and
    ``periods`` is empty. In compound mode ``months_charged`` is what is left
    over after the six-month blocks in ``periods``.
    """

    principal: Decimal
    monthly_rate_percent: Decimal
    mode: str
    start: date
    end: date
    notice_charge: Decimal
    elapsed: ElapsedTime
    periods: Tuple[CompoundPeriod, ...]
    months_charged: int
    month_interest: Decimal
    day_interest: Decimal
    total_interest: Decimal
    final_amount: Decimal
    steps: Tuple[str, ...] = field(default=())


@dataclass(frozen=True)
class MetalRequest:
    """Inputs for pricing a gold or silver item.

    ``rate_for_unit`` is the market rate for 8 grams of gold or 10 grams of
    silver. ``wastage_percent`` is added on top of the weight.
    """

    metal: str  # 'gold' or 'silver'
    rate_for_unit: Decimal
    weight_grams: Decimal
    wastage_percent: Decimal
    making_charge: Decimal = Decimal("0")


@dataclass(frozen=True)
class MetalResult:
    metal: str
    rate_for_unit: Decimal
    unit_grams: int
    per_gram_rate: Decimal
    weight_grams: Decimal
    wastage_percent: Decimal
    adjusted_weight: Decimal
    metal_cost: Decimal
    making_charge: Decimal
    total_amount: Decimal
    steps: Tuple[str, ...] = field(default=())
