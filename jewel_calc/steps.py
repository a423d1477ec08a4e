"""Human-readable calculation steps.

The engine computes numbers only. The functions here turn a finished result
into the ordered list of lines shown next to it, printed in the terminal and
copied into share text. Amounts are rendered with two fixed decimals and
``,`` grouping, and dates with a fixed month table, so the same result always
produces the same lines.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterator, List, Tuple

from .config import CURRENCY_PREFIX, METAL_UNIT_GRAMS
from .data_models import COMPOUND, GOLD, InterestResult, MetalResult
from .utils import format_date, round_money


class StepTrail:
    """Append-only sequence of step lines.

    ``freeze`` hands the lines out as a tuple and closes the trail, so what a
    caller receives can no longer change underneath it.
    """

    def __init__(self) -> None:
        self._lines: List[str] = []
        self._frozen = False

    def add(self, line: str) -> None:
        if self._frozen:
            raise RuntimeError("Step trail is frozen")
        self._lines.append(line)

    def freeze(self) -> Tuple[str, ...]:
        self._frozen = True
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)


def money(value: Decimal) -> str:
    return f"{CURRENCY_PREFIX}{round_money(value):,.2f}"


def plain_number(value: Decimal) -> str:
    """Render ``value`` without trailing zeros or exponent (``2.50`` -> ``2.5``)."""
    return format(value.normalize(), "f")


def interest_steps(result: InterestResult) -> Tuple[str, ...]:
    trail = StepTrail()
    trail.add(f"Principal Amount: {money(result.principal)}")
    trail.add(f"Monthly Interest Rate: {plain_number(result.monthly_rate_percent)}%")
    trail.add(
        "Interest Type: "
        + ("Compound Interest" if result.mode == COMPOUND else "Simple Interest")
    )
    trail.add(f"Time Period: {result.elapsed.as_text()}")
    trail.add(f"From: {format_date(result.start)} to {format_date(result.end)}")

    days = result.elapsed.days
    if result.mode == COMPOUND:
        for period in result.periods:
            trail.add(
                f"Period {period.number} (6 months): {money(period.interest)} interest, "
                f"updated principal {money(period.principal_after)}"
            )
        if result.months_charged > 0:
            trail.add(
                f"Interest for remaining {result.months_charged} months: "
                f"{money(result.month_interest)}"
            )
    else:
        trail.add(
            f"Simple Interest for {result.months_charged} months: "
            f"{money(result.month_interest)}"
        )
    if days > 0:
        trail.add(f"Interest for remaining {days} days: {money(result.day_interest)}")

    if result.notice_charge > 0:
        trail.add(f"Notice Charge: {money(result.notice_charge)}")
    trail.add(f"Total Interest: {money(result.total_interest)}")
    trail.add(f"Final Amount: {money(result.final_amount)}")
    return trail.freeze()


def metal_steps(result: MetalResult) -> Tuple[str, ...]:
    trail = StepTrail()
    trail.add(f"Metal Type: {'Gold' if result.metal == GOLD else 'Silver'}")
    trail.add(f"Rate per {METAL_UNIT_GRAMS[result.metal]} grams: {money(result.rate_for_unit)}")
    trail.add(f"Per Gram Rate: {money(result.per_gram_rate)}")
    trail.add(f"Weight: {plain_number(result.weight_grams)}g")
    trail.add(f"Wastage: {result.wastage_percent:.1f}%")
    trail.add(f"Updated Weight (including wastage): {result.adjusted_weight:.2f}g")
    trail.add(
        f"Metal Cost: {result.adjusted_weight:.2f}g x {money(result.per_gram_rate)} "
        f"= {money(result.metal_cost)}"
    )
    trail.add(f"Making Charge: {money(result.making_charge)}")
    trail.add(f"Total Amount: {money(result.total_amount)}")
    return trail.freeze()
