"""Output helpers for the jewelry calculators.

This module renders results for people: tabular summaries printed to the
terminal, the text sent through WhatsApp, e-mail or the clipboard, and plain
dictionaries for JSON export. None of it feeds back into the calculations.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable
from urllib.parse import quote

from .config import BUSINESS_NAME, METAL_UNIT_GRAMS
from .data_models import COMPOUND, GOLD, InterestResult, MetalResult
from .steps import money, plain_number
from .utils import format_date


def _mode_label(mode: str) -> str:
    return "Compound" if mode == COMPOUND else "Simple"


def _metal_label(metal: str) -> str:
    return "Gold" if metal == GOLD else "Silver"


def print_steps(steps: Iterable[str]) -> None:
    """Print calculation steps as a numbered list."""
    print("Calculation steps")
    print("-" * 72)
    for index, step in enumerate(steps, start=1):
        print(f"{index:>3}. {step}")
    print("-" * 72)


def print_interest_summary(result: InterestResult) -> None:
    """Print the headline figures of an interest calculation."""
    print("Interest summary")
    print("-" * 72)
    print(f"Principal          : {money(result.principal)}")
    print(f"Monthly rate       : {plain_number(result.monthly_rate_percent)}%")
    print(f"Interest type      : {_mode_label(result.mode)}")
    print(f"Duration           : {format_date(result.start)} to {format_date(result.end)}")
    print(f"Time period        : {result.elapsed.as_text()}")
    if result.notice_charge > 0:
        print(f"Notice charge      : {money(result.notice_charge)}")
    print(f"Total interest     : {money(result.total_interest)}")
    print(f"Final amount       : {money(result.final_amount)}")
    print("-" * 72)


def print_metal_summary(result: MetalResult) -> None:
    """Print the headline figures of a metal price calculation."""
    print("Rate summary")
    print("-" * 72)
    print(f"Metal              : {_metal_label(result.metal)}")
    print(f"Rate               : {money(result.rate_for_unit)} per {result.unit_grams} grams")
    print(f"Weight             : {plain_number(result.weight_grams)}g")
    print(f"Wastage            : {plain_number(result.wastage_percent)}%")
    print(f"Making charge      : {money(result.making_charge)}")
    print(f"Total amount       : {money(result.total_amount)}")
    print("-" * 72)


def print_mode_comparison(simple: InterestResult, compound: InterestResult) -> None:
    """Print simple and compound interest for the same loan side by side.

    The difference column is compound minus simple, so it is never negative.
    """
    print("Comparison")
    print("=" * 72)
    print(f"{'Metric':20s} {'Simple':>15s} {'Compound':>15s} {'Difference':>15s}")
    for label, key in (("Total interest", "total_interest"), ("Final amount", "final_amount")):
        v1 = getattr(simple, key)
        v2 = getattr(compound, key)
        print(f"{label:20s} {v1:15,.2f} {v2:15,.2f} {v2 - v1:15,.2f}")
    print("=" * 72)


def _with_steps(text: str, steps: Iterable[str]) -> str:
    lines = [f"{index}. {step}" for index, step in enumerate(steps, start=1)]
    if not lines:
        return text
    return text + "\n\n*Calculation Steps:*\n" + "\n".join(lines)


def interest_share_text(result: InterestResult, include_steps: bool = True) -> str:
    """Text shared through WhatsApp, e-mail or the clipboard.

    Lines wrapped in ``*`` render bold in WhatsApp and read fine elsewhere.
    """
    text = (
        f"*{BUSINESS_NAME} - Interest Calculation*\n\n"
        f"*Principal:* {money(result.principal)}\n"
        f"*Interest Rate:* {plain_number(result.monthly_rate_percent)}% per month\n"
        f"*Interest Type:* {_mode_label(result.mode)}\n"
        f"*Time Period:* {result.elapsed.as_text()}\n"
        f"*Duration:* {format_date(result.start)} to {format_date(result.end)}\n\n"
        f"*Total Interest:* {money(result.total_interest)}\n"
        f"*Final Amount:* {money(result.final_amount)}"
    )
    return _with_steps(text, result.steps if include_steps else ())


def metal_share_text(result: MetalResult, include_steps: bool = True) -> str:
    text = (
        f"*{BUSINESS_NAME} - Rate Calculation*\n\n"
        f"*Metal:* {_metal_label(result.metal)}\n"
        f"*Rate:* {money(result.rate_for_unit)} per {METAL_UNIT_GRAMS[result.metal]} grams\n"
        f"*Weight:* {plain_number(result.weight_grams)}g\n"
        f"*Wastage:* {plain_number(result.wastage_percent)}%\n"
        f"*Making Charge:* {money(result.making_charge)}\n\n"
        f"*Total Amount:* {money(result.total_amount)}"
    )
    return _with_steps(text, result.steps if include_steps else ())


def whatsapp_url(text: str) -> str:
    return "https://wa.me/?text=" + quote(text, safe="")


def mailto_url(subject: str, body: str) -> str:
    return f"mailto:?subject={quote(subject, safe='')}&body={quote(body, safe='')}"


def interest_email_subject() -> str:
    return f"Interest Calculation - {BUSINESS_NAME}"


def metal_email_subject() -> str:
    return f"Rate Calculation - {BUSINESS_NAME}"


def interest_result_to_dict(result: InterestResult) -> Dict[str, Any]:
    """Convert an interest result into a JSON-serialisable dictionary."""
    return {
        "principal": float(result.principal),
        "monthly_rate_percent": float(result.monthly_rate_percent),
        "interest_type": result.mode,
        "start_date": result.start.isoformat(),
        "end_date": result.end.isoformat(),
        "elapsed": {
            "years": result.elapsed.years,
            "months": result.elapsed.months,
            "days": result.elapsed.days,
            "total_months": result.elapsed.total_months,
        },
        "time_period": result.elapsed.as_text(),
        "periods": [
            {
                "period": p.number,
                "interest": float(p.interest),
                "principal_after": float(p.principal_after),
            }
            for p in result.periods
        ],
        "notice_charge": float(result.notice_charge),
        "total_interest": float(result.total_interest),
        "final_amount": float(result.final_amount),
        "steps": list(result.steps),
    }


def metal_result_to_dict(result: MetalResult) -> Dict[str, Any]:
    """Convert a metal price result into a JSON-serialisable dictionary."""
    return {
        "metal": result.metal,
        "rate_for_unit": float(result.rate_for_unit),
        "unit_grams": result.unit_grams,
        "per_gram_rate": float(result.per_gram_rate),
        "weight_grams": float(result.weight_grams),
        "wastage_percent": float(result.wastage_percent),
        "adjusted_weight": float(result.adjusted_weight),
        "metal_cost": float(result.metal_cost),
        "making_charge": float(result.making_charge),
        "total_amount": float(result.total_amount),
        "steps": list(result.steps),
    }
