"""Utility functions for the jewelry calculators.

This module provides helpers for parsing user input into Python data types,
for rounding money, and for calendar arithmetic: the length of a month and
the years/months/days breakdown between two dates that the interest engine
charges against. Month lengths come from the ``calendar`` module so leap
years are handled without special cases.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext
from typing import Optional, Union

from .config import DATE_INPUT_FORMATS, MONTH_ABBREVIATIONS
from .data_models import ElapsedTime
from .exceptions import ErrorKind, ValidationError

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

CENTS = Decimal("0.01")

# Shorthand multipliers accepted by parse_amount, longest suffix first
_AMOUNT_SUFFIXES = (
    ("lakh", Decimal("100000")),
    ("cr", Decimal("10000000")),
    ("k", Decimal("1000")),
    ("l", Decimal("100000")),
)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def date_difference(start: date, end: date) -> ElapsedTime:
    """Break the span from ``start`` to ``end`` into years, months and days.

    The calendar fields are subtracted directly. A negative day count borrows
    a month, adding the length of the month before ``end``'s month. When the
    start day is later than that month is long (say the 31st against a
    February), the borrow is repeated from the month before, so ``days``
    never ends up negative. A negative month count then borrows a year.

    Raises
    ------
    ValidationError
        If ``end`` is before ``start``.
    """
    if end < start:
        raise ValidationError(
            "End date must be on or after the start date.",
            ErrorKind.INVALID_DATE_RANGE,
            {"start": start.isoformat(), "end": end.isoformat()},
        )

    years = end.year - start.year
    months = end.month - start.month
    days = end.day - start.day

    borrow_year, borrow_month = end.year, end.month
    while days < 0:
        borrow_year, borrow_month = _previous_month(borrow_year, borrow_month)
        months -= 1
        days += days_in_month(borrow_year, borrow_month)

    if months < 0:
        years -= 1
        months += 12

    return ElapsedTime(
        years=years,
        months=months,
        days=days,
        total_months=years * 12 + months,
    )


def parse_date(value: Optional[str], field: str = "start date") -> date:
    """Parse a date typed in any of the accepted formats.

    ISO ``YYYY-MM-DD`` is tried first, then day-first forms separated by
    ``-``, ``/`` or ``.``, with four- or two-digit years.

    Raises
    ------
    ValidationError
        If the value is empty or matches none of the formats.
    """
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"Please enter a {field}.", ErrorKind.INVALID_DATE)
    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValidationError(
        "Please enter valid start and end dates (e.g., 31-10-2025 or 31/10/2025).",
        ErrorKind.INVALID_DATE,
        {"value": text},
    )


def format_date(value: date) -> str:
    """Render a date as ``dd Mon yyyy`` independent of the locale."""
    return f"{value.day:02d} {MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"


def to_decimal(value: Union[Decimal, int, float, str], field: str = "value") -> Decimal:
    """Convert ``value`` into a ``Decimal``.

    Floats go through ``str`` so ``0.1`` stays ``Decimal("0.1")``. Non-finite
    values (NaN, infinity) are returned as is; range checks belong to the
    engine. Anything unparsable raises ``ValidationError`` (InvalidAmount).
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise ValidationError(
            f"Invalid numeric value for {field}: {value!r}",
            ErrorKind.INVALID_AMOUNT,
            {"field": field},
        )
    try:
        if isinstance(value, str):
            return Decimal(value.strip().replace(",", ""))
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValidationError(
            f"Invalid numeric value for {field}: {value!r}",
            ErrorKind.INVALID_AMOUNT,
            {"field": field},
        ) from exc


def parse_amount(value: Optional[str], field: str = "amount") -> Decimal:
    """Parse a typed amount with optional shorthand suffix.

    Accepts plain numbers (``"150000"``), grouped numbers (``"1,50,000"``)
    and the suffixes ``k`` (thousand), ``l``/``lakh`` (hundred thousand) and
    ``cr`` (ten million), e.g. ``"1.5l"`` for 150000.
    """
    text = (value or "").strip().lower().replace(",", "")
    if not text:
        raise ValidationError(
            f"Please enter a {field}.", ErrorKind.INVALID_AMOUNT, {"field": field}
        )
    factor = Decimal("1")
    for suffix, multiplier in _AMOUNT_SUFFIXES:
        if text.endswith(suffix):
            factor = multiplier
            text = text[: -len(suffix)].strip()
            break
    return to_decimal(text, field) * factor


def round_money(value: Decimal) -> Decimal:
    """Round to two decimals, halves away from zero.

    Raises ``ValidationError`` (InvalidAmount) when the value has too many
    digits to be held to the cent.
    """
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValidationError(
            "Amounts are too large to calculate.",
            ErrorKind.INVALID_AMOUNT,
            {"value": str(value)},
        ) from exc
