"""Command‑line interface for the jewelry calculators.

This module uses the ``click`` library to implement a multi‑command
interface. Users can settle interest on a pawn loan, price a gold or silver
item, compare simple against compound interest for the same loan and list the
shop's preset rates. Results can be printed, exported to JSON or text files,
or turned into share text and share links.

The ``build_*_request`` functions turn raw strings (as typed on the command
line or posted from a form) into request objects; the web app reuses them.
"""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click

from .config import (
    DEFAULT_MONTHLY_RATE,
    DEFAULT_WASTAGE_PERCENT,
    PRESET_MONTHLY_RATES,
    WASTAGE_PRESETS,
    configure_logging,
)
from .data_models import COMPOUND, INTEREST_MODES, METALS, SIMPLE, InterestRequest, MetalRequest
from .engine import accrue_interest, calculate_metal_price
from .exceptions import ValidationError
from .formatter import (
    interest_email_subject,
    interest_result_to_dict,
    interest_share_text,
    mailto_url,
    metal_email_subject,
    metal_result_to_dict,
    metal_share_text,
    print_interest_summary,
    print_metal_summary,
    print_mode_comparison,
    print_steps,
    whatsapp_url,
)
from .utils import parse_amount, parse_date


def build_interest_request(
    principal: str,
    rate: Optional[str],
    start_date: str,
    end_date: Optional[str] = None,
    interest_type: str = SIMPLE,
    notice_charge: Optional[str] = None,
    today: Optional[date] = None,
) -> InterestRequest:
    """Build an ``InterestRequest`` from user-typed strings.

    A missing end date means today. A missing rate falls back to the shop's
    default monthly rate and a missing notice charge to zero.

    Raises
    ------
    ValidationError
        If an amount or a date cannot be parsed. Range checks (positive
        principal, end after start, ...) are left to the engine.
    """
    start = parse_date(start_date, "start date")
    if end_date and end_date.strip():
        end = parse_date(end_date, "end date")
    else:
        end = today or date.today()
    return InterestRequest(
        principal=parse_amount(principal, "principal"),
        monthly_rate_percent=parse_amount(rate or DEFAULT_MONTHLY_RATE, "monthly rate"),
        start=start,
        end=end,
        mode=(interest_type or SIMPLE).lower(),
        notice_charge=parse_amount(notice_charge, "notice charge")
        if notice_charge and notice_charge.strip()
        else Decimal("0"),
    )


def build_metal_request(
    metal: str,
    rate: str,
    weight: str,
    wastage: Optional[str] = None,
    making_charge: Optional[str] = None,
) -> MetalRequest:
    """Build a ``MetalRequest`` from user-typed strings.

    Wastage defaults to the shop's usual percentage; a missing making charge
    is zero.
    """
    return MetalRequest(
        metal=(metal or "").lower(),
        rate_for_unit=parse_amount(rate, "metal rate"),
        weight_grams=parse_amount(weight, "weight"),
        wastage_percent=parse_amount(
            wastage if wastage and wastage.strip() else DEFAULT_WASTAGE_PERCENT,
            "wastage",
        ),
        making_charge=parse_amount(making_charge, "making charge")
        if making_charge and making_charge.strip()
        else Decimal("0"),
    )


def _bad_parameter(build: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call a request builder, reporting validation errors the click way."""
    try:
        return build(*args, **kwargs)
    except ValidationError as exc:
        raise click.BadParameter(exc.message)


def _unwrap_or_fail(result):
    if not result:
        raise click.BadParameter(f"{result.error} ({result.error_type})")
    return result.value


def export_to_json(path: Path, data: Dict[str, Any]) -> None:
    """Export a serialized result to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def export_to_text(path: Path, text: str) -> None:
    """Export share text to a plain text file."""
    with path.open("w", encoding="utf-8") as f:
        f.write(text)
        f.write("\n")


def _emit(
    output: Optional[str],
    share: Optional[str],
    data: Dict[str, Any],
    text: str,
    subject: str,
    print_summary: Callable[[], None],
    steps,
) -> None:
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, data)
        elif path.suffix.lower() == ".txt":
            export_to_text(path, text)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .txt")
        click.echo(f"Calculation exported to {path}")
        return
    if share == "text":
        click.echo(text)
    elif share == "whatsapp":
        click.echo(whatsapp_url(text))
    elif share == "email":
        click.echo(mailto_url(subject, text))
    else:
        print_summary()
        print_steps(steps)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Interest and gold/silver rate calculator for a jewelry shop."""
    configure_logging("DEBUG" if verbose else None)


_share_option = click.option(
    "--share",
    "share",
    type=click.Choice(["text", "whatsapp", "email"]),
    help="Print share text or a WhatsApp/e-mail link instead of the summary",
)
_output_option = click.option("--output", "output", type=str, help="Output file path (.json or .txt)")


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount (e.g. 150000, 1.5l)")
@click.option("--rate", "-r", "rate", default=DEFAULT_MONTHLY_RATE, show_default=True, help="Interest rate in percent per month")
@click.option("--start-date", "-s", "start_date", required=True, help="Loan date (YYYY-MM-DD, DD-MM-YYYY, DD/MM/YY, ...)")
@click.option("--end-date", "-e", "end_date", help="Settlement date; defaults to today")
@click.option("--type", "interest_type", type=click.Choice(list(INTEREST_MODES)), default=SIMPLE, help="Interest type")
@click.option("--notice-charge", "-n", "notice_charge", help="Notice charge added to the final amount")
@_output_option
@_share_option
def interest(
    principal: str,
    rate: str,
    start_date: str,
    end_date: Optional[str],
    interest_type: str,
    notice_charge: Optional[str],
    output: Optional[str],
    share: Optional[str],
) -> None:
    """Compute interest due on a loan between two dates."""
    request = _bad_parameter(
        build_interest_request, principal, rate, start_date, end_date, interest_type, notice_charge
    )
    result = _unwrap_or_fail(accrue_interest(request))
    _emit(
        output,
        share,
        interest_result_to_dict(result),
        interest_share_text(result),
        interest_email_subject(),
        lambda: print_interest_summary(result),
        result.steps,
    )


@cli.command()
@click.option("--metal", "-m", "metal", type=click.Choice(list(METALS)), default="gold", help="Metal type")
@click.option("--rate", "-r", "rate", required=True, help="Market rate per 8 g (gold) or 10 g (silver)")
@click.option("--weight", "-w", "weight", required=True, help="Weight in grams")
@click.option("--wastage", "wastage", default=DEFAULT_WASTAGE_PERCENT, show_default=True, help="Wastage in percent (0-100)")
@click.option("--making-charge", "-c", "making_charge", required=True, help="Flat making charge")
@_output_option
@_share_option
def metal(
    metal: str,
    rate: str,
    weight: str,
    wastage: str,
    making_charge: str,
    output: Optional[str],
    share: Optional[str],
) -> None:
    """Compute the price of a gold or silver item."""
    request = _bad_parameter(build_metal_request, metal, rate, weight, wastage, making_charge)
    result = _unwrap_or_fail(calculate_metal_price(request))
    _emit(
        output,
        share,
        metal_result_to_dict(result),
        metal_share_text(result),
        metal_email_subject(),
        lambda: print_metal_summary(result),
        result.steps,
    )


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount")
@click.option("--rate", "-r", "rate", default=DEFAULT_MONTHLY_RATE, show_default=True, help="Interest rate in percent per month")
@click.option("--start-date", "-s", "start_date", required=True, help="Loan date")
@click.option("--end-date", "-e", "end_date", help="Settlement date; defaults to today")
@click.option("--notice-charge", "-n", "notice_charge", help="Notice charge added to the final amount")
def compare(
    principal: str,
    rate: str,
    start_date: str,
    end_date: Optional[str],
    notice_charge: Optional[str],
) -> None:
    """Compare simple and compound interest for the same loan."""
    results = {}
    for mode in (SIMPLE, COMPOUND):
        request = _bad_parameter(
            build_interest_request, principal, rate, start_date, end_date, mode, notice_charge
        )
        results[mode] = _unwrap_or_fail(accrue_interest(request))
    print_mode_comparison(results[SIMPLE], results[COMPOUND])


@cli.command()
def presets() -> None:
    """List the preset monthly interest rates and wastage percentages."""
    click.echo("Monthly interest rates: " + ", ".join(f"{r}%" for r in PRESET_MONTHLY_RATES))
    click.echo("Wastage: " + ", ".join(f"{w}%" for w in WASTAGE_PRESETS))


if __name__ == "__main__":
    cli()
