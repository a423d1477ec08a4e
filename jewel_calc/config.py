"""Centralized configuration for the jewelry calculators.

Business rule constants live here together with the few settings that can be
overridden from the environment.
"""

import logging
import os
from decimal import Decimal
from typing import Optional

# =============================================================================
# LIMITS
# =============================================================================

# Largest principal, rate, weight or charge accepted (one trillion)
MAX_AMOUNT = Decimal("1e12")

# =============================================================================
# INTEREST
# =============================================================================

# Monthly rates offered as presets, in percent
PRESET_MONTHLY_RATES = ("2", "3", "4", "1.5", "2.5", "3.5")

DEFAULT_MONTHLY_RATE = "2"

# Partial months are charged per day against a fixed 30-day month
DAYS_PER_INTEREST_MONTH = 30

# Compound interest folds accrued interest into principal every 6 months
COMPOUNDING_PERIOD_MONTHS = 6

# =============================================================================
# METAL PRICING
# =============================================================================

# Market rates are quoted per 8 g of gold and per 10 g of silver
METAL_UNIT_GRAMS = {"gold": 8, "silver": 10}

# Wastage presets offered, in percent (5 % to 20 %)
WASTAGE_PRESETS = tuple(range(5, 21))

DEFAULT_WASTAGE_PERCENT = "5"

MIN_WASTAGE_PERCENT = 0
MAX_WASTAGE_PERCENT = 100

# =============================================================================
# DATES AND DISPLAY
# =============================================================================

# Accepted input formats, tried in order
DATE_INPUT_FORMATS = (
    "%Y-%m-%d",
    "%d-%m-%Y",
    "%d/%m/%Y",
    "%d.%m.%Y",
    "%d-%m-%y",
    "%d/%m/%y",
)

# Fixed English month names so output does not depend on the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

CURRENCY_PREFIX = "Rs."

BUSINESS_NAME = os.environ.get("JEWEL_CALC_BUSINESS_NAME", "Balaji Jewellery BJR")

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("JEWEL_CALC_LOG_LEVEL", "WARNING").upper()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the CLI and the web app."""
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.WARNING),
        format=LOG_FORMAT,
    )
