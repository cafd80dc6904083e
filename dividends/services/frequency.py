"""Payment cadence labels derived from a year of dividend history."""
from __future__ import annotations

from typing import Sequence

from ..models import DividendPayment, FrequencyInfo

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

MONTHLY = "monthly"
QUARTERLY = "quarterly"
SEMI_ANNUAL = "semi-annual"
ANNUAL = "annual"
IRREGULAR = "irregular"


def detect_frequency(payments: Sequence[DividendPayment]) -> FrequencyInfo:
    """Classify the payout cadence from the number of payments in 12 months."""

    if not payments:
        return FrequencyInfo(IRREGULAR, ())

    months = tuple(sorted({payment.date.month for payment in payments}))
    count = len(payments)

    if count >= 10:
        frequency = MONTHLY
    elif 3 <= count <= 5:
        frequency = QUARTERLY
    elif count == 2:
        frequency = SEMI_ANNUAL
    elif count == 1:
        frequency = ANNUAL
    else:
        frequency = IRREGULAR

    return FrequencyInfo(frequency, months)


def format_frequency(info: FrequencyInfo) -> str:
    return ", ".join(MONTH_NAMES[month - 1] for month in info.months)
