"""Duration and repayment-frequency normalization.

Pure functions. No I/O.
"""

import math
from datetime import date, timedelta

from src.models.schedule import (
    DEFAULT_CONVENTION,
    DayCountConvention,
    DurationUnit,
    RepaymentFrequency,
)


def to_days(
    value: int,
    unit: DurationUnit | str | None,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> int:
    """Convert a duration to days. Unknown units are read as days."""
    unit = DurationUnit.parse(unit)
    if unit is DurationUnit.WEEK:
        return value * convention.days_in_week
    if unit is DurationUnit.MONTH:
        return value * convention.days_in_month
    return value


def frequency_to_days(
    frequency: RepaymentFrequency | str | None,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> int:
    """Days in one repayment period. Unknown cadences are read as monthly."""
    frequency = RepaymentFrequency.parse(frequency)
    days = {
        RepaymentFrequency.DAILY: 1,
        RepaymentFrequency.WEEKLY: convention.days_in_week,
        RepaymentFrequency.BI_WEEKLY: convention.days_in_fortnight,
        RepaymentFrequency.MONTHLY: convention.days_in_month,
    }
    return days[frequency]


def number_of_payments(
    term_days: int,
    frequency: RepaymentFrequency | str | None,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> int:
    """Installment count, rounded up and never below 1.

    A 91-day term paid monthly is 4 installments, not 3.
    """
    per = frequency_to_days(frequency, convention)
    return max(1, math.ceil(term_days / per))


def shift_date(start: date | str, days: int) -> date:
    if isinstance(start, str):
        start = date.fromisoformat(start)
    return start + timedelta(days=days)


def add_days(start: date | str, days: int) -> str:
    """Calendar arithmetic returning an ISO date string."""
    return shift_date(start, days).isoformat()
