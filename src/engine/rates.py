"""Nominal rate to per-period rate conversion.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal

from src.engine.periods import frequency_to_days
from src.models.schedule import (
    DEFAULT_CONVENTION,
    DayCountConvention,
    RatePer,
    RepaymentFrequency,
)

HUNDRED = Decimal("100")


def basis_days(
    rate_per: RatePer | str | None,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> int:
    """Days covered by one unit of the quoted rate basis."""
    rate_per = RatePer.parse(rate_per)
    if rate_per is RatePer.DAY:
        return 1
    if rate_per is RatePer.WEEK:
        return convention.days_in_week
    return convention.days_in_month


def per_day_rate(
    rate_pct: Decimal,
    rate_per: RatePer | str | None = RatePer.MONTH,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> Decimal:
    """Decimal rate for a single day, e.g. 10% per month -> 0.10 / 30."""
    return rate_pct / HUNDRED / basis_days(rate_per, convention)


def per_period_rate(
    rate_pct: Decimal,
    rate_per: RatePer | str | None = RatePer.MONTH,
    frequency: RepaymentFrequency | str | None = RepaymentFrequency.MONTHLY,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> Decimal:
    """Rate charged for one repayment period.

    Equivalent to per_day_rate * period days. The period days are applied
    before dividing by the basis so that a monthly rate repaid monthly comes
    out exact (10% per month -> 0.10, not 0.0999...).
    """
    period_days = frequency_to_days(frequency, convention)
    return rate_pct * period_days / HUNDRED / basis_days(rate_per, convention)
