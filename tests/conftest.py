"""Canonical test fixtures used across all engine tests.

Fixture: 1,000,000 financed at 10% per month, repaid monthly over 90 days
starting 2024-01-01 (3 installments, per-period rate exactly 0.10).
"""

import pytest
from datetime import date
from decimal import Decimal

from src.models.schedule import (
    AmortizationMethod,
    RatePer,
    RepaymentFrequency,
    ScheduleRequest,
)


@pytest.fixture
def canonical_request() -> ScheduleRequest:
    """Three monthly installments on the default annuity method."""
    return ScheduleRequest(
        principal=Decimal("1000000"),
        rate_pct=Decimal("10"),
        rate_per=RatePer.MONTH,
        frequency=RepaymentFrequency.MONTHLY,
        term_days=90,
        start_date=date(2024, 1, 1),
        method=AmortizationMethod.REDUCING_EQUAL_INSTALLMENTS,
    )


@pytest.fixture
def long_request() -> ScheduleRequest:
    """One-year term with fees, used for invariant checks across cadences."""
    return ScheduleRequest(
        principal=Decimal("250000"),
        rate_pct=Decimal("4.5"),
        rate_per=RatePer.MONTH,
        frequency=RepaymentFrequency.MONTHLY,
        term_days=365,
        start_date=date(2024, 3, 15),
        fees_total=Decimal("1250"),
    )
