"""Repayment schedule types: selectors, request, installments, totals."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayCountConvention:
    """Simplified day counts used for both due dates and rate conversion.

    Months are a flat 30 days, not calendar months.
    """
    days_in_week: int = 7
    days_in_month: int = 30

    @property
    def days_in_fortnight(self) -> int:
        return self.days_in_week * 2


DEFAULT_CONVENTION = DayCountConvention()


class _Selector(str, Enum):
    """String enum parsed leniently from form input."""

    @classmethod
    def _aliases(cls) -> dict[str, "_Selector"]:
        return {}

    @classmethod
    def default(cls) -> "_Selector":
        raise NotImplementedError

    @classmethod
    def parse(cls, raw: "str | _Selector | None"):
        """Case-insensitive lookup; unknown or missing values fall back to the default."""
        if isinstance(raw, cls):
            return raw
        key = (raw or "").strip().lower()
        for member in cls:
            if member.value == key:
                return member
        alias = cls._aliases().get(key)
        if alias is not None:
            return alias
        fallback = cls.default()
        if key:
            logger.debug("Unrecognized %s %r, using %s", cls.__name__, raw, fallback.value)
        return fallback


class AmortizationMethod(_Selector):
    FLAT = "flat"
    REDUCING_EQUAL_INSTALLMENTS = "reducing_equal_installments"
    REDUCING_EQUAL_PRINCIPAL = "reducing_equal_principal"
    INTEREST_ONLY = "interest_only"
    COMPOUND = "compound"

    @classmethod
    def default(cls) -> "AmortizationMethod":
        return cls.REDUCING_EQUAL_INSTALLMENTS

    @classmethod
    def _aliases(cls):
        return {"flat_rate": cls.FLAT}


class RepaymentFrequency(_Selector):
    DAILY = "daily"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"

    @classmethod
    def default(cls) -> "RepaymentFrequency":
        return cls.MONTHLY

    @classmethod
    def _aliases(cls):
        return {"biweekly": cls.BI_WEEKLY}


class RatePer(_Selector):
    """Basis the nominal rate is quoted against."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @classmethod
    def default(cls) -> "RatePer":
        return cls.MONTH

    @classmethod
    def _aliases(cls):
        return {"daily": cls.DAY, "weekly": cls.WEEK, "monthly": cls.MONTH}


class DurationUnit(_Selector):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @classmethod
    def default(cls) -> "DurationUnit":
        return cls.DAY

    @classmethod
    def _aliases(cls):
        return {"days": cls.DAY, "weeks": cls.WEEK, "months": cls.MONTH}


class InstallmentStatus(str, Enum):
    PENDING = "pending"


@dataclass(frozen=True)
class ScheduleRequest:
    principal: Decimal
    rate_pct: Decimal  # 12 means 12%
    term_days: int
    start_date: date
    rate_per: RatePer | str | None = RatePer.MONTH
    frequency: RepaymentFrequency | str | None = RepaymentFrequency.MONTHLY
    method: AmortizationMethod | str | None = AmortizationMethod.REDUCING_EQUAL_INSTALLMENTS
    fees_total: Decimal = Decimal("0")

    # Overrides for installment #1 only
    first_repayment_date: date | None = None
    first_repayment_amount: Decimal | None = None


@dataclass(frozen=True)
class Installment:
    number: int
    due_date: date
    amount: Decimal
    principal: Decimal
    interest: Decimal
    fees: Decimal
    balance: Decimal  # Outstanding principal after this installment
    penalty: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    status: InstallmentStatus = InstallmentStatus.PENDING


@dataclass(frozen=True)
class ScheduleTotals:
    amount: Decimal = Decimal("0")
    principal: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    fees: Decimal = Decimal("0")

    @property
    def total_payable(self) -> Decimal:
        return self.amount


@dataclass(frozen=True)
class ScheduleResult:
    installments: list[Installment]
    totals: ScheduleTotals

    @property
    def total_payable(self) -> Decimal:
        return self.totals.amount


@dataclass(frozen=True)
class TermSummary:
    term_days: int
    number_of_payments: int
    days_per_period: int


@dataclass(frozen=True)
class ScheduleSummary:
    total_payable: Decimal
    total_interest: Decimal
    fees: Decimal
    first_payment: Decimal
    number_of_payments: int
    first_due_date: date | None = None
    end_date: date | None = None


@dataclass(frozen=True)
class ScheduleQuote:
    terms: TermSummary
    result: ScheduleResult
    summary: ScheduleSummary
