"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from src.models.schedule import InstallmentStatus


# ---- Request schemas ----

class ScheduleRequestBody(BaseModel):
    principal: Decimal = Field(..., description="Amount financed")
    rate_pct: Decimal = Field(..., description="Nominal rate, e.g. 12 for 12%")
    term_days: int = Field(..., description="Loan term in days")
    start_date: date = Field(..., description="Disbursement date")

    # Selectors are free strings; unknown values fall back to the defaults
    rate_per: str | None = "month"
    frequency: str | None = "monthly"
    method: str | None = "reducing_equal_installments"

    fees_total: Decimal = Decimal("0")
    first_repayment_date: date | None = None
    first_repayment_amount: Decimal | None = None


class QuoteRequest(BaseModel):
    """Calculator input: duration instead of a precomputed term."""
    principal: Decimal
    rate_pct: Decimal
    duration_value: int
    duration_unit: str | None = "months"
    start_date: date

    rate_per: str | None = "month"
    frequency: str | None = "monthly"
    method: str | None = "reducing_equal_installments"

    fees_total: Decimal = Decimal("0")
    first_repayment_date: date | None = None
    first_repayment_amount: Decimal | None = None


class TermsRequest(BaseModel):
    duration_value: int
    duration_unit: str | None = "days"
    frequency: str | None = "monthly"


# ---- Response schemas ----

class InstallmentResponse(BaseModel):
    number: int
    due_date: date
    amount: Decimal
    principal: Decimal
    interest: Decimal
    fees: Decimal = Decimal("0")
    penalty: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    status: InstallmentStatus = InstallmentStatus.PENDING
    balance: Decimal


class TotalsResponse(BaseModel):
    amount: Decimal
    principal: Decimal
    interest: Decimal
    fees: Decimal
    total_payable: Decimal


class ScheduleResponse(BaseModel):
    installments: list[InstallmentResponse]
    totals: TotalsResponse
    total_payable: Decimal


class TermsResponse(BaseModel):
    term_days: int
    number_of_payments: int
    days_per_period: int


class SummaryResponse(BaseModel):
    total_payable: Decimal
    total_interest: Decimal
    fees: Decimal
    first_payment: Decimal
    number_of_payments: int
    first_due_date: date | None = None
    end_date: date | None = None


class QuoteResponse(BaseModel):
    terms: TermsResponse
    summary: SummaryResponse
    schedule: ScheduleResponse


class TotalsRequest(BaseModel):
    installments: list[InstallmentResponse]
