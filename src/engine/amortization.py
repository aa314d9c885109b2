"""Repayment schedule generation.

Five methods: flat, reducing-balance annuity, reducing-balance equal principal,
interest-only with a balloon, and compound (single bullet payoff).

Pure functions: Decimal in, dataclass out. No I/O.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import assert_never

from src.engine.aggregate import sum_schedule, summarize_schedule
from src.engine.periods import frequency_to_days, number_of_payments, shift_date, to_days
from src.engine.rates import per_period_rate
from src.models.schedule import (
    DEFAULT_CONVENTION,
    AmortizationMethod,
    DayCountConvention,
    DurationUnit,
    Installment,
    RatePer,
    RepaymentFrequency,
    ScheduleQuote,
    ScheduleRequest,
    ScheduleResult,
    TermSummary,
)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def _round2(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def annuity_payment(principal: Decimal, rate: Decimal, periods: int) -> Decimal:
    """Unrounded level payment that amortizes principal over the given periods."""
    if rate == 0:
        return principal / periods
    # A = P * [i(1+i)^n] / [(1+i)^n - 1]
    factor = (1 + rate) ** periods
    return principal * rate * factor / (factor - 1)


def _due_date(request: ScheduleRequest, number: int, period_days: int) -> date:
    if number == 1 and request.first_repayment_date is not None:
        return request.first_repayment_date
    return shift_date(request.start_date, period_days * number)


def _scheduled_amount(request: ScheduleRequest, number: int, amount: Decimal) -> Decimal:
    # A zero override is an empty form field, not a request to pay nothing
    if number == 1 and request.first_repayment_amount:
        return request.first_repayment_amount
    return amount


def _principal_part(amount: Decimal, interest: Decimal, fees: Decimal, balance: Decimal) -> Decimal:
    """What is left of a payment after interest and fees, kept within [0, balance]."""
    return min(max(amount - interest - fees, ZERO), balance)


def _close_schedule(
    rows: list[Installment],
    *,
    number: int,
    due_date: date,
    interest: Decimal,
    balance: Decimal,
    fees_total: Decimal,
    target_total: Decimal,
) -> Installment:
    """Final installment that lands the schedule exactly on target_total.

    It retires whatever balance remains and takes whatever fee allocation is
    left. Its amount is target_total less everything already scheduled, which
    absorbs per-period rounding residue and any first-installment override.
    """
    scheduled = sum((row.amount for row in rows), ZERO)
    fees_charged = sum((row.fees for row in rows), ZERO)
    return Installment(
        number=number,
        due_date=due_date,
        amount=_round2(target_total - scheduled),
        principal=balance,
        interest=interest,
        fees=fees_total - fees_charged,
        balance=ZERO,
    )


def _target_total(request: ScheduleRequest, rows: list[Installment], final_interest: Decimal) -> Decimal:
    interest = sum((row.interest for row in rows), ZERO) + final_interest
    return request.principal + interest + request.fees_total


def _result(rows: list[Installment]) -> ScheduleResult:
    return ScheduleResult(installments=rows, totals=sum_schedule(rows))


def flat_schedule(
    request: ScheduleRequest,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> ScheduleResult:
    """Interest on the original principal for every period.

    The rate basis is always read as per month for this method. The schedule
    totals exactly round2(base); the rounding residue of the level installment
    lands in the final amount.
    """
    n = number_of_payments(request.term_days, request.frequency, convention)
    period_days = frequency_to_days(request.frequency, convention)
    rate = per_period_rate(request.rate_pct, RatePer.MONTH, request.frequency, convention)

    total_interest = request.principal * rate * n
    base = request.principal + total_interest + request.fees_total
    installment = _round2(base / n)
    interest = _round2(total_interest / n)
    fees = _round2(request.fees_total / n)

    rows: list[Installment] = []
    balance = request.principal
    for number in range(1, n):
        amount = _scheduled_amount(request, number, installment)
        principal_paid = _principal_part(amount, interest, fees, balance)
        balance -= principal_paid
        rows.append(Installment(
            number=number,
            due_date=_due_date(request, number, period_days),
            amount=amount,
            principal=principal_paid,
            interest=interest,
            fees=fees,
            balance=balance,
        ))

    rows.append(_close_schedule(
        rows,
        number=n,
        due_date=_due_date(request, n, period_days),
        interest=interest,
        balance=balance,
        fees_total=request.fees_total,
        target_total=base,
    ))
    return _result(rows)


def reducing_equal_installments_schedule(
    request: ScheduleRequest,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> ScheduleResult:
    """Level payment; interest on the declining balance."""
    n = number_of_payments(request.term_days, request.frequency, convention)
    period_days = frequency_to_days(request.frequency, convention)
    rate = per_period_rate(request.rate_pct, request.rate_per, request.frequency, convention)

    # Fees are spread evenly outside the annuity formula
    installment = _round2(annuity_payment(request.principal, rate, n) + request.fees_total / n)
    fees = _round2(request.fees_total / n)

    rows: list[Installment] = []
    balance = request.principal
    for number in range(1, n):
        interest = _round2(balance * rate)
        amount = _scheduled_amount(request, number, installment)
        principal_paid = _principal_part(amount, interest, fees, balance)
        balance -= principal_paid
        rows.append(Installment(
            number=number,
            due_date=_due_date(request, number, period_days),
            amount=amount,
            principal=principal_paid,
            interest=interest,
            fees=fees,
            balance=balance,
        ))

    final_interest = _round2(balance * rate)
    rows.append(_close_schedule(
        rows,
        number=n,
        due_date=_due_date(request, n, period_days),
        interest=final_interest,
        balance=balance,
        fees_total=request.fees_total,
        target_total=_target_total(request, rows, final_interest),
    ))
    return _result(rows)


def reducing_equal_principal_schedule(
    request: ScheduleRequest,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> ScheduleResult:
    """Fixed principal each period; interest on the declining balance."""
    n = number_of_payments(request.term_days, request.frequency, convention)
    period_days = frequency_to_days(request.frequency, convention)
    rate = per_period_rate(request.rate_pct, request.rate_per, request.frequency, convention)

    principal_per = _round2(request.principal / n)
    fees = _round2(request.fees_total / n)

    rows: list[Installment] = []
    balance = request.principal
    for number in range(1, n):
        interest = _round2(balance * rate)
        principal_paid = min(principal_per, balance)
        amount = _scheduled_amount(request, number, principal_paid + interest + fees)
        balance -= principal_paid
        rows.append(Installment(
            number=number,
            due_date=_due_date(request, number, period_days),
            amount=amount,
            principal=principal_paid,
            interest=interest,
            fees=fees,
            balance=balance,
        ))

    final_interest = _round2(balance * rate)
    rows.append(_close_schedule(
        rows,
        number=n,
        due_date=_due_date(request, n, period_days),
        interest=final_interest,
        balance=balance,
        fees_total=request.fees_total,
        target_total=_target_total(request, rows, final_interest),
    ))
    return _result(rows)


def interest_only_schedule(
    request: ScheduleRequest,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> ScheduleResult:
    """Interest every period, principal and all fees as a balloon at the end."""
    n = number_of_payments(request.term_days, request.frequency, convention)
    period_days = frequency_to_days(request.frequency, convention)
    rate = per_period_rate(request.rate_pct, request.rate_per, request.frequency, convention)

    interest = _round2(request.principal * rate)

    rows: list[Installment] = []
    for number in range(1, n):
        rows.append(Installment(
            number=number,
            due_date=_due_date(request, number, period_days),
            amount=_scheduled_amount(request, number, interest),
            principal=ZERO,
            interest=interest,
            fees=ZERO,
            balance=request.principal,
        ))

    # The balloon is fixed; a first-period override never reduces it
    rows.append(Installment(
        number=n,
        due_date=_due_date(request, n, period_days),
        amount=_round2(interest + request.principal + request.fees_total),
        principal=request.principal,
        interest=interest,
        fees=request.fees_total,
        balance=ZERO,
    ))
    return _result(rows)


def compound_schedule(
    request: ScheduleRequest,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> ScheduleResult:
    """Single payoff row at maturity with interest compounded every period.

    First-repayment overrides do not apply; there are no intermediate installments.
    """
    n = number_of_payments(request.term_days, request.frequency, convention)
    period_days = frequency_to_days(request.frequency, convention)
    rate = per_period_rate(request.rate_pct, request.rate_per, request.frequency, convention)

    payoff = _round2(request.principal * (1 + rate) ** n + request.fees_total)
    rows = [Installment(
        number=1,
        due_date=shift_date(request.start_date, period_days * n),
        amount=payoff,
        principal=ZERO,  # The compounded sum is reported as one lump
        interest=payoff - request.principal - request.fees_total,
        fees=request.fees_total,
        balance=ZERO,
    )]
    return _result(rows)


def generate_schedule(
    request: ScheduleRequest,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> ScheduleResult:
    """Build the repayment schedule for the requested method.

    The method is parsed case-insensitively; anything unrecognized (including a
    blank form field) is treated as reducing_equal_installments.
    """
    method = AmortizationMethod.parse(request.method)
    match method:
        case AmortizationMethod.FLAT:
            return flat_schedule(request, convention)
        case AmortizationMethod.REDUCING_EQUAL_INSTALLMENTS:
            return reducing_equal_installments_schedule(request, convention)
        case AmortizationMethod.REDUCING_EQUAL_PRINCIPAL:
            return reducing_equal_principal_schedule(request, convention)
        case AmortizationMethod.INTEREST_ONLY:
            return interest_only_schedule(request, convention)
        case AmortizationMethod.COMPOUND:
            return compound_schedule(request, convention)
        case _:
            assert_never(method)


def derive_term_and_frequency(
    duration_value: int,
    duration_unit: DurationUnit | str | None,
    frequency: RepaymentFrequency | str | None,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> TermSummary:
    """Term length and installment count without building a schedule."""
    term_days = to_days(duration_value, duration_unit, convention)
    return TermSummary(
        term_days=term_days,
        number_of_payments=number_of_payments(term_days, frequency, convention),
        days_per_period=frequency_to_days(frequency, convention),
    )


def quote_schedule(
    duration_value: int,
    duration_unit: DurationUnit | str | None,
    *,
    principal: Decimal,
    rate_pct: Decimal,
    start_date: date,
    rate_per: RatePer | str | None = RatePer.MONTH,
    frequency: RepaymentFrequency | str | None = RepaymentFrequency.MONTHLY,
    method: AmortizationMethod | str | None = AmortizationMethod.REDUCING_EQUAL_INSTALLMENTS,
    fees_total: Decimal = ZERO,
    first_repayment_date: date | None = None,
    first_repayment_amount: Decimal | None = None,
    convention: DayCountConvention = DEFAULT_CONVENTION,
) -> ScheduleQuote:
    """Duration inputs -> terms, schedule and headline summary in one call."""
    terms = derive_term_and_frequency(duration_value, duration_unit, frequency, convention)
    request = ScheduleRequest(
        principal=principal,
        rate_pct=rate_pct,
        term_days=terms.term_days,
        start_date=start_date,
        rate_per=RatePer.parse(rate_per),
        frequency=RepaymentFrequency.parse(frequency),
        method=AmortizationMethod.parse(method),
        fees_total=fees_total,
        first_repayment_date=first_repayment_date,
        first_repayment_amount=first_repayment_amount,
    )
    result = generate_schedule(request, convention)
    return ScheduleQuote(
        terms=terms,
        result=result,
        summary=summarize_schedule(result, principal, fees_total),
    )
