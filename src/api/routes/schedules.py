"""Schedule routes: what the loan forms and calculators call."""

from fastapi import APIRouter, Depends

from src.api.deps import get_convention
from src.api.schemas import (
    InstallmentResponse,
    QuoteRequest,
    QuoteResponse,
    ScheduleRequestBody,
    ScheduleResponse,
    SummaryResponse,
    TermsRequest,
    TermsResponse,
    TotalsRequest,
    TotalsResponse,
)
from src.engine.aggregate import sum_schedule
from src.engine.amortization import derive_term_and_frequency, generate_schedule, quote_schedule
from src.models.schedule import (
    AmortizationMethod,
    DayCountConvention,
    Installment,
    RatePer,
    RepaymentFrequency,
    ScheduleRequest,
    ScheduleResult,
    ScheduleTotals,
    TermSummary,
)

router = APIRouter(prefix="/api/v1/schedules", tags=["schedules"])


def _to_request(body: ScheduleRequestBody) -> ScheduleRequest:
    return ScheduleRequest(
        principal=body.principal,
        rate_pct=body.rate_pct,
        term_days=body.term_days,
        start_date=body.start_date,
        rate_per=RatePer.parse(body.rate_per),
        frequency=RepaymentFrequency.parse(body.frequency),
        method=AmortizationMethod.parse(body.method),
        fees_total=body.fees_total,
        first_repayment_date=body.first_repayment_date,
        first_repayment_amount=body.first_repayment_amount,
    )


def _totals_to_response(totals: ScheduleTotals) -> TotalsResponse:
    return TotalsResponse(
        amount=totals.amount,
        principal=totals.principal,
        interest=totals.interest,
        fees=totals.fees,
        total_payable=totals.total_payable,
    )


def _result_to_response(result: ScheduleResult) -> ScheduleResponse:
    """Convert engine ScheduleResult to API response."""
    installments = [
        InstallmentResponse(
            number=row.number,
            due_date=row.due_date,
            amount=row.amount,
            principal=row.principal,
            interest=row.interest,
            fees=row.fees,
            penalty=row.penalty,
            paid_amount=row.paid_amount,
            status=row.status,
            balance=row.balance,
        )
        for row in result.installments
    ]
    return ScheduleResponse(
        installments=installments,
        totals=_totals_to_response(result.totals),
        total_payable=result.total_payable,
    )


def _terms_to_response(terms: TermSummary) -> TermsResponse:
    return TermsResponse(
        term_days=terms.term_days,
        number_of_payments=terms.number_of_payments,
        days_per_period=terms.days_per_period,
    )


@router.post("", response_model=ScheduleResponse)
async def create_schedule(
    body: ScheduleRequestBody,
    convention: DayCountConvention = Depends(get_convention),
):
    """Generate the scheduled repayment plan. Nothing is stored."""
    result = generate_schedule(_to_request(body), convention)
    return _result_to_response(result)


@router.post("/quote", response_model=QuoteResponse)
async def quote(
    req: QuoteRequest,
    convention: DayCountConvention = Depends(get_convention),
):
    """Calculator endpoint: duration inputs -> terms, summary and schedule."""
    q = quote_schedule(
        req.duration_value,
        req.duration_unit,
        principal=req.principal,
        rate_pct=req.rate_pct,
        start_date=req.start_date,
        rate_per=req.rate_per,
        frequency=req.frequency,
        method=req.method,
        fees_total=req.fees_total,
        first_repayment_date=req.first_repayment_date,
        first_repayment_amount=req.first_repayment_amount,
        convention=convention,
    )
    s = q.summary
    return QuoteResponse(
        terms=_terms_to_response(q.terms),
        summary=SummaryResponse(
            total_payable=s.total_payable,
            total_interest=s.total_interest,
            fees=s.fees,
            first_payment=s.first_payment,
            number_of_payments=s.number_of_payments,
            first_due_date=s.first_due_date,
            end_date=s.end_date,
        ),
        schedule=_result_to_response(q.result),
    )


@router.post("/terms", response_model=TermsResponse)
async def terms(
    req: TermsRequest,
    convention: DayCountConvention = Depends(get_convention),
):
    """Installment count preview before a full schedule is requested."""
    derived = derive_term_and_frequency(
        req.duration_value, req.duration_unit, req.frequency, convention
    )
    return _terms_to_response(derived)


@router.post("/totals", response_model=TotalsResponse)
async def totals(req: TotalsRequest):
    """Sum an existing schedule, e.g. to check a stored plan against its totals."""
    rows = [
        Installment(
            number=item.number,
            due_date=item.due_date,
            amount=item.amount,
            principal=item.principal,
            interest=item.interest,
            fees=item.fees,
            balance=item.balance,
            penalty=item.penalty,
            paid_amount=item.paid_amount,
            status=item.status,
        )
        for item in req.installments
    ]
    return _totals_to_response(sum_schedule(rows))
