"""Schedule aggregation: totals and the preview summary shown before a loan is saved.

Works on any installment list regardless of which method produced it.
"""

from collections.abc import Iterable
from decimal import Decimal, ROUND_HALF_UP

from src.models.schedule import Installment, ScheduleResult, ScheduleSummary, ScheduleTotals

TWO_PLACES = Decimal("0.01")


def _round2(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def sum_schedule(installments: Iterable[Installment]) -> ScheduleTotals:
    """Sum amount, principal, interest and fees, rounding at each step."""
    amount = principal = interest = fees = Decimal("0")
    for row in installments:
        amount = _round2(amount + row.amount)
        principal = _round2(principal + row.principal)
        interest = _round2(interest + row.interest)
        fees = _round2(fees + row.fees)
    return ScheduleTotals(amount=amount, principal=principal, interest=interest, fees=fees)


def summarize_schedule(
    result: ScheduleResult,
    principal: Decimal,
    fees_total: Decimal = Decimal("0"),
) -> ScheduleSummary:
    """Headline figures for a loan preview.

    Total interest is backed out of the payable total, so for the compound
    method it still reflects the capitalized interest even though the payoff
    row reports no principal.
    """
    installments = result.installments
    if not installments:
        return ScheduleSummary(
            total_payable=Decimal("0"),
            total_interest=Decimal("0"),
            fees=Decimal("0"),
            first_payment=Decimal("0"),
            number_of_payments=0,
        )

    total_payable = result.total_payable
    return ScheduleSummary(
        total_payable=total_payable,
        total_interest=_round2(total_payable - principal - fees_total),
        fees=_round2(fees_total),
        first_payment=installments[0].amount,
        number_of_payments=len(installments),
        first_due_date=installments[0].due_date,
        end_date=installments[-1].due_date,
    )
