"""CLI client for the Loan Schedule Engine API — posts loan terms and prints the repayment plan.

Usage:
    python schedule-client/quote_schedule.py 1000000 10 --duration 3 --unit months
    python schedule-client/quote_schedule.py 500000 12 --duration 12 --unit weeks --frequency weekly --method flat
"""

import argparse
import asyncio
import sys
from datetime import date
from decimal import Decimal

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _money(v) -> str:
    return f"{float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 72}")
    print(f"  {title}")
    print(f"{'=' * 72}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_summary(data: dict) -> None:
    terms = data["terms"]
    summary = data["summary"]
    _header("Loan Summary")
    print(f"  Term:             {terms['term_days']} days")
    print(f"  Payments:         {summary['number_of_payments']} every {terms['days_per_period']} days")
    print(f"  First Payment:    {_money(summary['first_payment'])}")
    print(f"  Total Interest:   {_money(summary['total_interest'])}")
    if Decimal(summary["fees"]):
        print(f"  Fees:             {_money(summary['fees'])}")
    print(f"  Total Payable:    {_money(summary['total_payable'])}")
    if summary.get("end_date"):
        print(f"  Final Due Date:   {summary['end_date']}")


def print_schedule_table(data: dict) -> None:
    rows = data["schedule"]["installments"]
    if not rows:
        return
    _header("Repayment Schedule")
    print(
        f"  {'#':>4}  {'Due Date':<10}  {'Amount':>14}  {'Principal':>14}  "
        f"{'Interest':>12}  {'Balance':>14}"
    )
    for row in rows:
        print(
            f"  {row['number']:>4}  {row['due_date']:<10}  {_money(row['amount']):>14}  "
            f"{_money(row['principal']):>14}  {_money(row['interest']):>12}  "
            f"{_money(row['balance']):>14}"
        )


# ── Main ─────────────────────────────────────────────────────────────────────

async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Quote a repayment schedule via the Loan Schedule Engine API"
    )
    parser.add_argument("principal", type=Decimal, help="Amount financed")
    parser.add_argument("rate_pct", type=Decimal, help="Nominal rate, e.g. 10 for 10%%")
    parser.add_argument("--duration", type=int, required=True, help="Loan duration value")
    parser.add_argument(
        "--unit", choices=["days", "weeks", "months"], default="months",
        help="Duration unit (default: months)",
    )
    parser.add_argument(
        "--rate-per", choices=["day", "week", "month"], default="month",
        help="Basis the rate is quoted against (default: month)",
    )
    parser.add_argument(
        "--frequency", choices=["daily", "weekly", "bi-weekly", "monthly"], default="monthly",
        help="Repayment cadence (default: monthly)",
    )
    parser.add_argument(
        "--method",
        choices=[
            "flat",
            "reducing_equal_installments",
            "reducing_equal_principal",
            "interest_only",
            "compound",
        ],
        default="reducing_equal_installments",
        help="Amortization method (default: reducing_equal_installments)",
    )
    parser.add_argument("--fees", type=Decimal, help="Fees spread across the schedule")
    parser.add_argument("--start", type=date.fromisoformat, help="Start date YYYY-MM-DD (default: today)")
    parser.add_argument("--first-date", type=date.fromisoformat, help="Override first due date")
    parser.add_argument("--first-amount", type=Decimal, help="Override first installment amount")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )

    args = parser.parse_args()

    payload: dict = {
        "principal": str(args.principal),
        "rate_pct": str(args.rate_pct),
        "duration_value": args.duration,
        "duration_unit": args.unit,
        "rate_per": args.rate_per,
        "frequency": args.frequency,
        "method": args.method,
        "start_date": (args.start or date.today()).isoformat(),
    }

    # Only include overrides that were given
    field_map = {
        "fees": "fees_total",
        "first_date": "first_repayment_date",
        "first_amount": "first_repayment_amount",
    }
    for cli_name, api_name in field_map.items():
        val = getattr(args, cli_name)
        if val is not None:
            payload[api_name] = val.isoformat() if isinstance(val, date) else str(val)

    url = f"{args.api_url}/api/v1/schedules/quote"

    async with httpx.AsyncClient(timeout=30) as client:
        try:
            resp = await client.post(url, json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn src.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

        if resp.status_code != 200:
            print(f"Error: API returned {resp.status_code}", file=sys.stderr)
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            print(f"  {detail}", file=sys.stderr)
            sys.exit(1)

        data = resp.json()

    print_summary(data)
    print_schedule_table(data)
    print()


if __name__ == "__main__":
    asyncio.run(main())
