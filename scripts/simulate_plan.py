#!/usr/bin/env python3
"""
Crediário Plan Simulator

Builds an installment plan from the command line and prints its schedule,
without touching the database.

Usage:
    python scripts/simulate_plan.py 1000 --installments 4 --down-payment 200
    python scripts/simulate_plan.py 500 --fee 50 --installments 10 --frequency weekly
    python scripts/simulate_plan.py 1800 --trade-in "iPhone 11" 600 --json

Arguments:
    total_value: Sale price before fees and deductions
    --fee: Flat fee added before the split
    --down-payment: Cash paid up front
    --trade-in NAME VALUE: Item accepted as partial payment
    --installments: Number of installments (default 3)
    --frequency: weekly or monthly (default monthly)
    --start: Plan start date, YYYY-MM-DD (default today)
    --as-of: Evaluate overdue status at this date, YYYY-MM-DD (default start)
    --json: Output raw JSON instead of formatted text
"""
import argparse
import asyncio
import json
import os
import sys
from datetime import datetime

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from application.service.create_plan import CreatePlanService, PlanRequest
from domain.entities import Customer, Frequency, InstallmentPlan, TradeIn
from domain.exceptions import ValidationError
from domain.services import PlanClassification, classify_plan
from infrastructure.clock import FixedClock
from infrastructure.memory import CustomerRepoMemory, PlanRepoMemory

SIMULATED_CUSTOMER = Customer(id="simulation", name="Simulação", address="-")


def parse_date(value: str) -> datetime:
    return datetime.strptime(value, "%Y-%m-%d")


async def simulate(args: argparse.Namespace) -> InstallmentPlan:
    clock = FixedClock(parse_date(args.start) if args.start else datetime.now())
    srv = CreatePlanService(
        plan_repo=PlanRepoMemory(),
        customer_repo=CustomerRepoMemory([SIMULATED_CUSTOMER]),
        clock=clock,
    )
    trade_in = None
    if args.trade_in:
        trade_in = TradeIn(name=args.trade_in[0], value=float(args.trade_in[1]))
    return await srv.execute(PlanRequest(
        customer_id=SIMULATED_CUSTOMER.id,
        product_name=args.product,
        total_value=args.total_value,
        custom_fee=args.fee,
        down_payment=args.down_payment,
        trade_in=trade_in,
        installment_count=args.installments,
        frequency=Frequency(args.frequency),
    ))


def format_result(plan: InstallmentPlan, classification: PlanClassification) -> str:
    """Format the schedule for human-readable output."""
    lines = []
    lines.append("=" * 60)
    lines.append("CREDIÁRIO SIMULATION")
    lines.append("=" * 60)

    lines.append(f"\nProduct: {plan.product_name}")
    lines.append(f"Total (with fee): R$ {plan.total_value:,.2f}")
    lines.append(f"Down payment: R$ {plan.down_payment:,.2f}")
    if plan.trade_in:
        lines.append(f"Trade-in: {plan.trade_in.name} (R$ {plan.trade_in.value:,.2f})")
    lines.append(f"Financed: R$ {plan.financed_amount:,.2f}")
    lines.append(f"Frequency: {plan.frequency.value}")

    lines.append("\n--- Schedule ---")
    now = classification.evaluated_at
    for inst in plan.installments:
        lines.append(
            f"  #{inst.number:>2}  {inst.due_date:%d/%m/%Y}  R$ {inst.value:>10,.2f}  {inst.display_status(now).value}"
        )

    lines.append(f"\nStanding: {classification.standing.value}")
    lines.append("\n" + "=" * 60)
    return "\n".join(lines)


def to_json(plan: InstallmentPlan, classification: PlanClassification) -> dict:
    now = classification.evaluated_at
    return {
        "plan_id": plan.id,
        "total_value": plan.total_value,
        "financed_amount": plan.financed_amount,
        "frequency": plan.frequency.value,
        "standing": classification.standing.value,
        "remaining_total": classification.remaining_total,
        "installments": [
            {
                "number": inst.number,
                "due_date": inst.due_date.date().isoformat(),
                "value": inst.value,
                "status": inst.display_status(now).value,
            }
            for inst in plan.installments
        ],
    }


def main():
    parser = argparse.ArgumentParser(description="Simulate a crediário installment plan")
    parser.add_argument("total_value", type=float, help="Sale price before fees and deductions")
    parser.add_argument("--product", default="Produto", help="Product name")
    parser.add_argument("--fee", type=float, default=0.0, help="Flat fee added before the split")
    parser.add_argument("--down-payment", type=float, default=0.0, help="Cash paid up front")
    parser.add_argument("--trade-in", nargs=2, metavar=("NAME", "VALUE"), help="Trade-in item and appraised value")
    parser.add_argument("--installments", "-n", type=int, default=3, help="Number of installments")
    parser.add_argument("--frequency", choices=[f.value for f in Frequency], default=Frequency.MONTHLY.value)
    parser.add_argument("--start", help="Plan start date (YYYY-MM-DD)")
    parser.add_argument("--as-of", help="Evaluate status at this date (YYYY-MM-DD)")
    parser.add_argument("--json", action="store_true", help="Output raw JSON")

    args = parser.parse_args()

    try:
        plan = asyncio.run(simulate(args))
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"Error: invalid trade-in value: {e}")
        sys.exit(1)

    as_of = parse_date(args.as_of) if args.as_of else plan.created_at
    classification = classify_plan(plan, as_of)

    if args.json:
        print(json.dumps(to_json(plan, classification), indent=2, default=str))
    else:
        print(format_result(plan, classification))


if __name__ == "__main__":
    main()
