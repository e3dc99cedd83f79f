"""
Plan Status Module

Derives a plan's standing (settled / delinquent / current) and its paid and
remaining totals from the installments as they are right now. Nothing here
is stored or cached; every call recomputes from the current values, so value
corrections and payments are always reflected.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from domain.entities import InstallmentPlan, Installment, InstallmentDisplayStatus


class PlanStanding(Enum):
    SETTLED = "settled"
    DELINQUENT = "delinquent"
    CURRENT = "current"


@dataclass(frozen=True)
class PlanClassification:
    is_settled: bool
    is_delinquent: bool
    is_current: bool
    paid_total: float
    remaining_total: float
    overdue_count: int
    evaluated_at: datetime

    @property
    def standing(self) -> PlanStanding:
        if self.is_settled:
            return PlanStanding.SETTLED
        if self.is_delinquent:
            return PlanStanding.DELINQUENT
        return PlanStanding.CURRENT


def display_status(installment: Installment, now: datetime) -> InstallmentDisplayStatus:
    """Overdue when pending and due strictly before `now`, else the stored status."""
    return installment.display_status(now)


def classify_plan(plan: InstallmentPlan, now: datetime) -> PlanClassification:
    installments = plan.installments or []

    is_settled = all(inst.is_paid for inst in installments)
    overdue_count = sum(1 for inst in installments if inst.is_overdue(now))
    is_delinquent = not is_settled and overdue_count > 0

    paid_total = sum(inst.value for inst in installments if inst.is_paid)
    remaining_total = sum(inst.value for inst in installments if not inst.is_paid)

    return PlanClassification(
        is_settled=is_settled,
        is_delinquent=is_delinquent,
        is_current=not is_settled and not is_delinquent,
        paid_total=paid_total,
        remaining_total=remaining_total,
        overdue_count=overdue_count,
        evaluated_at=now,
    )
