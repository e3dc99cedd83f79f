from dataclasses import dataclass
from domain.entities import InstallmentStatus
from domain.interfaces import PlanRepository, Clock
from domain.services import PlanStanding, classify_plan


@dataclass
class ReceivablesSummary:
    pending_total: float
    overdue_total: float
    plans_current: int
    plans_delinquent: int
    plans_settled: int


class ReceivablesService:
    """Accounts receivable across every plan: what is still owed and how much is late."""

    def __init__(self, plan_repo: PlanRepository, clock: Clock):
        self.plan_repo = plan_repo
        self.clock = clock

    async def execute(self) -> ReceivablesSummary:
        now = self.clock.now()
        pending_total = 0.0
        overdue_total = 0.0
        standings = {standing: 0 for standing in PlanStanding}

        for plan in await self.plan_repo.list_plans():
            for inst in plan.installments:
                if inst.status == InstallmentStatus.PENDING:
                    pending_total += inst.value
                    if inst.is_overdue(now):
                        overdue_total += inst.value
            standings[classify_plan(plan, now).standing] += 1

        return ReceivablesSummary(
            pending_total=pending_total,
            overdue_total=overdue_total,
            plans_current=standings[PlanStanding.CURRENT],
            plans_delinquent=standings[PlanStanding.DELINQUENT],
            plans_settled=standings[PlanStanding.SETTLED],
        )
