from dataclasses import dataclass
from typing import Optional
from domain.interfaces import PlanRepository, Clock
from domain.entities import InstallmentPlan
from domain.services import PlanClassification, classify_plan


@dataclass
class PlanView:
    plan: InstallmentPlan
    classification: PlanClassification


class GetPlanService:
    def __init__(self, plan_repo: PlanRepository, clock: Clock):
        self.plan_repo = plan_repo
        self.clock = clock

    async def execute(self, plan_id: str) -> Optional[PlanView]:
        """Get a plan by ID with its installments, classified as of now."""
        plan = await self.plan_repo.get_plan(plan_id)
        if plan is None:
            return None
        return PlanView(plan=plan, classification=classify_plan(plan, self.clock.now()))
