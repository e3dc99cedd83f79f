from typing import Optional
from domain.interfaces import PlanRepository, Clock
from domain.services import PlanSearch, classify_plan
from application.service.get_plan import PlanView


class ListPlansService:
    def __init__(self, plan_repo: PlanRepository, clock: Clock):
        self.plan_repo = plan_repo
        self.clock = clock

    async def execute(self, search: Optional[str] = None) -> list[PlanView]:
        plans = PlanSearch.filter_plans(await self.plan_repo.list_plans(), search)
        now = self.clock.now()
        return [PlanView(plan=plan, classification=classify_plan(plan, now)) for plan in plans]
