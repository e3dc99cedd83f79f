from copy import deepcopy
from typing import Optional

from domain.entities import InstallmentPlan, Installment
from domain.exceptions import PlanNotFoundError, InstallmentNotFoundError
from domain.interfaces import PlanRepository


class PlanRepoMemory(PlanRepository):
    """
    Process-local PlanRepository.

    Plans are copied on the way in and on the way out, so an entity held by
    a caller is never the stored one and a failed operation cannot leave
    half-applied changes behind.
    """

    def __init__(self, plans: Optional[list[InstallmentPlan]] = None):
        self._plans: dict[str, InstallmentPlan] = {}
        for plan in plans or []:
            self._plans[plan.id] = deepcopy(plan)

    async def save_plan(self, plan: InstallmentPlan) -> InstallmentPlan:
        self._plans[plan.id] = deepcopy(plan)
        return deepcopy(plan)

    async def get_plan(self, plan_id: str) -> Optional[InstallmentPlan]:
        plan = self._plans.get(plan_id)
        return deepcopy(plan) if plan else None

    async def list_plans(self) -> list[InstallmentPlan]:
        plans = sorted(self._plans.values(), key=lambda p: p.created_at, reverse=True)
        return [deepcopy(p) for p in plans]

    async def update_installment(self, installment: Installment) -> Installment:
        plan = self._plans.get(installment.plan_id)
        if plan is None:
            raise PlanNotFoundError(installment.plan_id)
        stored = plan.get_installment(installment.number)
        if stored is None:
            raise InstallmentNotFoundError(installment.plan_id, installment.number)
        # number and due_date never change after creation
        stored.value = installment.value
        stored.status = installment.status
        stored.paid_at = installment.paid_at
        return deepcopy(stored)
