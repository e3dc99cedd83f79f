from typing_extensions import Protocol
from domain.entities import InstallmentPlan, Installment
from typing import Optional


class PlanRepository(Protocol):
    async def save_plan(self, plan: InstallmentPlan) -> InstallmentPlan: ...
    async def get_plan(self, plan_id: str) -> Optional[InstallmentPlan]: ...
    async def list_plans(self) -> list[InstallmentPlan]: ...
    async def update_installment(self, installment: Installment) -> Installment: ...
