from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from domain.entities import InstallmentPlan, Installment
from domain.exceptions import PersistenceError, InstallmentNotFoundError
from domain.interfaces import PlanRepository
from infrastructure.db.models.plans import PlanModel
from infrastructure.db.models.installments import InstallmentModel


class PlanRepoSqlalchemy(PlanRepository):
    """SQLAlchemy implementation of PlanRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save_plan(self, plan: InstallmentPlan) -> InstallmentPlan:
        """Insert a plan together with its installments in one transaction."""
        try:
            plan_model = PlanModel.from_domain(plan)
            # set on the transient model so no lazy load is triggered
            plan_model.installments_rel = [InstallmentModel.from_domain(inst) for inst in plan.installments]
            self.db.add(plan_model)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"could not save plan {plan.id}: {e}") from e
        return plan

    async def get_plan(self, plan_id: str) -> Optional[InstallmentPlan]:
        """Get a plan by ID with its installments loaded."""
        stmt = (
            select(PlanModel)
            .where(PlanModel.id == plan_id)
            .options(selectinload(PlanModel.installments_rel))
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"could not load plan {plan_id}: {e}") from e
        plan_model = result.scalar_one_or_none()
        return plan_model.to_domain() if plan_model else None

    async def list_plans(self) -> list[InstallmentPlan]:
        """All plans, newest first."""
        stmt = (
            select(PlanModel)
            .options(selectinload(PlanModel.installments_rel))
            .order_by(PlanModel.created_at.desc())
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"could not list plans: {e}") from e
        return [pm.to_domain() for pm in result.scalars().all()]

    async def update_installment(self, installment: Installment) -> Installment:
        """Persist value/status/paid_at of a single installment."""
        try:
            inst_model = await self.db.get(InstallmentModel, (installment.plan_id, installment.number))
            if inst_model is None:
                raise InstallmentNotFoundError(installment.plan_id, installment.number)
            inst_model.apply(installment)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(
                f"could not update installment {installment.number} of plan {installment.plan_id}: {e}"
            ) from e
        return installment
