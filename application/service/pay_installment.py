from typing import Optional

from domain.entities import InstallmentPlan
from domain.exceptions import InvalidStateError, PlanNotFoundError, InstallmentNotFoundError
from domain.interfaces import PlanRepository, Clock, MetricsPort, LoggingPort
from domain.interfaces.logging_port import bind_logger


class PayInstallmentService:
    def __init__(
        self,
        plan_repo: PlanRepository,
        clock: Clock,
        metrics_port: Optional[MetricsPort] = None,
        logging_port: Optional[LoggingPort] = None
    ):
        self.plan_repo = plan_repo
        self.clock = clock
        self.metrics_port = metrics_port
        self.logging_port = logging_port

    async def execute(self, plan_id: str, number: int) -> InstallmentPlan:
        """
        Mark one installment as paid.

        Paid is terminal: paying it again raises InvalidStateError. Other
        installments and the installment value are left untouched, and no
        cash receipt is recorded here.
        """
        log = bind_logger(self.logging_port, plan_id=plan_id, installment_number=number, step="installment_payment")

        plan = await self.plan_repo.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)
        installment = plan.get_installment(number)
        if installment is None:
            raise InstallmentNotFoundError(plan_id, number)
        if installment.is_paid:
            log.warning("installment_already_paid", paid_at=installment.paid_at.isoformat() if installment.paid_at else None)
            raise InvalidStateError(f"installment {number} of plan {plan_id} is already paid")

        installment.mark_paid(self.clock.now())
        await self.plan_repo.update_installment(installment)

        if self.metrics_port:
            self.metrics_port.increment_installments_paid()
        log.info("installment_paid", value=installment.value, paid_at=installment.paid_at.isoformat())
        return plan
