import math
from typing import Optional

from domain.entities import InstallmentPlan
from domain.exceptions import ValidationError, PlanNotFoundError, InstallmentNotFoundError
from domain.interfaces import PlanRepository, MetricsPort, LoggingPort
from domain.interfaces.logging_port import bind_logger


class UpdateInstallmentValueService:
    def __init__(
        self,
        plan_repo: PlanRepository,
        metrics_port: Optional[MetricsPort] = None,
        logging_port: Optional[LoggingPort] = None
    ):
        self.plan_repo = plan_repo
        self.metrics_port = metrics_port
        self.logging_port = logging_port

    async def execute(self, plan_id: str, number: int, new_value: float) -> InstallmentPlan:
        """
        Correct the value of one installment (late fee, interest).

        Only `value` changes. The plan total is not re-checked, so the sum of
        installments may drift from the financed amount after a correction.
        """
        log = bind_logger(self.logging_port, plan_id=plan_id, installment_number=number, step="installment_correction")

        if new_value is None or isinstance(new_value, bool) or not math.isfinite(new_value) or new_value <= 0:
            log.warning("installment_correction_rejected", new_value=new_value)
            raise ValidationError("installment value must be greater than zero")

        plan = await self.plan_repo.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)
        installment = plan.get_installment(number)
        if installment is None:
            raise InstallmentNotFoundError(plan_id, number)

        previous_value = installment.value
        installment.set_value(new_value)
        await self.plan_repo.update_installment(installment)

        if self.metrics_port:
            self.metrics_port.increment_installment_corrections()
        log.info(
            "installment_value_updated",
            previous_value=previous_value,
            new_value=new_value,
            status=installment.status.value
        )
        return plan
