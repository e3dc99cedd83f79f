import time
from dataclasses import dataclass
from typing import Optional

from domain.entities import InstallmentPlan, Frequency, TradeIn
from domain.exceptions import ValidationError, PersistenceError
from domain.interfaces import PlanRepository, CustomerRepository, Clock, MetricsPort, LoggingPort
from domain.interfaces.logging_port import bind_logger


@dataclass
class PlanRequest:
    customer_id: Optional[str]
    product_name: str
    total_value: float
    installment_count: int
    frequency: Frequency
    brand: str = ""
    model: str = ""
    custom_fee: float = 0.0
    down_payment: float = 0.0
    trade_in: Optional[TradeIn] = None
    color: Optional[str] = None
    storage: Optional[str] = None
    serial_number: Optional[str] = None
    imei: Optional[str] = None


class CreatePlanService:
    def __init__(
        self,
        plan_repo: PlanRepository,
        customer_repo: CustomerRepository,
        clock: Clock,
        metrics_port: Optional[MetricsPort] = None,
        logging_port: Optional[LoggingPort] = None
    ):
        """
        Initialize the plan creation service.

        Args:
            plan_repo: Repository the new plan is persisted to (required)
            customer_repo: Repository the customer reference is resolved against (required)
            clock: Source of the creation timestamp (required)
            metrics_port: Metrics port for emitting metrics (optional)
            logging_port: Logging port for structured logging (optional)
        """
        self.plan_repo = plan_repo
        self.customer_repo = customer_repo
        self.clock = clock
        self.metrics_port = metrics_port
        self.logging_port = logging_port

    async def execute(self, request: PlanRequest) -> InstallmentPlan:
        """
        Create an installment plan and its schedule.

        The plan is only returned once it is persisted. Validation failures
        leave no trace; no ledger entry is recorded for the sale.

        Raises:
            ValidationError: no customer selected, invalid amounts or count,
                or nothing left to finance
            PersistenceError: the plan store rejected the write
        """
        start_time = time.time()
        log = bind_logger(
            self.logging_port,
            customer_id=request.customer_id or "unknown",
            step="plan_creation"
        )
        log.info(
            "plan_creation_started",
            total_value=request.total_value,
            custom_fee=request.custom_fee,
            down_payment=request.down_payment,
            trade_in_value=request.trade_in.value if request.trade_in else 0.0,
            installment_count=request.installment_count,
            frequency=request.frequency.value if isinstance(request.frequency, Frequency) else str(request.frequency)
        )

        try:
            customer = None
            if request.customer_id:
                customer = await self.customer_repo.get_customer(request.customer_id)
            if customer is None:
                raise ValidationError("no customer selected")

            plan = InstallmentPlan.create(
                customer=customer.snapshot(),
                product_name=request.product_name,
                brand=request.brand,
                model=request.model,
                total_value=request.total_value,
                frequency=request.frequency,
                installment_count=request.installment_count,
                created_at=self.clock.now(),
                custom_fee=request.custom_fee,
                down_payment=request.down_payment,
                trade_in=request.trade_in,
                color=request.color,
                storage=request.storage,
                serial_number=request.serial_number,
                imei=request.imei,
            )
        except ValidationError as e:
            log.warning("plan_creation_rejected", reason=str(e))
            if self.metrics_port:
                self.metrics_port.increment_plan_rejections(reason="validation")
            raise

        try:
            log.info("saving_plan", step="db_persist", plan_id=plan.id)
            saved = await self.plan_repo.save_plan(plan)
        except PersistenceError:
            log.error("plan_persist_failed", plan_id=plan.id, exc_info=True)
            if self.metrics_port:
                self.metrics_port.increment_plan_rejections(reason="persistence")
            raise

        if self.metrics_port:
            self.metrics_port.increment_plans_created(frequency=plan.frequency.value)

        total_duration = (time.time() - start_time) * 1000
        log.info(
            "plan_created",
            plan_id=saved.id,
            financed_amount=saved.financed_amount,
            installment_value=saved.installments[0].value,
            installment_count=saved.installments_count,
            duration_ms=round(total_duration, 2)
        )
        return saved
