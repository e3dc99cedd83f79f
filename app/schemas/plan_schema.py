from datetime import datetime
from typing import Optional, List, Literal
from pydantic import BaseModel, Field

from application.service.get_plan import PlanView
from application.service.receivables import ReceivablesSummary
from domain.config import get_plan_config
from domain.entities import Installment


class TradeInSchema(BaseModel):
    name: str
    value: float = Field(ge=0)


class PlanCreate(BaseModel):
    customer_id: Optional[str] = None
    product_name: str
    brand: str = ""
    model: str = ""
    color: Optional[str] = None
    storage: Optional[str] = None
    serial_number: Optional[str] = None
    imei: Optional[str] = None
    total_value: float = Field(ge=0)
    custom_fee: float = Field(default=0.0, ge=0)
    down_payment: float = Field(default=0.0, ge=0)
    trade_in: Optional[TradeInSchema] = None
    installment_count: int = Field(
        default_factory=lambda: get_plan_config().default_installments,
        ge=1,
        le=get_plan_config().max_installments,
    )
    frequency: Literal["weekly", "monthly"] = Field(default_factory=lambda: get_plan_config().default_frequency)


class InstallmentValueUpdate(BaseModel):
    # checked by the service so every caller gets the same rule
    value: float


class InstallmentResponse(BaseModel):
    number: int
    due_date: datetime
    value: float
    status: str
    display_status: str
    paid_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, installment: Installment, now: datetime) -> "InstallmentResponse":
        return cls(
            number=installment.number,
            due_date=installment.due_date,
            value=installment.value,
            status=installment.status.value,
            display_status=installment.display_status(now).value,
            paid_at=installment.paid_at,
        )


class PlanStatusResponse(BaseModel):
    standing: str
    is_settled: bool
    is_delinquent: bool
    is_current: bool
    paid_total: float
    remaining_total: float
    overdue_count: int


class PlanResponse(BaseModel):
    id: str
    customer_id: str
    customer_name: str
    customer_address: Optional[str] = None
    product_name: str
    brand: str
    model: str
    color: Optional[str] = None
    storage: Optional[str] = None
    serial_number: Optional[str] = None
    imei: Optional[str] = None
    total_value: float
    custom_fee: float
    down_payment: float
    trade_in: Optional[TradeInSchema] = None
    financed_amount: float
    frequency: str
    created_at: datetime
    installments: List[InstallmentResponse]
    status: PlanStatusResponse

    @classmethod
    def from_view(cls, view: PlanView) -> "PlanResponse":
        plan, classification = view.plan, view.classification
        now = classification.evaluated_at
        return cls(
            id=plan.id,
            customer_id=plan.customer.customer_id,
            customer_name=plan.customer.name,
            customer_address=plan.customer.address,
            product_name=plan.product_name,
            brand=plan.brand,
            model=plan.model,
            color=plan.color,
            storage=plan.storage,
            serial_number=plan.serial_number,
            imei=plan.imei,
            total_value=plan.total_value,
            custom_fee=plan.custom_fee,
            down_payment=plan.down_payment,
            trade_in=TradeInSchema(name=plan.trade_in.name, value=plan.trade_in.value) if plan.trade_in else None,
            financed_amount=plan.financed_amount,
            frequency=plan.frequency.value,
            created_at=plan.created_at,
            installments=[InstallmentResponse.from_domain(inst, now) for inst in plan.installments],
            status=PlanStatusResponse(
                standing=classification.standing.value,
                is_settled=classification.is_settled,
                is_delinquent=classification.is_delinquent,
                is_current=classification.is_current,
                paid_total=classification.paid_total,
                remaining_total=classification.remaining_total,
                overdue_count=classification.overdue_count,
            ),
        )


class ReceivablesResponse(BaseModel):
    pending_total: float
    overdue_total: float
    plans_current: int
    plans_delinquent: int
    plans_settled: int

    @classmethod
    def from_domain(cls, summary: ReceivablesSummary) -> "ReceivablesResponse":
        return cls(
            pending_total=summary.pending_total,
            overdue_total=summary.overdue_total,
            plans_current=summary.plans_current,
            plans_delinquent=summary.plans_delinquent,
            plans_settled=summary.plans_settled,
        )
