from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from .customer import CustomerSnapshot
from .installment import Installment


class Frequency(Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class TradeIn:
    """A physical item accepted as partial payment at its appraised value."""
    name: str
    value: float


@dataclass
class InstallmentPlan:
    id: str
    customer: CustomerSnapshot
    product_name: str
    brand: str
    model: str
    total_value: float
    frequency: Frequency
    created_at: datetime
    custom_fee: float = 0.0
    down_payment: float = 0.0
    trade_in: Optional[TradeIn] = None
    color: Optional[str] = None
    storage: Optional[str] = None
    serial_number: Optional[str] = None
    imei: Optional[str] = None
    installments: list[Installment] = field(default_factory=list)

    @staticmethod
    def create(
        customer: CustomerSnapshot,
        product_name: str,
        brand: str,
        model: str,
        total_value: float,
        frequency: Frequency,
        installment_count: int,
        created_at: datetime,
        custom_fee: float = 0.0,
        down_payment: float = 0.0,
        trade_in: Optional[TradeIn] = None,
        color: Optional[str] = None,
        storage: Optional[str] = None,
        serial_number: Optional[str] = None,
        imei: Optional[str] = None,
    ) -> 'InstallmentPlan':
        # deferred: domain.services imports domain.entities
        from domain.services.schedule import financed_amount, build_schedule

        financed = financed_amount(
            total_value=total_value,
            custom_fee=custom_fee,
            down_payment=down_payment,
            trade_in_value=trade_in.value if trade_in else 0.0,
        )
        plan = InstallmentPlan(
            id=str(uuid4()),
            customer=customer,
            product_name=product_name,
            brand=brand,
            model=model,
            total_value=total_value + custom_fee,
            frequency=frequency,
            created_at=created_at,
            custom_fee=custom_fee,
            down_payment=down_payment,
            trade_in=trade_in,
            color=color,
            storage=storage,
            serial_number=serial_number,
            imei=imei,
        )
        plan.installments = build_schedule(
            plan_id=plan.id,
            financed=financed,
            installment_count=installment_count,
            frequency=frequency,
            start=created_at,
        )
        return plan

    @property
    def customer_id(self) -> str:
        return self.customer.customer_id

    @property
    def customer_name(self) -> str:
        return self.customer.name

    @property
    def trade_in_value(self) -> float:
        return self.trade_in.value if self.trade_in else 0.0

    @property
    def financed_amount(self) -> float:
        return max(0.0, self.total_value - self.down_payment - self.trade_in_value)

    @property
    def installments_count(self) -> int:
        return len(self.installments)

    def get_installment(self, number: int) -> Optional[Installment]:
        for installment in self.installments:
            if installment.number == number:
                return installment
        return None
