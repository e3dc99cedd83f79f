from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class InstallmentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"


class InstallmentDisplayStatus(Enum):
    """Status shown to users. OVERDUE is derived, never stored."""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


@dataclass
class Installment:
    plan_id: str
    number: int
    due_date: datetime
    value: float
    status: InstallmentStatus = InstallmentStatus.PENDING
    paid_at: Optional[datetime] = None

    @staticmethod
    def create(plan_id: str, number: int, due_date: datetime, value: float) -> 'Installment':
        return Installment(
            plan_id=plan_id,
            number=number,
            due_date=due_date,
            value=value,
            status=InstallmentStatus.PENDING,
            paid_at=None
        )

    @property
    def is_paid(self) -> bool:
        return self.status == InstallmentStatus.PAID

    def is_overdue(self, now: datetime) -> bool:
        return not self.is_paid and self.due_date < now

    def display_status(self, now: datetime) -> InstallmentDisplayStatus:
        if self.is_overdue(now):
            return InstallmentDisplayStatus.OVERDUE
        return InstallmentDisplayStatus(self.status.value)

    def mark_paid(self, paid_at: datetime) -> 'Installment':
        self.status = InstallmentStatus.PAID
        self.paid_at = paid_at
        return self

    def set_value(self, value: float) -> 'Installment':
        self.value = value
        return self
