from datetime import datetime
from typing import Optional
from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, relationship
from domain.entities.installment import Installment, InstallmentStatus
from infrastructure.db.models.base import Base


class InstallmentModel(Base):
    __tablename__ = "crediario_installment"

    plan_id: Mapped[str] = Column(String, ForeignKey("crediario_plan.id"), primary_key=True)
    number: Mapped[int] = Column(Integer, primary_key=True)
    due_date: Mapped[datetime] = Column(DateTime, nullable=False)
    value: Mapped[float] = Column(Float, nullable=False)
    status: Mapped[str] = Column(String, nullable=False)  # pending|paid, overdue is never stored
    paid_at: Mapped[Optional[datetime]] = Column(DateTime, nullable=True)

    # Relationship back to plan (many-to-one)
    plan_rel: Mapped["PlanModel"] = relationship(
        "PlanModel",
        back_populates="installments_rel"
    )

    def to_domain(self) -> Installment:
        """Convert database model to domain entity."""
        return Installment(
            plan_id=self.plan_id,
            number=self.number,
            due_date=self.due_date,
            value=self.value,
            status=InstallmentStatus(self.status),
            paid_at=self.paid_at,
        )

    @classmethod
    def from_domain(cls, installment: Installment) -> "InstallmentModel":
        """Convert domain Installment entity to database model."""
        return cls(
            plan_id=installment.plan_id,
            number=installment.number,
            due_date=installment.due_date,
            value=installment.value,
            status=installment.status.value,
            paid_at=installment.paid_at,
        )

    def apply(self, installment: Installment) -> None:
        """Copy the mutable fields (value, status, paid_at) from the domain entity."""
        self.value = installment.value
        self.status = installment.status.value
        self.paid_at = installment.paid_at
