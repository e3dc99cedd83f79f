from datetime import datetime
from typing import TYPE_CHECKING, Optional
from sqlalchemy import Column, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, relationship
from domain.entities.customer import CustomerSnapshot
from domain.entities.plan import InstallmentPlan, Frequency, TradeIn
from infrastructure.db.models.base import Base

if TYPE_CHECKING:
    from infrastructure.db.models.installments import InstallmentModel


class PlanModel(Base):
    __tablename__ = "crediario_plan"

    id: Mapped[str] = Column(String, primary_key=True)
    customer_id: Mapped[str] = Column(String, ForeignKey("crediario_customer.id"), nullable=False, index=True)
    # Snapshot taken at creation, not joined from crediario_customer
    customer_name: Mapped[str] = Column(String, nullable=False)
    customer_address: Mapped[Optional[str]] = Column(String, nullable=True)
    product_name: Mapped[str] = Column(String, nullable=False)
    brand: Mapped[str] = Column(String, nullable=False, default="")
    model: Mapped[str] = Column(String, nullable=False, default="")
    color: Mapped[Optional[str]] = Column(String, nullable=True)
    storage: Mapped[Optional[str]] = Column(String, nullable=True)
    serial_number: Mapped[Optional[str]] = Column(String, nullable=True)
    imei: Mapped[Optional[str]] = Column(String, nullable=True)
    total_value: Mapped[float] = Column(Float, nullable=False)
    frequency: Mapped[str] = Column(String, nullable=False)
    custom_fee: Mapped[float] = Column(Float, nullable=False, default=0.0)
    down_payment: Mapped[float] = Column(Float, nullable=False, default=0.0)
    trade_in_name: Mapped[Optional[str]] = Column(String, nullable=True)
    trade_in_value: Mapped[Optional[float]] = Column(Float, nullable=True)
    created_at: Mapped[datetime] = Column(DateTime, nullable=False)

    # Relationship to installments (one-to-many)
    installments_rel: Mapped[list["InstallmentModel"]] = relationship(
        "InstallmentModel",
        back_populates="plan_rel",
        cascade="all, delete-orphan",
        order_by="InstallmentModel.number",
        lazy="selectin"
    )

    def to_domain(self) -> InstallmentPlan:
        """Convert database model to domain entity."""
        trade_in = None
        if self.trade_in_name is not None or self.trade_in_value is not None:
            trade_in = TradeIn(name=self.trade_in_name or "", value=self.trade_in_value or 0.0)

        installments = sorted(
            (inst_model.to_domain() for inst_model in (self.installments_rel or [])),
            key=lambda inst: inst.number
        )
        return InstallmentPlan(
            id=self.id,
            customer=CustomerSnapshot(
                customer_id=self.customer_id,
                name=self.customer_name,
                address=self.customer_address,
            ),
            product_name=self.product_name,
            brand=self.brand or "",
            model=self.model or "",
            total_value=self.total_value,
            frequency=Frequency(self.frequency),
            created_at=self.created_at,
            custom_fee=self.custom_fee or 0.0,
            down_payment=self.down_payment or 0.0,
            trade_in=trade_in,
            color=self.color,
            storage=self.storage,
            serial_number=self.serial_number,
            imei=self.imei,
            installments=installments,
        )

    @classmethod
    def from_domain(cls, plan: InstallmentPlan) -> "PlanModel":
        """Convert domain plan to database model.

        Installments are not set here. The repository attaches them before
        the plan is added to the session.
        """
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
            frequency=plan.frequency.value,
            custom_fee=plan.custom_fee,
            down_payment=plan.down_payment,
            trade_in_name=plan.trade_in.name if plan.trade_in else None,
            trade_in_value=plan.trade_in.value if plan.trade_in else None,
            created_at=plan.created_at,
        )
