from sqlalchemy import Column, String
from sqlalchemy.orm import Mapped
from domain.entities.customer import Customer
from infrastructure.db.models.base import Base


class CustomerModel(Base):
    __tablename__ = "crediario_customer"

    id: Mapped[str] = Column(String, primary_key=True)
    name: Mapped[str] = Column(String, nullable=False, index=True)
    phone: Mapped[str] = Column(String, nullable=False, default="")
    email: Mapped[str] = Column(String, nullable=False, default="")
    address: Mapped[str] = Column(String, nullable=False, default="")
    address_number: Mapped[str] = Column(String, nullable=False, default="")
    postal_code: Mapped[str] = Column(String, nullable=False, default="")
    document: Mapped[str] = Column(String, nullable=False, default="")

    def to_domain(self) -> Customer:
        """Convert database model to domain entity."""
        return Customer(
            id=self.id,
            name=self.name,
            phone=self.phone or "",
            email=self.email or "",
            address=self.address or "",
            address_number=self.address_number or "",
            postal_code=self.postal_code or "",
            document=self.document or "",
        )

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerModel":
        """Convert domain Customer entity to database model."""
        return cls(
            id=customer.id,
            name=customer.name,
            phone=customer.phone,
            email=customer.email,
            address=customer.address,
            address_number=customer.address_number,
            postal_code=customer.postal_code,
            document=customer.document,
        )
