from dataclasses import dataclass
from typing import Optional
from uuid import uuid4


@dataclass
class Customer:
    id: str
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    address_number: str = ""
    postal_code: str = ""
    document: str = ""  # CPF or CNPJ

    @staticmethod
    def create(
        name: str,
        phone: str = "",
        email: str = "",
        address: str = "",
        address_number: str = "",
        postal_code: str = "",
        document: str = "",
    ) -> 'Customer':
        return Customer(
            id=str(uuid4()),
            name=name,
            phone=phone,
            email=email,
            address=address,
            address_number=address_number,
            postal_code=postal_code,
            document=document,
        )

    @property
    def full_address(self) -> str:
        return f"{self.address}, {self.address_number or ''}"

    def snapshot(self) -> 'CustomerSnapshot':
        return CustomerSnapshot(
            customer_id=self.id,
            name=self.name,
            address=self.full_address,
        )


@dataclass(frozen=True)
class CustomerSnapshot:
    """Customer fields copied onto a plan at creation. Not linked to the live record."""
    customer_id: str
    name: str
    address: Optional[str] = None
