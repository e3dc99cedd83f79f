from typing import Optional
from pydantic import BaseModel
from domain.entities import Customer
from domain.services.postal_code import AddressLookup


class CustomerCreate(BaseModel):
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    address_number: str = ""
    postal_code: str = ""
    document: str = ""


class CustomerUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    address_number: Optional[str] = None
    postal_code: Optional[str] = None
    document: Optional[str] = None


class CustomerResponse(BaseModel):
    id: str
    name: str
    phone: str
    email: str
    address: str
    address_number: str
    postal_code: str
    document: str

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerResponse":
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


class AddressLookupResponse(BaseModel):
    found: bool
    postal_code: str
    street: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    formatted_address: Optional[str] = None
    notice: Optional[str] = None

    @classmethod
    def from_domain(cls, lookup: AddressLookup) -> "AddressLookupResponse":
        fragment = lookup.address
        return cls(
            found=lookup.found,
            postal_code=lookup.postal_code,
            street=fragment.street if fragment else None,
            neighborhood=fragment.neighborhood if fragment else None,
            city=fragment.city if fragment else None,
            state=fragment.state if fragment else None,
            formatted_address=lookup.formatted_address,
            notice=lookup.notice,
        )
