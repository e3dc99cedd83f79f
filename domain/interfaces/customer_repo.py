from typing_extensions import Protocol
from domain.entities import Customer
from typing import Optional


class CustomerRepository(Protocol):
    async def save_customer(self, customer: Customer) -> Customer: ...
    async def get_customer(self, customer_id: str) -> Optional[Customer]: ...
    async def list_customers(self) -> list[Customer]: ...
