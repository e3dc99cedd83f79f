from copy import deepcopy
from typing import Optional

from domain.entities import Customer
from domain.interfaces import CustomerRepository


class CustomerRepoMemory(CustomerRepository):
    """Process-local CustomerRepository with copy-on-read/write semantics."""

    def __init__(self, customers: Optional[list[Customer]] = None):
        self._customers: dict[str, Customer] = {}
        for customer in customers or []:
            self._customers[customer.id] = deepcopy(customer)

    async def save_customer(self, customer: Customer) -> Customer:
        self._customers[customer.id] = deepcopy(customer)
        return deepcopy(customer)

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        customer = self._customers.get(customer_id)
        return deepcopy(customer) if customer else None

    async def list_customers(self) -> list[Customer]:
        return sorted((deepcopy(c) for c in self._customers.values()), key=lambda c: c.name.lower())
