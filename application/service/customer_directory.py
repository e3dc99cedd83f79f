from dataclasses import fields
from typing import Any, Optional

from domain.entities import Customer
from domain.exceptions import ValidationError, CustomerNotFoundError
from domain.interfaces import CustomerRepository, LoggingPort
from domain.interfaces.logging_port import bind_logger
from domain.services import PlanSearch

_UPDATABLE_FIELDS = {f.name for f in fields(Customer)} - {"id"}


class CustomerDirectoryService:
    def __init__(
        self,
        customer_repo: CustomerRepository,
        logging_port: Optional[LoggingPort] = None
    ):
        """
        Initialize the customer directory.

        Args:
            customer_repo: Repository for customers (required)
            logging_port: Logging port for structured logging (optional)
        """
        self.customer_repo = customer_repo
        self.logging_port = logging_port

    async def register(self, name: str, **details: Any) -> Customer:
        if not name or not name.strip():
            raise ValidationError("customer name is required")
        unknown = set(details) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"unknown customer fields: {', '.join(sorted(unknown))}")

        customer = Customer.create(name=name.strip(), **details)
        saved = await self.customer_repo.save_customer(customer)
        bind_logger(self.logging_port, customer_id=saved.id, step="customer_directory").info("customer_registered")
        return saved

    async def update(self, customer_id: str, **updates: Any) -> Customer:
        """Apply a partial update. Plans keep the snapshot taken when they were created."""
        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"unknown customer fields: {', '.join(sorted(unknown))}")
        if "name" in updates and (not updates["name"] or not updates["name"].strip()):
            raise ValidationError("customer name is required")

        customer = await self.get(customer_id)
        for key, value in updates.items():
            if value is not None:
                setattr(customer, key, value)
        saved = await self.customer_repo.save_customer(customer)
        bind_logger(self.logging_port, customer_id=customer_id, step="customer_directory").info(
            "customer_updated", fields=sorted(updates)
        )
        return saved

    async def get(self, customer_id: str) -> Customer:
        customer = await self.customer_repo.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    async def search(self, term: Optional[str] = None) -> list[Customer]:
        return PlanSearch.filter_customers(await self.customer_repo.list_customers(), term)
