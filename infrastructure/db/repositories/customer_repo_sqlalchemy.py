from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from domain.entities import Customer
from domain.exceptions import PersistenceError
from domain.interfaces import CustomerRepository
from infrastructure.db.models.customers import CustomerModel


class CustomerRepoSqlalchemy(CustomerRepository):
    """SQLAlchemy implementation of CustomerRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save_customer(self, customer: Customer) -> Customer:
        """Insert or update a customer (merge on primary key)."""
        try:
            await self.db.merge(CustomerModel.from_domain(customer))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"could not save customer {customer.id}: {e}") from e
        return customer

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        try:
            customer_model = await self.db.get(CustomerModel, customer_id)
        except SQLAlchemyError as e:
            raise PersistenceError(f"could not load customer {customer_id}: {e}") from e
        return customer_model.to_domain() if customer_model else None

    async def list_customers(self) -> list[Customer]:
        stmt = select(CustomerModel).order_by(CustomerModel.name)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"could not list customers: {e}") from e
        return [cm.to_domain() for cm in result.scalars().all()]
