from datetime import datetime

import pytest

from domain.entities import Customer
from infrastructure.clock import FixedClock
from infrastructure.memory import CustomerRepoMemory, PlanRepoMemory

PLAN_START = datetime(2026, 1, 15, 10, 0, 0)


@pytest.fixture
def clock():
    return FixedClock(PLAN_START)


@pytest.fixture
def customer():
    return Customer(
        id="1",
        name="João Silva",
        phone="(11) 99999-9999",
        email="joao@email.com",
        address="Rua das Flores, Bairro Jardim",
        address_number="123",
        postal_code="01001-000",
        document="123.456.789-00",
    )


@pytest.fixture
def customer_repo(customer):
    return CustomerRepoMemory([
        customer,
        Customer(id="2", name="Maria Souza", phone="(11) 88888-8888", address="Av Paulista, Centro", address_number="1000"),
    ])


@pytest.fixture
def plan_repo():
    return PlanRepoMemory()
