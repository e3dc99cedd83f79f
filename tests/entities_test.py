# entity tests

from datetime import datetime, timedelta

from domain.entities import (
    Customer,
    CustomerSnapshot,
    Installment,
    InstallmentStatus,
    InstallmentDisplayStatus,
    InstallmentPlan,
    Frequency,
    TradeIn,
)


def test_customer_entity_create():
    customer = Customer.create(name="João Silva", phone="(11) 99999-9999")
    assert customer.id is not None
    assert customer.name == "João Silva"
    assert customer.phone == "(11) 99999-9999"
    assert customer.email == ""


def test_customer_full_address_with_and_without_number():
    customer = Customer(id="1", name="João", address="Rua das Flores", address_number="123")
    assert customer.full_address == "Rua das Flores, 123"
    customer.address_number = ""
    assert customer.full_address == "Rua das Flores, "


def test_customer_snapshot_is_a_copy():
    customer = Customer(id="1", name="João", address="Rua A", address_number="1")
    snapshot = customer.snapshot()
    customer.name = "João Pedro"
    customer.address = "Rua B"
    assert snapshot == CustomerSnapshot(customer_id="1", name="João", address="Rua A, 1")


def test_installment_entity_create():
    due = datetime(2026, 2, 15)
    installment = Installment.create(plan_id="p1", number=1, due_date=due, value=200.0)
    assert installment.plan_id == "p1"
    assert installment.number == 1
    assert installment.due_date == due
    assert installment.value == 200.0
    assert installment.status == InstallmentStatus.PENDING
    assert installment.paid_at is None


def test_installment_display_status():
    due = datetime(2026, 2, 15)
    installment = Installment.create(plan_id="p1", number=1, due_date=due, value=200.0)

    assert installment.display_status(due - timedelta(days=1)) == InstallmentDisplayStatus.PENDING
    # due date itself is not overdue, strictly before now is
    assert installment.display_status(due) == InstallmentDisplayStatus.PENDING
    assert installment.display_status(due + timedelta(seconds=1)) == InstallmentDisplayStatus.OVERDUE

    installment.mark_paid(due + timedelta(days=3))
    assert installment.display_status(due + timedelta(days=10)) == InstallmentDisplayStatus.PAID
    # overdue is never stored
    assert installment.status == InstallmentStatus.PAID


def test_plan_entity_create():
    created_at = datetime(2026, 1, 15, 10, 0)
    plan = InstallmentPlan.create(
        customer=CustomerSnapshot(customer_id="1", name="João", address="Rua A, 1"),
        product_name="iPhone 13",
        brand="Apple",
        model="A2633",
        total_value=1000.0,
        frequency=Frequency.MONTHLY,
        installment_count=4,
        created_at=created_at,
        custom_fee=100.0,
        down_payment=300.0,
        trade_in=TradeIn(name="iPhone 8", value=200.0),
        imei="354810000000001",
    )
    assert plan.id is not None
    assert plan.customer_id == "1"
    assert plan.customer_name == "João"
    assert plan.total_value == 1100.0
    assert plan.trade_in_value == 200.0
    assert plan.financed_amount == 600.0
    assert plan.created_at == created_at
    assert plan.installments_count == 4
    assert all(inst.plan_id == plan.id for inst in plan.installments)
    assert plan.get_installment(2).number == 2
    assert plan.get_installment(5) is None
