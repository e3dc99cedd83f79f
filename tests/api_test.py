"""
HTTP tests for the v1 router.

Repositories, clock and postal code port are swapped for in-memory
implementations through FastAPI dependency overrides, so no database or
network is needed.
"""
import pytest
from unittest.mock import AsyncMock
from fastapi import status
from fastapi.testclient import TestClient

from app.main import app
from app.routers import v1
from domain.exceptions import PersistenceError, PostalCodeLookupError
from domain.services.postal_code import AddressFragment
from infrastructure.memory import PlanRepoMemory


class FailingPlanRepo(PlanRepoMemory):
    async def save_plan(self, plan):
        raise PersistenceError("database unavailable")


@pytest.fixture
def postal_code_port():
    return AsyncMock()


@pytest.fixture
def client(plan_repo, customer_repo, clock, postal_code_port):
    app.dependency_overrides[v1.get_plan_repo] = lambda: plan_repo
    app.dependency_overrides[v1.get_customer_repo] = lambda: customer_repo
    app.dependency_overrides[v1.get_clock] = lambda: clock
    app.dependency_overrides[v1.get_postal_code_port] = lambda: postal_code_port
    yield TestClient(app)
    app.dependency_overrides.clear()


def _plan_payload(**overrides) -> dict:
    payload = {
        "customer_id": "1",
        "product_name": "iPhone 13",
        "brand": "Apple",
        "model": "A2633",
        "total_value": 1000.0,
        "down_payment": 200.0,
        "installment_count": 4,
        "frequency": "monthly",
    }
    payload.update(overrides)
    return payload


def _create_plan(client, **overrides) -> dict:
    response = client.post("/v1/plans", json=_plan_payload(**overrides))
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_metrics_exposed(self, client):
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "crediario_plans_created" in response.text


class TestPlans:

    def test_create_plan(self, client):
        body = _create_plan(client)

        assert body["customer_name"] == "João Silva"
        assert body["customer_address"] == "Rua das Flores, Bairro Jardim, 123"
        assert body["financed_amount"] == 800.0
        assert [i["value"] for i in body["installments"]] == [200.0] * 4
        assert body["installments"][0]["due_date"].startswith("2026-02-15")
        assert body["installments"][0]["status"] == "pending"
        assert body["status"]["standing"] == "current"

    def test_create_plan_without_customer(self, client):
        response = client.post("/v1/plans", json=_plan_payload(customer_id=None))

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"]["error"] == "validation_error"
        assert client.get("/v1/plans").json() == []

    def test_create_plan_nothing_to_finance(self, client):
        response = client.post("/v1/plans", json=_plan_payload(total_value=500.0, custom_fee=50.0, down_payment=600.0))

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"]["message"] == "financed amount is zero or negative"

    def test_create_plan_rejects_count_above_limit(self, client):
        response = client.post("/v1/plans", json=_plan_payload(installment_count=25))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_plan_uses_configured_defaults(self, client):
        payload = _plan_payload(total_value=300.0, down_payment=0.0)
        del payload["installment_count"]
        del payload["frequency"]

        body = client.post("/v1/plans", json=payload).json()

        assert body["frequency"] == "monthly"
        assert len(body["installments"]) == 3

    def test_create_plan_persistence_failure(self, customer_repo, clock):
        app.dependency_overrides[v1.get_plan_repo] = lambda: FailingPlanRepo()
        app.dependency_overrides[v1.get_customer_repo] = lambda: customer_repo
        app.dependency_overrides[v1.get_clock] = lambda: clock
        try:
            response = TestClient(app).post("/v1/plans", json=_plan_payload())
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["detail"]["error"] == "persistence_error"

    def test_get_plan(self, client):
        plan_id = _create_plan(client)["id"]

        response = client.get(f"/v1/plans/{plan_id}")
        assert response.status_code == 200
        assert response.json()["id"] == plan_id

        missing = client.get("/v1/plans/does-not-exist")
        assert missing.status_code == status.HTTP_404_NOT_FOUND
        assert missing.json()["detail"]["error"] == "plan_not_found"

    def test_list_plans_with_search(self, client):
        _create_plan(client)
        _create_plan(client, customer_id="2", product_name="Galaxy S23")

        assert len(client.get("/v1/plans").json()) == 2
        found = client.get("/v1/plans", params={"search": "galaxy"}).json()
        assert [p["customer_name"] for p in found] == ["Maria Souza"]

    def test_pay_installment_twice(self, client, clock):
        plan_id = _create_plan(client)["id"]
        clock.advance(days=3)

        first = client.post(f"/v1/plans/{plan_id}/installments/1/pay")
        assert first.status_code == 200
        paid = first.json()["installments"][0]
        assert paid["status"] == "paid"
        assert paid["paid_at"].startswith("2026-01-18")
        assert first.json()["status"]["paid_total"] == 200.0

        second = client.post(f"/v1/plans/{plan_id}/installments/1/pay")
        assert second.status_code == status.HTTP_409_CONFLICT
        assert second.json()["detail"]["error"] == "invalid_state"

    def test_pay_unknown_installment(self, client):
        plan_id = _create_plan(client)["id"]
        response = client.post(f"/v1/plans/{plan_id}/installments/9/pay")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_installment_value(self, client):
        plan_id = _create_plan(client)["id"]

        response = client.patch(f"/v1/plans/{plan_id}/installments/2", json={"value": 215.0})
        assert response.status_code == 200
        assert [i["value"] for i in response.json()["installments"]] == [200.0, 215.0, 200.0, 200.0]

        rejected = client.patch(f"/v1/plans/{plan_id}/installments/2", json={"value": 0})
        assert rejected.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert rejected.json()["detail"]["error"] == "validation_error"

    def test_overdue_is_reported_not_stored(self, client, clock):
        plan_id = _create_plan(client)["id"]
        clock.advance(days=45)

        body = client.get(f"/v1/plans/{plan_id}").json()
        first = body["installments"][0]
        assert first["status"] == "pending"
        assert first["display_status"] == "overdue"
        assert body["status"]["standing"] == "delinquent"

    def test_receivables(self, client, clock):
        plan_id = _create_plan(client)["id"]
        client.post(f"/v1/plans/{plan_id}/installments/1/pay")
        clock.advance(days=60)

        body = client.get("/v1/receivables").json()
        assert body["pending_total"] == 600.0
        assert body["overdue_total"] == 200.0
        assert body["plans_delinquent"] == 1


class TestCustomers:

    def test_register_and_fetch(self, client):
        response = client.post("/v1/customers", json={"name": "Ana Lima", "phone": "(21) 97777-7777"})
        assert response.status_code == status.HTTP_201_CREATED
        customer_id = response.json()["id"]

        assert client.get(f"/v1/customers/{customer_id}").json()["name"] == "Ana Lima"

    def test_register_without_name(self, client):
        response = client.post("/v1/customers", json={"name": " "})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_search(self, client):
        body = client.get("/v1/customers", params={"search": "souza"}).json()
        assert [c["id"] for c in body] == ["2"]

    def test_missing_customer(self, client):
        assert client.get("/v1/customers/404").status_code == status.HTTP_404_NOT_FOUND

    def test_update_does_not_touch_existing_plans(self, client):
        plan_id = _create_plan(client)["id"]

        response = client.patch("/v1/customers/1", json={"name": "João Pereira", "address_number": "77"})
        assert response.status_code == 200
        assert response.json()["name"] == "João Pereira"
        assert response.json()["phone"] == "(11) 99999-9999"

        plan = client.get(f"/v1/plans/{plan_id}").json()
        assert plan["customer_name"] == "João Silva"
        assert plan["customer_address"] == "Rua das Flores, Bairro Jardim, 123"


class TestPostalCodes:

    def test_found(self, client, postal_code_port):
        postal_code_port.lookup.return_value = AddressFragment(
            street="Praça da Sé", neighborhood="Sé", city="São Paulo", state="SP"
        )

        body = client.get("/v1/postal-codes/01001-000").json()

        assert body["found"] is True
        assert body["postal_code"] == "01001000"
        assert body["formatted_address"] == "Praça da Sé, Sé - São Paulo/SP"

    def test_lookup_failure_still_answers_200(self, client, postal_code_port):
        postal_code_port.lookup.side_effect = PostalCodeLookupError("timed out")

        response = client.get("/v1/postal-codes/01001000")

        assert response.status_code == 200
        assert response.json()["found"] is False
        assert response.json()["notice"] is not None

    def test_invalid_code(self, client, postal_code_port):
        body = client.get("/v1/postal-codes/123").json()
        assert body["found"] is False
        postal_code_port.lookup.assert_not_awaited()
