# use cases test

from datetime import datetime, timedelta
import pytest
import pytest_asyncio

from application.service.create_plan import CreatePlanService, PlanRequest
from application.service.get_plan import GetPlanService
from application.service.list_plans import ListPlansService
from application.service.pay_installment import PayInstallmentService
from application.service.receivables import ReceivablesService
from application.service.update_installment_value import UpdateInstallmentValueService
from application.service.customer_directory import CustomerDirectoryService
from domain.entities import Frequency, InstallmentStatus, TradeIn
from domain.exceptions import (
    ValidationError,
    InvalidStateError,
    PlanNotFoundError,
    InstallmentNotFoundError,
    PersistenceError,
)
from domain.interfaces import MetricsPort, LoggingPort
from domain.services import PlanStanding
from infrastructure.memory import PlanRepoMemory


def _request(**overrides) -> PlanRequest:
    kwargs = dict(
        customer_id="1",
        product_name="iPhone 13",
        brand="Apple",
        model="A2633",
        total_value=1000.0,
        installment_count=4,
        frequency=Frequency.MONTHLY,
        down_payment=200.0,
    )
    kwargs.update(overrides)
    return PlanRequest(**kwargs)


@pytest.fixture
def create_service(plan_repo, customer_repo, clock):
    return CreatePlanService(plan_repo=plan_repo, customer_repo=customer_repo, clock=clock)


@pytest_asyncio.fixture
async def created_plan(create_service):
    return await create_service.execute(_request(installment_count=3, down_payment=100.0, total_value=400.0))


class FailingPlanRepo(PlanRepoMemory):
    async def save_plan(self, plan):
        raise PersistenceError("connection refused")


class TestCreatePlan:

    @pytest.mark.asyncio
    async def test_creates_and_persists_plan(self, create_service, plan_repo, clock):
        plan = await create_service.execute(_request())

        assert plan.id is not None
        assert plan.financed_amount == 800.0
        assert [inst.value for inst in plan.installments] == [200.0] * 4
        assert plan.created_at == clock.now()
        assert plan.customer.name == "João Silva"
        assert plan.customer.address == "Rua das Flores, Bairro Jardim, 123"

        stored = await plan_repo.get_plan(plan.id)
        assert stored is not None
        assert len(stored.installments) == 4

    @pytest.mark.asyncio
    async def test_missing_customer_rejected(self, create_service, plan_repo):
        with pytest.raises(ValidationError, match="no customer selected"):
            await create_service.execute(_request(customer_id=None))
        with pytest.raises(ValidationError, match="no customer selected"):
            await create_service.execute(_request(customer_id="does-not-exist"))
        assert await plan_repo.list_plans() == []

    @pytest.mark.asyncio
    async def test_nothing_to_finance_is_rejected_without_side_effects(self, create_service, plan_repo):
        with pytest.raises(ValidationError, match="financed amount is zero or negative"):
            await create_service.execute(_request(total_value=500.0, custom_fee=50.0, down_payment=600.0))
        assert await plan_repo.list_plans() == []

    @pytest.mark.asyncio
    async def test_trade_in_reduces_financed_amount(self, create_service):
        plan = await create_service.execute(_request(
            total_value=1500.0, down_payment=0.0, trade_in=TradeIn(name="iPhone 8", value=300.0),
            installment_count=6, frequency=Frequency.WEEKLY,
        ))
        assert plan.financed_amount == 1200.0
        assert plan.installments[0].value == 200.0
        assert plan.installments[1].due_date - plan.installments[0].due_date == timedelta(days=7)

    @pytest.mark.asyncio
    async def test_customer_edits_do_not_reach_existing_plans(self, create_service, customer_repo, plan_repo):
        plan = await create_service.execute(_request())

        directory = CustomerDirectoryService(customer_repo)
        await directory.update("1", name="João S. Pereira", address="Rua Nova", address_number="9")

        stored = await plan_repo.get_plan(plan.id)
        assert stored.customer.name == "João Silva"
        assert stored.customer.address == "Rua das Flores, Bairro Jardim, 123"

    @pytest.mark.asyncio
    async def test_persistence_failure_propagates(self, customer_repo, clock, mocker):
        metrics = mocker.Mock(spec=MetricsPort)
        service = CreatePlanService(
            plan_repo=FailingPlanRepo(), customer_repo=customer_repo, clock=clock, metrics_port=metrics
        )
        with pytest.raises(PersistenceError):
            await service.execute(_request())
        metrics.increment_plan_rejections.assert_called_once_with(reason="persistence")
        metrics.increment_plans_created.assert_not_called()

    @pytest.mark.asyncio
    async def test_emits_metrics_and_logs(self, plan_repo, customer_repo, clock, mocker):
        metrics = mocker.Mock(spec=MetricsPort)
        logging_port = mocker.Mock(spec=LoggingPort)
        bound = logging_port.bind.return_value
        service = CreatePlanService(
            plan_repo=plan_repo, customer_repo=customer_repo, clock=clock,
            metrics_port=metrics, logging_port=logging_port,
        )

        plan = await service.execute(_request(frequency=Frequency.WEEKLY))

        metrics.increment_plans_created.assert_called_once_with(frequency="weekly")
        logging_port.bind.assert_called_once_with(customer_id="1", step="plan_creation")
        events = [c.args[0] for c in bound.info.call_args_list]
        assert events[0] == "plan_creation_started"
        assert events[-1] == "plan_created"
        assert bound.info.call_args_list[-1].kwargs["plan_id"] == plan.id

    @pytest.mark.asyncio
    async def test_validation_failure_counts_rejection(self, plan_repo, customer_repo, clock, mocker):
        metrics = mocker.Mock(spec=MetricsPort)
        service = CreatePlanService(plan_repo=plan_repo, customer_repo=customer_repo, clock=clock, metrics_port=metrics)
        with pytest.raises(ValidationError):
            await service.execute(_request(installment_count=0))
        metrics.increment_plan_rejections.assert_called_once_with(reason="validation")


class TestPayInstallment:

    @pytest.mark.asyncio
    async def test_marks_paid_at_call_time(self, created_plan, plan_repo, clock):
        clock.advance(days=10)
        service = PayInstallmentService(plan_repo, clock)

        plan = await service.execute(created_plan.id, 1)

        assert plan.get_installment(1).status == InstallmentStatus.PAID
        assert plan.get_installment(1).paid_at == clock.now()
        stored = await plan_repo.get_plan(created_plan.id)
        assert stored.get_installment(1).status == InstallmentStatus.PAID
        assert stored.get_installment(1).paid_at == clock.now()
        assert stored.get_installment(1).value == created_plan.get_installment(1).value

    @pytest.mark.asyncio
    async def test_other_installments_unchanged(self, created_plan, plan_repo, clock):
        await PayInstallmentService(plan_repo, clock).execute(created_plan.id, 2)

        stored = await plan_repo.get_plan(created_plan.id)
        for number in (1, 3):
            assert stored.get_installment(number) == created_plan.get_installment(number)

    @pytest.mark.asyncio
    async def test_double_pay_rejected(self, created_plan, plan_repo, clock):
        service = PayInstallmentService(plan_repo, clock)
        await service.execute(created_plan.id, 1)
        first_paid_at = (await plan_repo.get_plan(created_plan.id)).get_installment(1).paid_at

        clock.advance(days=1)
        with pytest.raises(InvalidStateError, match="already paid"):
            await service.execute(created_plan.id, 1)

        assert (await plan_repo.get_plan(created_plan.id)).get_installment(1).paid_at == first_paid_at

    @pytest.mark.asyncio
    async def test_unknown_plan_or_installment(self, created_plan, plan_repo, clock):
        service = PayInstallmentService(plan_repo, clock)
        with pytest.raises(PlanNotFoundError):
            await service.execute("missing", 1)
        with pytest.raises(InstallmentNotFoundError):
            await service.execute(created_plan.id, 4)

    @pytest.mark.asyncio
    async def test_emits_paid_metric(self, created_plan, plan_repo, clock, mocker):
        metrics = mocker.Mock(spec=MetricsPort)
        await PayInstallmentService(plan_repo, clock, metrics_port=metrics).execute(created_plan.id, 1)
        metrics.increment_installments_paid.assert_called_once_with()


class TestUpdateInstallmentValue:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_value", [0, -10.0, float("nan"), float("inf")])
    async def test_non_positive_value_rejected(self, created_plan, plan_repo, bad_value):
        service = UpdateInstallmentValueService(plan_repo)
        with pytest.raises(ValidationError):
            await service.execute(created_plan.id, 1, bad_value)
        stored = await plan_repo.get_plan(created_plan.id)
        assert stored.get_installment(1).value == created_plan.get_installment(1).value

    @pytest.mark.asyncio
    async def test_sets_only_that_value(self, created_plan, plan_repo):
        service = UpdateInstallmentValueService(plan_repo)
        await service.execute(created_plan.id, 2, 115.5)

        stored = await plan_repo.get_plan(created_plan.id)
        corrected = stored.get_installment(2)
        original = created_plan.get_installment(2)
        assert corrected.value == 115.5
        assert corrected.due_date == original.due_date
        assert corrected.status == original.status
        assert corrected.paid_at is None
        assert stored.get_installment(1) == created_plan.get_installment(1)
        assert stored.get_installment(3) == created_plan.get_installment(3)
        # the original total is not re-checked
        assert sum(i.value for i in stored.installments) != pytest.approx(stored.financed_amount)

    @pytest.mark.asyncio
    async def test_allowed_on_paid_installment(self, created_plan, plan_repo, clock):
        await PayInstallmentService(plan_repo, clock).execute(created_plan.id, 1)
        plan = await UpdateInstallmentValueService(plan_repo).execute(created_plan.id, 1, 99.0)
        assert plan.get_installment(1).value == 99.0
        assert plan.get_installment(1).status == InstallmentStatus.PAID

    @pytest.mark.asyncio
    async def test_unknown_installment(self, created_plan, plan_repo):
        with pytest.raises(InstallmentNotFoundError):
            await UpdateInstallmentValueService(plan_repo).execute(created_plan.id, 9, 10.0)


class TestQueries:

    @pytest.mark.asyncio
    async def test_pay_first_of_three_then_get(self, created_plan, plan_repo, clock):
        await PayInstallmentService(plan_repo, clock).execute(created_plan.id, 1)

        view = await GetPlanService(plan_repo, clock).execute(created_plan.id)
        assert view.classification.is_settled is False
        assert view.classification.is_delinquent is False
        assert view.classification.paid_total == pytest.approx(100.0)
        assert view.classification.remaining_total == pytest.approx(200.0)

        clock.current = created_plan.get_installment(2).due_date + timedelta(days=1)
        view = await GetPlanService(plan_repo, clock).execute(created_plan.id)
        assert view.classification.is_delinquent is True

    @pytest.mark.asyncio
    async def test_get_missing_plan_returns_none(self, plan_repo, clock):
        assert await GetPlanService(plan_repo, clock).execute("missing") is None

    @pytest.mark.asyncio
    async def test_search_by_customer_product_or_id(self, create_service, plan_repo, clock):
        first = await create_service.execute(_request(product_name="Tela iPhone 13"))
        second = await create_service.execute(_request(customer_id="2", product_name="Bateria Samsung S20"))
        service = ListPlansService(plan_repo, clock)

        assert {v.plan.id for v in await service.execute()} == {first.id, second.id}
        assert [v.plan.id for v in await service.execute("maria")] == [second.id]
        assert [v.plan.id for v in await service.execute("IPHONE")] == [first.id]
        assert [v.plan.id for v in await service.execute(first.id[:8])] == [first.id]
        assert await service.execute("nobody") == []

    @pytest.mark.asyncio
    async def test_receivables(self, create_service, plan_repo, clock):
        current = await create_service.execute(_request(total_value=300.0, down_payment=0.0, installment_count=3))
        late = await create_service.execute(_request(customer_id="2", total_value=200.0, down_payment=0.0,
                                                      installment_count=2, frequency=Frequency.WEEKLY))
        settled = await create_service.execute(_request(total_value=50.0, down_payment=0.0, installment_count=1))
        pay = PayInstallmentService(plan_repo, clock)
        await pay.execute(settled.id, 1)
        await pay.execute(current.id, 1)

        clock.current = datetime(2026, 1, 23, 10, 0)  # first weekly installment of `late` is due Jan 22
        summary = await ReceivablesService(plan_repo, clock).execute()

        assert summary.pending_total == pytest.approx(200.0 + 200.0)
        assert summary.overdue_total == pytest.approx(100.0)
        assert summary.plans_current == 1
        assert summary.plans_delinquent == 1
        assert summary.plans_settled == 1
        assert (await GetPlanService(plan_repo, clock).execute(late.id)).classification.standing == PlanStanding.DELINQUENT
