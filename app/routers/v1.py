from fastapi import APIRouter, Depends, HTTPException, status
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from application.service.create_plan import CreatePlanService, PlanRequest
from application.service.address_lookup import AddressLookupService
from application.service.customer_directory import CustomerDirectoryService
from application.service.get_plan import GetPlanService, PlanView
from application.service.list_plans import ListPlansService
from application.service.pay_installment import PayInstallmentService
from application.service.receivables import ReceivablesService
from application.service.update_installment_value import UpdateInstallmentValueService
from app.schemas.customer_schema import CustomerCreate, CustomerUpdate, CustomerResponse, AddressLookupResponse
from app.schemas.plan_schema import PlanCreate, PlanResponse, InstallmentValueUpdate, ReceivablesResponse
from domain.config import get_postal_code_config
from domain.entities import Frequency, TradeIn
from domain.exceptions import ValidationError, InvalidStateError, NotFoundError, PersistenceError
from domain.interfaces import PlanRepository, CustomerRepository, Clock, PostalCodePort, LoggingPort, MetricsPort
from domain.services import classify_plan
from infrastructure.clients import PostalCodeClient
from infrastructure.clock import SystemClock
from infrastructure.db.database import get_db_session
from infrastructure.db.repositories.customer_repo_sqlalchemy import CustomerRepoSqlalchemy
from infrastructure.db.repositories.plan_repo_sqlalchemy import PlanRepoSqlalchemy
from infrastructure.logging.logging_adapter import LoggingAdapter
from infrastructure.metrics.metrics_adapter import MetricsAdapter


def get_plan_repo(db: AsyncSession = Depends(get_db_session)) -> PlanRepository:
    return PlanRepoSqlalchemy(db)


def get_customer_repo(db: AsyncSession = Depends(get_db_session)) -> CustomerRepository:
    return CustomerRepoSqlalchemy(db)


def get_clock() -> Clock:
    return SystemClock()


def get_logging_port() -> LoggingPort:
    return LoggingAdapter(component="api")


def get_metrics_port() -> MetricsPort:
    return MetricsAdapter()


async def get_postal_code_port():
    config = get_postal_code_config()
    client = PostalCodeClient(
        base_url=config.base_url,
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
        max_attempts=config.max_attempts,
    )
    try:
        yield client
    finally:
        await client.close()


def _error(status_code: int, error: str, e: Exception) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": error, "message": str(e)})


def _map_domain_error(e: Exception) -> HTTPException:
    if isinstance(e, ValidationError):
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "validation_error", e)
    if isinstance(e, NotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, "not_found", e)
    if isinstance(e, InvalidStateError):
        return _error(status.HTTP_409_CONFLICT, "invalid_state", e)
    # Write not committed; the client must not assume it was stored
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "persistence_error", e)


_DOMAIN_ERRORS = (ValidationError, NotFoundError, InvalidStateError, PersistenceError)

router = APIRouter(prefix="/v1")


# --- customers ---

@router.post("/customers", status_code=status.HTTP_201_CREATED)
async def create_customer(
    payload: CustomerCreate,
    customer_repo: CustomerRepository = Depends(get_customer_repo),
    logging_port: LoggingPort = Depends(get_logging_port),
) -> CustomerResponse:
    srv = CustomerDirectoryService(customer_repo, logging_port=logging_port)
    try:
        details = payload.model_dump()
        name = details.pop("name")
        customer = await srv.register(name, **details)
    except _DOMAIN_ERRORS as e:
        raise _map_domain_error(e)
    return CustomerResponse.from_domain(customer)


@router.get("/customers")
async def list_customers(
    search: Optional[str] = None,
    customer_repo: CustomerRepository = Depends(get_customer_repo),
) -> list[CustomerResponse]:
    srv = CustomerDirectoryService(customer_repo)
    try:
        customers = await srv.search(search)
    except _DOMAIN_ERRORS as e:
        raise _map_domain_error(e)
    return [CustomerResponse.from_domain(c) for c in customers]


@router.get("/customers/{customer_id}")
async def get_customer(
    customer_id: str,
    customer_repo: CustomerRepository = Depends(get_customer_repo),
) -> CustomerResponse:
    srv = CustomerDirectoryService(customer_repo)
    try:
        customer = await srv.get(customer_id)
    except _DOMAIN_ERRORS as e:
        raise _map_domain_error(e)
    return CustomerResponse.from_domain(customer)


@router.patch("/customers/{customer_id}")
async def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    customer_repo: CustomerRepository = Depends(get_customer_repo),
    logging_port: LoggingPort = Depends(get_logging_port),
) -> CustomerResponse:
    """
    Partially update a customer.

    Existing plans keep the name and address captured when they were created.
    """
    srv = CustomerDirectoryService(customer_repo, logging_port=logging_port)
    try:
        customer = await srv.update(customer_id, **payload.model_dump(exclude_unset=True))
    except _DOMAIN_ERRORS as e:
        raise _map_domain_error(e)
    return CustomerResponse.from_domain(customer)


@router.get("/postal-codes/{postal_code}")
async def lookup_postal_code(
    postal_code: str,
    postal_code_port: PostalCodePort = Depends(get_postal_code_port),
    logging_port: LoggingPort = Depends(get_logging_port),
) -> AddressLookupResponse:
    """
    Resolve a postal code for address auto-fill.

    Always answers 200: when the code is unknown or the lookup API is down,
    `found` is false and `notice` says why.
    """
    srv = AddressLookupService(postal_code_port, logging_port=logging_port)
    lookup = await srv.execute(postal_code)
    return AddressLookupResponse.from_domain(lookup)


# --- installment plans ---

@router.post("/plans", status_code=status.HTTP_201_CREATED)
async def create_plan(
    payload: PlanCreate,
    plan_repo: PlanRepository = Depends(get_plan_repo),
    customer_repo: CustomerRepository = Depends(get_customer_repo),
    clock: Clock = Depends(get_clock),
    metrics_port: MetricsPort = Depends(get_metrics_port),
    logging_port: LoggingPort = Depends(get_logging_port),
) -> PlanResponse:
    """
    Create an installment plan (crediário).

    financed = total_value + custom_fee - down_payment - trade_in.value,
    split evenly across `installment_count` installments due every week or
    every calendar month from today.
    """
    srv = CreatePlanService(
        plan_repo=plan_repo,
        customer_repo=customer_repo,
        clock=clock,
        metrics_port=metrics_port,
        logging_port=logging_port,
    )
    request = PlanRequest(
        customer_id=payload.customer_id,
        product_name=payload.product_name,
        brand=payload.brand,
        model=payload.model,
        color=payload.color,
        storage=payload.storage,
        serial_number=payload.serial_number,
        imei=payload.imei,
        total_value=payload.total_value,
        custom_fee=payload.custom_fee,
        down_payment=payload.down_payment,
        trade_in=TradeIn(name=payload.trade_in.name, value=payload.trade_in.value) if payload.trade_in else None,
        installment_count=payload.installment_count,
        frequency=Frequency(payload.frequency),
    )
    try:
        plan = await srv.execute(request)
    except _DOMAIN_ERRORS as e:
        raise _map_domain_error(e)
    return PlanResponse.from_view(PlanView(plan=plan, classification=classify_plan(plan, clock.now())))


@router.get("/plans")
async def list_plans(
    search: Optional[str] = None,
    plan_repo: PlanRepository = Depends(get_plan_repo),
    clock: Clock = Depends(get_clock),
) -> list[PlanResponse]:
    srv = ListPlansService(plan_repo, clock)
    try:
        views = await srv.execute(search)
    except _DOMAIN_ERRORS as e:
        raise _map_domain_error(e)
    return [PlanResponse.from_view(view) for view in views]


@router.get("/plans/{plan_id}")
async def get_plan(
    plan_id: str,
    plan_repo: PlanRepository = Depends(get_plan_repo),
    clock: Clock = Depends(get_clock),
) -> PlanResponse:
    """Get a plan with its schedule and current standing."""
    srv = GetPlanService(plan_repo, clock)
    try:
        view = await srv.execute(plan_id)
    except _DOMAIN_ERRORS as e:
        raise _map_domain_error(e)
    if not view:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "plan_not_found", "message": f"Plan with id {plan_id} not found"}
        )
    return PlanResponse.from_view(view)


@router.post("/plans/{plan_id}/installments/{number}/pay")
async def pay_installment(
    plan_id: str,
    number: int,
    plan_repo: PlanRepository = Depends(get_plan_repo),
    clock: Clock = Depends(get_clock),
    metrics_port: MetricsPort = Depends(get_metrics_port),
    logging_port: LoggingPort = Depends(get_logging_port),
) -> PlanResponse:
    """Mark an installment as paid. Paying an already paid installment answers 409."""
    srv = PayInstallmentService(plan_repo, clock, metrics_port=metrics_port, logging_port=logging_port)
    try:
        plan = await srv.execute(plan_id, number)
    except _DOMAIN_ERRORS as e:
        raise _map_domain_error(e)
    return PlanResponse.from_view(PlanView(plan=plan, classification=classify_plan(plan, clock.now())))


@router.patch("/plans/{plan_id}/installments/{number}")
async def update_installment_value(
    plan_id: str,
    number: int,
    payload: InstallmentValueUpdate,
    plan_repo: PlanRepository = Depends(get_plan_repo),
    clock: Clock = Depends(get_clock),
    metrics_port: MetricsPort = Depends(get_metrics_port),
    logging_port: LoggingPort = Depends(get_logging_port),
) -> PlanResponse:
    """Correct the value of one installment (late fee, interest). The value must be > 0."""
    srv = UpdateInstallmentValueService(plan_repo, metrics_port=metrics_port, logging_port=logging_port)
    try:
        plan = await srv.execute(plan_id, number, payload.value)
    except _DOMAIN_ERRORS as e:
        raise _map_domain_error(e)
    return PlanResponse.from_view(PlanView(plan=plan, classification=classify_plan(plan, clock.now())))


@router.get("/receivables")
async def receivables(
    plan_repo: PlanRepository = Depends(get_plan_repo),
    clock: Clock = Depends(get_clock),
) -> ReceivablesResponse:
    """Amount still owed across all plans, and how much of it is overdue."""
    srv = ReceivablesService(plan_repo, clock)
    try:
        summary = await srv.execute()
    except _DOMAIN_ERRORS as e:
        raise _map_domain_error(e)
    return ReceivablesResponse.from_domain(summary)
