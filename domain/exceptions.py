"""
Domain exceptions for the crediário service.

ValidationError and InvalidStateError abort an operation before any state
changes. IntegrationError covers every collaborator outside the process
(database, postal code API).
"""


class CrediarioError(Exception):
    """Base class for all domain errors."""


class ValidationError(CrediarioError):
    """Missing or invalid required input."""


class InvalidStateError(CrediarioError):
    """Operation is not legal for the entity's current state."""


class NotFoundError(CrediarioError):
    """Referenced entity does not exist."""


class PlanNotFoundError(NotFoundError):
    def __init__(self, plan_id: str):
        self.plan_id = plan_id
        super().__init__(f"Plan with id {plan_id} not found")


class InstallmentNotFoundError(NotFoundError):
    def __init__(self, plan_id: str, number: int):
        self.plan_id = plan_id
        self.number = number
        super().__init__(f"Installment {number} not found in plan {plan_id}")


class CustomerNotFoundError(NotFoundError):
    def __init__(self, customer_id: str):
        self.customer_id = customer_id
        super().__init__(f"Customer with id {customer_id} not found")


class IntegrationError(CrediarioError):
    """A remote store or third-party call failed or returned no data."""


class PersistenceError(IntegrationError):
    """Write or read against the plan/customer store failed; nothing was committed."""


class PostalCodeLookupError(IntegrationError):
    """Postal code API failed (non-2xx, timeout or network error)."""
