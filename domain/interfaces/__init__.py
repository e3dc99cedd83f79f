from .plan_repo import PlanRepository
from .customer_repo import CustomerRepository
from .clock import Clock
from .postal_code_port import PostalCodePort
from .metrics_port import MetricsPort
from .logging_port import LoggingPort, BoundLogger

__all__ = ["PlanRepository", "CustomerRepository", "Clock", "PostalCodePort", "MetricsPort", "LoggingPort", "BoundLogger"]
