"""
Metrics adapter that implements MetricsPort protocol.

This adapter wraps the Prometheus counters so the application layer never
imports prometheus_client directly.
"""
from domain.interfaces import MetricsPort
from infrastructure.metrics.metrics import (
    crediario_plans_created,
    crediario_plan_rejections,
    crediario_installments_paid,
    crediario_installment_corrections,
)


class MetricsAdapter(MetricsPort):
    """Adapter that implements MetricsPort on top of the /metrics registry."""

    def increment_plans_created(self, frequency: str) -> None:
        crediario_plans_created.labels(frequency=frequency).inc()

    def increment_plan_rejections(self, reason: str) -> None:
        crediario_plan_rejections.labels(reason=reason).inc()

    def increment_installments_paid(self) -> None:
        crediario_installments_paid.inc()

    def increment_installment_corrections(self) -> None:
        crediario_installment_corrections.inc()
