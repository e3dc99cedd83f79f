from typing_extensions import Protocol


class MetricsPort(Protocol):
    """Protocol for metrics operations."""

    def increment_plans_created(self, frequency: str) -> None:
        """
        Increment the crediario_plans_created_total counter.

        Args:
            frequency: "weekly" or "monthly"
        """
        ...

    def increment_plan_rejections(self, reason: str) -> None:
        """
        Increment the crediario_plan_rejections_total counter.

        Args:
            reason: "validation" or "persistence"
        """
        ...

    def increment_installments_paid(self) -> None:
        """Increment the crediario_installments_paid_total counter."""
        ...

    def increment_installment_corrections(self) -> None:
        """Increment the crediario_installment_corrections_total counter."""
        ...
