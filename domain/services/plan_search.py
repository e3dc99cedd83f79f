from typing import Iterable, Optional

from domain.entities import Customer, InstallmentPlan


class PlanSearch:
    """Free-text filters used by the plan and customer listings."""

    @staticmethod
    def matches_plan(plan: InstallmentPlan, term: Optional[str]) -> bool:
        if not term:
            return True
        needle = term.lower()
        return (
            needle in plan.customer_name.lower()
            or needle in plan.product_name.lower()
            or term in plan.id
        )

    @staticmethod
    def filter_plans(plans: Iterable[InstallmentPlan], term: Optional[str]) -> list[InstallmentPlan]:
        return [plan for plan in plans if PlanSearch.matches_plan(plan, term)]

    @staticmethod
    def matches_customer(customer: Customer, term: Optional[str]) -> bool:
        if not term:
            return True
        return term.lower() in customer.name.lower() or term in customer.phone

    @staticmethod
    def filter_customers(customers: Iterable[Customer], term: Optional[str]) -> list[Customer]:
        return [c for c in customers if PlanSearch.matches_customer(c, term)]
