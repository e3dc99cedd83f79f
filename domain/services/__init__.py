from .plan_status import PlanClassification, PlanStanding, classify_plan, display_status
from .plan_search import PlanSearch
from .schedule import build_schedule, due_date_for, financed_amount

__all__ = [
    "PlanClassification",
    "PlanStanding",
    "classify_plan",
    "display_status",
    "PlanSearch",
    "build_schedule",
    "due_date_for",
    "financed_amount",
]
