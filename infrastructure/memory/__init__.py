from .plan_repo_memory import PlanRepoMemory
from .customer_repo_memory import CustomerRepoMemory

__all__ = ["PlanRepoMemory", "CustomerRepoMemory"]
