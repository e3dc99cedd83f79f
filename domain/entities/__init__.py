# import
from .customer import Customer, CustomerSnapshot
from .installment import Installment, InstallmentStatus, InstallmentDisplayStatus
from .plan import InstallmentPlan, Frequency, TradeIn

__all__ = [
    "Customer",
    "CustomerSnapshot",
    "Installment",
    "InstallmentStatus",
    "InstallmentDisplayStatus",
    "InstallmentPlan",
    "Frequency",
    "TradeIn",
]
