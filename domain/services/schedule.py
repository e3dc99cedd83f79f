"""
Schedule Module

Turns financing inputs into an installment schedule: the financed amount is
split evenly (plain float division, no remainder correction on the last
installment) and installment i falls due i periods after the plan start.
"""
import math
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from domain.entities.installment import Installment
from domain.entities.plan import Frequency
from domain.exceptions import ValidationError


WEEKLY_PERIOD_DAYS = 7


def _require_non_negative(name: str, value: float) -> None:
    if value is None or not math.isfinite(value) or value < 0:
        raise ValidationError(f"{name} must be a non-negative number")


def financed_amount(
    total_value: float,
    custom_fee: float = 0.0,
    down_payment: float = 0.0,
    trade_in_value: float = 0.0,
) -> float:
    """
    Amount spread across installments.

    base = total_value + custom_fee, reduced by the down payment and the
    trade-in value, floored at zero.
    """
    _require_non_negative("total_value", total_value)
    _require_non_negative("custom_fee", custom_fee)
    _require_non_negative("down_payment", down_payment)
    _require_non_negative("trade_in_value", trade_in_value)

    base = total_value + custom_fee
    reduction = down_payment + trade_in_value
    return max(0.0, base - reduction)


def due_date_for(start: datetime, number: int, frequency: Frequency) -> datetime:
    """Due date of installment `number`, always measured from `start`."""
    if frequency == Frequency.WEEKLY:
        return start + timedelta(days=WEEKLY_PERIOD_DAYS * number)
    # calendar month: Jan 31 + 1 month -> last day of February
    return start + relativedelta(months=number)


def build_schedule(
    plan_id: str,
    financed: float,
    installment_count: int,
    frequency: Frequency,
    start: datetime,
) -> list[Installment]:
    if financed <= 0:
        raise ValidationError("financed amount is zero or negative")
    if not isinstance(frequency, Frequency):
        raise ValidationError("frequency must be weekly or monthly")
    if isinstance(installment_count, bool) or not isinstance(installment_count, int) or installment_count < 1:
        raise ValidationError("installment count must be a positive integer")

    per_installment = financed / installment_count
    return [
        Installment.create(
            plan_id=plan_id,
            number=i,
            due_date=due_date_for(start, i, frequency),
            value=per_installment,
        )
        for i in range(1, installment_count + 1)
    ]
