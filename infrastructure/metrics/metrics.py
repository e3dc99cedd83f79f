# infrastructure/metrics/metrics.py
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

crediario_plans_created = Counter(
    "crediario_plans_created",
    "Installment plans created",
    ["frequency"]  # weekly|monthly
)

crediario_plan_rejections = Counter(
    "crediario_plan_rejections",
    "Plan creations that did not produce a plan",
    ["reason"]  # validation|persistence
)

crediario_installments_paid = Counter(
    "crediario_installments_paid",
    "Installments marked as paid"
)

crediario_installment_corrections = Counter(
    "crediario_installment_corrections",
    "Installment value corrections applied"
)

postal_code_lookup_failures_total = Counter(
    "postal_code_lookup_failures_total",
    "Postal code lookup failures"
)

postal_code_lookup_latency_seconds = Histogram(
    "postal_code_lookup_latency_seconds",
    "Postal code lookup latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2.5, 5]
)


def metrics_endpoint():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
