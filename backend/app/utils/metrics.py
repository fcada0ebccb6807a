"""Prometheus metrics for trip planning."""

from prometheus_client import Counter, Histogram

# Planning metrics
trip_plans_total = Counter(
    "trip_plans_total",
    "Total trip plans produced",
    ["outcome"],
)

plan_latency_ms = Histogram(
    "plan_latency_ms",
    "Trip planning latency in milliseconds",
    ["outcome"],
    buckets=[1, 5, 10, 25, 50, 100, 250, 500, 1000],
)

budget_trimmed_items_total = Counter(
    "budget_trimmed_items_total",
    "Total activities removed by the budget reconciler",
)


class PrometheusPlanMetrics:
    """Prometheus-based planning metrics implementation."""

    def record_latency(self, outcome: str, latency_ms: float) -> None:
        """Record planning latency."""
        plan_latency_ms.labels(outcome=outcome).observe(latency_ms)

    def inc_outcome(self, outcome: str) -> None:
        """Increment plan outcome counter."""
        trip_plans_total.labels(outcome=outcome).inc()

    def inc_trimmed(self, count: int) -> None:
        """Count activities dropped to meet the budget."""
        if count:
            budget_trimmed_items_total.inc(count)
