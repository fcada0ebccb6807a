"""Structured logging for trip planning."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredPlanLogger:
    """Structured logger for plan_trip outcomes."""

    def log_plan(
        self,
        seed: int,
        duration_days: int,
        budget: float,
        outcome: str,
        latency_ms: float,
        total_cost: float | None = None,
        removed_items: int = 0,
        error_reason: str | None = None,
    ) -> None:
        """Log one planning run with structured data."""
        log_data: dict[str, Any] = {
            "seed": seed,
            "duration_days": duration_days,
            "budget": round(budget, 2),
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
            "removed_items": removed_items,
        }

        if total_cost is not None:
            log_data["total_cost"] = round(total_cost, 2)
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Trip plan: {duration_days} days - {outcome}"

        if outcome in ("success", "reconciled"):
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
