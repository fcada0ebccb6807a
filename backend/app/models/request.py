"""Request models - what a traveler asks the planner for."""

from pydantic import BaseModel, Field, field_validator

from backend.app.config import get_settings
from backend.app.models.common import Currency

DEFAULT_TRANSPORT_MODES = ["Public Transport"]


class PlanRequest(BaseModel):
    """Trip planning request."""

    duration_days: int = Field(..., ge=1, description="Trip length in days")
    total_budget: float = Field(..., gt=0, description="Whole-trip budget in `currency`")
    currency: Currency = Currency.usd
    permitted_transport_modes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TRANSPORT_MODES),
        description="Mode labels in the traveler's order of preference",
    )
    seed: int | None = Field(None, description="Tie-break seed; settings.rng_seed when omitted")

    @field_validator("duration_days")
    @classmethod
    def check_duration(cls, v: int) -> int:
        max_days = get_settings().max_trip_days
        if v > max_days:
            raise ValueError(f"duration_days must be at most {max_days}")
        return v

    @field_validator("permitted_transport_modes")
    @classmethod
    def dedupe_modes(cls, v: list[str]) -> list[str]:
        """Drop blanks and repeated labels, keeping first occurrence order."""
        seen: list[str] = []
        for mode in v:
            mode = mode.strip()
            if mode and mode not in seen:
                seen.append(mode)
        return seen
