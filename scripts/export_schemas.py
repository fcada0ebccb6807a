"""Export JSON schemas for PlanRequest and TripPlan."""

import json
from pathlib import Path

from backend.app.models import PlanRequest, TripPlan


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    # Export PlanRequest schema
    request_schema = PlanRequest.model_json_schema()
    request_path = schemas_dir / "PlanRequest.schema.json"
    with open(request_path, "w") as f:
        json.dump(request_schema, f, indent=2)
    print(f"Exported PlanRequest schema to {request_path}")

    # Export TripPlan schema
    plan_schema = TripPlan.model_json_schema()
    plan_path = schemas_dir / "TripPlan.schema.json"
    with open(plan_path, "w") as f:
        json.dump(plan_schema, f, indent=2)
    print(f"Exported TripPlan schema to {plan_path}")


if __name__ == "__main__":
    main()
