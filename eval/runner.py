"""Eval runner - loads scenarios and evaluates predicates against real plans."""

import sys
from pathlib import Path
from typing import Any

import yaml

from backend.app.models import PlanRequest, TripPlan
from backend.app.orchestration.planner import plan_trip

SCENARIOS_PATH = Path(__file__).parent / "scenarios.yaml"


def load_scenarios(path: Path = SCENARIOS_PATH) -> dict[str, Any]:
    """Load scenarios from YAML."""
    with open(path, encoding="utf-8") as f:
        result: dict[str, Any] = yaml.safe_load(f)
        return result


def build_request_from_yaml(request_data: dict[str, Any]) -> PlanRequest:
    """Build PlanRequest from YAML data."""
    return PlanRequest(**request_data)


def evaluate_predicates(
    request: PlanRequest, plan: TripPlan, predicates: list[dict[str, str]]
) -> tuple[int, int]:
    """Evaluate predicates; return (passed, total)."""
    passed = 0
    total = len(predicates)
    activity_names = [name for day in plan.day_plans for name in day.activity_names()]
    env = {
        "__builtins__": {},
        "request": request,
        "plan": plan,
        "activity_names": activity_names,
        "codes": [v.code for v in plan.violations],
        "len": len,
        "all": all,
        "any": any,
        "set": set,
        "sum": sum,
    }

    for pred_data in predicates:
        predicate = pred_data["predicate"]
        description = pred_data.get("description", predicate)
        try:
            result = eval(predicate, env)
            if result:
                passed += 1
                print(f"  ✓ PASS: {description}")
            else:
                print(f"  ✗ FAIL: {description}")
        except Exception as e:
            print(f"  ✗ ERROR: {description} - {e}")

    return passed, total


def main(path: Path = SCENARIOS_PATH) -> int:
    """Run eval scenarios."""
    scenarios_data = load_scenarios(path)
    scenarios = scenarios_data["scenarios"]

    total_passed = 0
    total_predicates = 0

    for scenario in scenarios:
        scenario_id = scenario["scenario_id"]
        description = scenario["description"]
        print(f"\n=== Scenario: {scenario_id} ===")
        print(f"Description: {description}")

        request = build_request_from_yaml(scenario["request"])
        plan = plan_trip(request)

        predicates = scenario["must_satisfy"]
        passed, total = evaluate_predicates(request, plan, predicates)
        total_passed += passed
        total_predicates += total

        print(f"Result: {passed}/{total} predicates passed")

    print("\n=== Summary ===")
    print(f"Total: {total_passed}/{total_predicates} predicates passed")

    if total_passed < total_predicates:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
