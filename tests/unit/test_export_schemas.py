"""Tests for the schema export script."""

import json
from pathlib import Path

import pytest

from scripts.export_schemas import main


def test_exports_request_and_plan_schemas(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that both schemas are written under docs/schemas."""
    monkeypatch.chdir(tmp_path)

    main()

    request_schema = json.loads((tmp_path / "docs/schemas/PlanRequest.schema.json").read_text())
    plan_schema = json.loads((tmp_path / "docs/schemas/TripPlan.schema.json").read_text())
    assert "duration_days" in request_schema["properties"]
    assert "day_plans" in plan_schema["properties"]
