"""
Tests for the /api/schedule endpoint.
"""
from unittest.mock import MagicMock

from kondate.api.dependencies import get_step_scheduler
from kondate.engine.step_scheduler import StepScheduler
from kondate.main import app


class TestScheduleEndpoint:
    """Tests for POST /api/schedule."""

    def test_schedules_steps(self, client, step_factory):
        steps = [
            step_factory(1, 5, description="Chop the onion"),
            step_factory(2, 10, [1], True, description="Simmer the stock"),
            step_factory(3, 5, description="Slice the onion thin"),
        ]
        response = client.post("/api/schedule", json={"steps": steps})

        assert response.status_code == 200
        data = response.json()
        assert [step["startTime"] for step in data["steps"]] == [0, 5, 15]
        assert data["optimizedTime"] == 20
        assert data["converged"] is True
        assert data["advisories"] == []

    def test_wire_names_in_response(self, client, step_factory):
        response = client.post(
            "/api/schedule",
            json={"steps": [step_factory(1, 4, can_parallel=True, dishLabel="A", category="prep")]},
        )

        step = response.json()["steps"][0]
        assert step["canParallel"] is True
        assert step["dishLabel"] == "A"
        assert step["category"] == "prep"

    def test_numeric_labels_and_fractional_duration(self, client, step_factory):
        response = client.post(
            "/api/schedule",
            json={"steps": [step_factory(1, 1.5, dishLabel=1, title=7)]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["steps"][0]["dishLabel"] == "1"
        assert data["steps"][0]["title"] == "7"
        assert data["steps"][0]["duration"] == 2
        assert data["advisories"] == ["Step 1 duration of 1.5 min was rounded up to 2 min."]

    def test_empty_plan(self, client):
        response = client.post("/api/schedule", json={"steps": []})

        assert response.status_code == 200
        assert response.json()["optimizedTime"] == 0

    def test_dangling_dependency_reported(self, client, step_factory):
        response = client.post("/api/schedule", json={"steps": [step_factory(1, dependencies=[5])]})

        assert response.status_code == 200
        assert response.json()["advisories"] == ["Step 1 depends on unknown step 5, which was ignored."]

    def test_malformed_step_returns_422(self, client, step_factory):
        response = client.post("/api/schedule", json={"steps": [step_factory(1, duration=0)]})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error_code"] == "SCHEDULE_INVALID_STEP"
        assert detail["details"]["problems"][0]["field"] == "duration"

    def test_non_object_step_returns_422(self, client):
        response = client.post("/api/schedule", json={"steps": [42]})

        assert response.status_code == 422
        assert response.json()["detail"]["error_code"] == "SCHEDULE_INVALID_STEP"

    def test_duplicate_ids_return_422(self, client, step_factory):
        response = client.post("/api/schedule", json={"steps": [step_factory(1), step_factory(1)]})

        assert response.status_code == 422
        assert response.json()["detail"]["error_code"] == "SCHEDULE_DUPLICATE_STEP_ID"

    def test_cycle_returns_422(self, client, step_factory):
        steps = [step_factory(1, dependencies=[2]), step_factory(2, dependencies=[1])]
        response = client.post("/api/schedule", json={"steps": steps})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error_code"] == "SCHEDULE_CYCLIC_DEPENDENCY"
        assert detail["details"]["step_ids"] == [1, 2]

    def test_missing_steps_field(self, client):
        response = client.post("/api/schedule", json={})
        assert response.status_code == 422

    def test_unexpected_error_returns_500(self, client, step_factory):
        scheduler = MagicMock(spec=StepScheduler)
        scheduler.schedule.side_effect = RuntimeError("boom")
        app.dependency_overrides[get_step_scheduler] = lambda: scheduler

        response = client.post("/api/schedule", json={"steps": [step_factory(1)]})

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["error_code"] == "INTERNAL_ERROR"
        assert detail["details"] == {"error_type": "RuntimeError"}

    def test_non_convergence_reported(self, client, step_factory):
        app.dependency_overrides[get_step_scheduler] = lambda: StepScheduler(max_passes=1)

        response = client.post("/api/schedule", json={"steps": [step_factory(1), step_factory(2)]})

        assert response.status_code == 200
        data = response.json()
        assert data["converged"] is False
        assert len(data["advisories"]) == 1
