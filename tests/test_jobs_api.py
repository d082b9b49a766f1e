# tests/test_jobs_api.py
"""
Tests for the Background Jobs API Routes

- POST /api/v1/jobs/{job_name}/run
- GET /api/v1/jobs
"""

import pytest
from unittest.mock import patch

from src.meeting_intel.config import get_config
from tests.fixtures.data import HOUR_MS, NOW, make_item_row


@pytest.fixture
def seeded(mock_supabase):
    mock_supabase.seed_data("action_items", [
        make_item_row("a", deadline=NOW - HOUR_MS, owner_id="user-a"),
    ])
    return mock_supabase


@pytest.fixture(autouse=True)
def frozen_now():
    with patch("src.meeting_intel.services.jobs.deadline_sweep.now_ms", return_value=NOW):
        yield


class TestRunJob:

    def test_run_deadline_sweep(self, client, seeded):
        response = client.post("/api/v1/jobs/deadline_sweep/run", headers={"X-Job-Run-Id": "run-42"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "completed"
        assert data["run_id"] == "run-42"
        assert data["result"]["notifications_created"] == 1
        assert len(seeded.rows("notifications")) == 1

    def test_repeated_trigger_is_idempotent(self, client, seeded):
        client.post("/api/v1/jobs/deadline_sweep/run")
        data = client.post("/api/v1/jobs/deadline_sweep/run").json()

        assert data["result"]["notifications_created"] == 0
        assert len(seeded.rows("notifications")) == 1

    def test_unknown_job(self, client):
        response = client.post("/api/v1/jobs/nope/run")
        assert response.status_code == 400
        assert response.json()["available_jobs"] == ["deadline_sweep"]

    def test_api_key_required_when_configured(self, client, seeded):
        get_config().cron_api_key = "secret"

        assert client.post("/api/v1/jobs/deadline_sweep/run").status_code == 401
        assert client.post(
            "/api/v1/jobs/deadline_sweep/run", headers={"X-API-Key": "wrong"}
        ).status_code == 401
        assert client.post(
            "/api/v1/jobs/deadline_sweep/run", headers={"X-API-Key": "secret"}
        ).status_code == 200

    def test_job_exception_is_500(self, client):
        with patch("src.meeting_intel.services.jobs.run_job", side_effect=RuntimeError("boom")):
            response = client.post("/api/v1/jobs/deadline_sweep/run")

        assert response.status_code == 500
        assert response.json()["error"] == "boom"

    def test_failed_result_is_500(self, client):
        failed = {"status": "failed", "error": "store unavailable"}
        with patch("src.meeting_intel.services.jobs.run_job", return_value=failed):
            response = client.post("/api/v1/jobs/deadline_sweep/run")

        assert response.status_code == 500
        assert response.json()["status"] == "failed"
        assert response.json()["result"]["error"] == "store unavailable"

    def test_completed_with_errors_is_200(self, client):
        partial = {"status": "completed_with_errors", "failures": 1}
        with patch("src.meeting_intel.services.jobs.run_job", return_value=partial):
            response = client.post("/api/v1/jobs/deadline_sweep/run")

        assert response.status_code == 200


class TestListJobs:

    def test_list_jobs(self, client):
        data = client.get("/api/v1/jobs").json()

        assert data["jobs"][0]["name"] == "deadline_sweep"
        assert data["scheduling"]["method"] == "external_cron"

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"
