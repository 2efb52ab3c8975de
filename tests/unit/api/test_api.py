"""HTTP tests for the import and template endpoints using FastAPI's TestClient."""

from __future__ import annotations

import inspect
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from shiftdesk.api.app import create_app
from shiftdesk.bulk.progress import read_progress
from shiftdesk.persistence import Persistence
from tests.fakes import FlakyCache, MemoryCacheBackend, MemoryFileStore, MemoryJobStore, MemoryTemplateStore


@pytest.fixture
def persistence():
    return Persistence(
        job_store=MemoryJobStore(),
        template_store=MemoryTemplateStore(),
        cache=MemoryCacheBackend(),
        file_store=MemoryFileStore(),
    )


@pytest.fixture
def client(settings, persistence):
    return TestClient(create_app(settings, persistence))


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_ready_lists_services(self, client):
        body = client.get("/ready").json()
        assert body["status"] == "ready"
        assert {s["service"] for s in body["services"]} == {"ImportService", "TemplateService"}


class TestImports:
    def test_csv_template_download(self, client):
        resp = client.get("/imports/template.csv")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.text.splitlines()[0].startswith("title,description,location")

    def test_parse_returns_drafts_and_preview(self, client, make_csv, persistence):
        resp = client.post("/imports/parse", content=make_csv(4))
        body = resp.json()
        assert resp.status_code == 200
        assert len(body["drafts"]) == 4
        assert body["errors"] == []
        assert body["preview"][-1] == "... and 1 more jobs"
        assert persistence.job_store.jobs == []

    def test_parse_empty_body_is_422(self, client):
        assert client.post("/imports/parse", content=b"").status_code == 422

    def test_import_creates_jobs(self, client, make_csv, persistence):
        body = client.post("/imports", content=make_csv(3)).json()
        assert body["summary"]["headline"] == "3 of 3 jobs created successfully"
        assert len(persistence.job_store.jobs) == 3
        assert all(job.company_id == "COMP001" for job in persistence.job_store.jobs)

    def test_import_partial_failure(self, settings, make_csv):
        persistence = Persistence(
            job_store=MemoryJobStore(fail_on={2}, fail_message="throttled"),
            template_store=MemoryTemplateStore(),
            cache=MemoryCacheBackend(),
            file_store=MemoryFileStore(),
        )
        client = TestClient(create_app(settings, persistence))

        summary = client.post("/imports", content=make_csv(5)).json()["summary"]
        assert (summary["total"], summary["succeeded"], summary["failed"]) == (5, 4, 1)
        assert summary["errors"] == ["Row 2: throttled"]

    def test_import_missing_column_is_422(self, client, make_csv, persistence):
        text = make_csv(2, columns=["title", "description"])
        resp = client.post("/imports", content=text)
        assert resp.status_code == 422
        assert "Missing column: location" in resp.json()["detail"]
        assert persistence.job_store.jobs == []

    def test_progress_after_import(self, client, make_csv, persistence):
        batch_id = client.post("/imports", content=make_csv(2)).json()["batch_id"]
        progress = client.get(f"/imports/{batch_id}/progress").json()
        assert progress == read_progress(persistence.cache, batch_id)
        assert progress["status"] == "COMPLETED"
        assert progress["processed"] == 2

    def test_progress_unknown_batch_is_404(self, client):
        assert client.get("/imports/nope/progress").status_code == 404

    def test_import_from_file_store(self, client, make_csv, persistence):
        persistence.file_store.write("COMP001/jobs.csv", make_csv(2).encode())
        body = client.post("/imports/files", json={"path": "COMP001/jobs.csv"}).json()
        assert body["summary"]["succeeded"] == 2

    def test_import_missing_file_is_404(self, client):
        resp = client.post("/imports/files", json={"path": "missing.csv"})
        assert resp.status_code == 404
        assert "missing.csv" in resp.json()["detail"]

    def test_job_store_outage_reported_in_summary(self, settings, make_csv):
        persistence = Persistence(
            job_store=MemoryJobStore(fail_on={1, 2}, fail_message="store down"),
            template_store=MemoryTemplateStore(),
            cache=MemoryCacheBackend(),
            file_store=MemoryFileStore(),
        )
        client = TestClient(create_app(settings, persistence))
        summary = client.post("/imports", content=make_csv(2)).json()["summary"]
        assert summary["errors"] == ["Row 1: store down", "Row 2: store down"]

    def test_progress_cache_outage_does_not_abort_import(self, settings, make_csv):
        persistence = Persistence(
            job_store=MemoryJobStore(),
            template_store=MemoryTemplateStore(),
            cache=FlakyCache(fail_on=3),
            file_store=MemoryFileStore(),
        )
        client = TestClient(create_app(settings, persistence))

        resp = client.post("/imports", content=make_csv(4))
        assert resp.status_code == 200
        assert resp.json()["summary"]["succeeded"] == 4
        assert len(persistence.job_store.jobs) == 4


class TestTemplates:
    def _create(self, client, **overrides):
        payload = {
            "name": "Objectbeveiliging Basis",
            "default_skills": ["Access Control"],
            "suggested_rate": "18.50",
            "default_settings": {"location": "Utrecht"},
        }
        payload.update(overrides)
        resp = client.post("/templates", json=payload)
        assert resp.status_code == 201
        return resp.json()

    def test_create_and_list(self, client):
        created = self._create(client)
        listed = client.get("/templates").json()
        assert [t["template_id"] for t in listed] == [created["template_id"]]

    def test_get_unknown_is_404(self, client):
        assert client.get("/templates/template_missing").status_code == 404

    def test_update(self, client):
        tid = self._create(client)["template_id"]
        body = client.patch(f"/templates/{tid}", json={"name": "Objectbeveiliging Plus"}).json()
        assert body["name"] == "Objectbeveiliging Plus"
        assert body["default_skills"] == ["Access Control"]

    def test_duplicate_and_delete(self, client):
        tid = self._create(client)["template_id"]
        copy = client.post(f"/templates/{tid}/duplicate").json()
        assert copy["name"] == "Objectbeveiliging Basis (copy)"
        assert client.delete(f"/templates/{tid}").status_code == 204
        assert [t["template_id"] for t in client.get("/templates").json()] == [copy["template_id"]]

    def test_draft_from_template(self, client):
        tid = self._create(client)["template_id"]
        draft = client.post(f"/templates/{tid}/draft", json={"title": "Nachtwaker"}).json()
        assert draft["title"] == "Nachtwaker"
        assert draft["location"] == "Utrecht"
        assert Decimal(draft["hourly_rate"]) == Decimal("18.50")
        assert draft["required_skills"] == ["Access Control"]
        assert client.get(f"/templates/{tid}").json()["usage_count"] == 1


def test_store_backed_routes_run_in_threadpool(client):
    blocking = {
        ("/templates", "GET"), ("/templates", "POST"),
        ("/templates/{template_id}", "GET"), ("/templates/{template_id}", "PATCH"),
        ("/templates/{template_id}", "DELETE"), ("/templates/{template_id}/duplicate", "POST"),
        ("/templates/{template_id}/draft", "POST"), ("/imports/{batch_id}/progress", "GET"),
    }
    found = set()
    for route in client.app.routes:
        for method in getattr(route, "methods", set()):
            if (route.path, method) in blocking:
                assert not inspect.iscoroutinefunction(route.endpoint), route.path
                found.add((route.path, method))
    assert found == blocking
