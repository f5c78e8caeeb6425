"""
HTTP surface tests.

Runs the FastAPI app in-process over httpx's ASGI transport with the
database and oracle dependencies overridden.
"""

from unittest.mock import patch

import httpx
import pytest
from prometheus_client import REGISTRY
from sqlalchemy.exc import OperationalError

from jobswipe.auth import create_session_token, verify_session_token
from jobswipe.config import get_settings
from jobswipe.database import get_db
from jobswipe.main import app
from jobswipe.models import Application, Swipe
from jobswipe.schemas import Verdict
from jobswipe.services.qualification import get_oracle
from conftest import StubOracle, add_job, add_profile, add_resume, add_user, fetch_all


@pytest.fixture
def stub_oracle():
    return StubOracle(verdict=Verdict(qualified=True, reason="Python overlap."))


@pytest.fixture
async def client(session_factory, stub_oracle):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_oracle] = lambda: stub_oracle
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_session_token(user.id)}"}


class TestAuth:
    """Test session tokens and the auth routes."""

    def test_token_round_trip(self):
        assert verify_session_token(create_session_token(42)) == 42

    def test_garbage_token_is_rejected(self):
        assert verify_session_token("not-a-token") is None

    @pytest.mark.asyncio
    async def test_missing_token_is_401(self, client):
        response = await client.get("/swipe/next")
        assert response.status_code == 401
        assert response.json() == {"detail": "Not authenticated"}

    @pytest.mark.asyncio
    async def test_token_for_unknown_user_is_401(self, client):
        response = await client.get("/auth/me", headers={"Authorization": f"Bearer {create_session_token(999)}"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_wrong_password(self, client):
        response = await client.post("/auth/login", json={"email": "a@example.com", "password": "nope"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_login_sets_cookie(self, client):
        response = await client.post(
            "/auth/login",
            json={"email": "Seeker@Example.com", "password": get_settings().app_password, "name": "Sam"},
        )
        assert response.status_code == 200
        assert "session_token" in response.cookies

        me = await client.get("/auth/me")
        assert me.status_code == 200
        assert me.json()["email"] == "seeker@example.com"


class TestSwipeRoutes:
    """Test next/decision/undo over HTTP."""

    @pytest.mark.asyncio
    async def test_next_without_profile_is_412(self, client, user):
        response = await client.get("/swipe/next", headers=auth_headers(user))
        assert response.status_code == 412
        assert response.json() == {"detail": "profile required"}

    @pytest.mark.asyncio
    async def test_exhausted_feed(self, client, user, sf_profile):
        response = await client.get("/swipe/next", headers=auth_headers(user))
        assert response.status_code == 200
        assert response.json() == {"job": None, "verdict": None}

    @pytest.mark.asyncio
    async def test_next_returns_job_and_verdict(self, client, db, user, sf_profile, stub_oracle):
        job = await add_job(db, title="Backend Engineer", city="San Francisco", work_mode="remote")
        await add_resume(db, user.id, "Python engineer")

        response = await client.get("/swipe/next", headers=auth_headers(user))

        body = response.json()
        assert body["job"]["id"] == job.id
        assert body["verdict"] == {"qualified": True, "reason": "Python overlap."}
        assert stub_oracle.calls == [job.id]

    @pytest.mark.asyncio
    async def test_decision_then_undo(self, client, db, session_factory, user, sf_profile):
        job = await add_job(db, city="San Francisco")
        headers = auth_headers(user)

        decided = await client.post(
            "/swipe/decision",
            json={"job_id": job.id, "decision": "like", "verdict": {"qualified": True, "reason": "ok"}},
            headers=headers,
        )
        assert decided.status_code == 200
        assert decided.json() == {"ok": True}
        assert (await client.get("/swipe/next", headers=headers)).json()["job"] is None

        undone = await client.post("/swipe/undo", headers=headers)
        assert undone.status_code == 200
        assert undone.json()["ok"] is True

        assert (await client.get("/swipe/next", headers=headers)).json()["job"]["id"] == job.id
        applications = await fetch_all(session_factory, Application)
        assert [a.status for a in applications] == ["failed"]

    @pytest.mark.asyncio
    async def test_undo_with_nothing_is_404(self, client, user):
        response = await client.post("/swipe/undo", headers=auth_headers(user))
        assert response.status_code == 404
        assert response.json() == {"detail": "no swipe to undo"}

    @pytest.mark.asyncio
    async def test_decision_on_missing_job_is_404(self, client, user):
        response = await client.post(
            "/swipe/decision", json={"job_id": 12345, "decision": "like"}, headers=auth_headers(user)
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_decision_is_422(self, client, db, user):
        job = await add_job(db)
        response = await client.post(
            "/swipe/decision", json={"job_id": job.id, "decision": "maybe"}, headers=auth_headers(user)
        )
        assert response.status_code == 422


class TestHistoryRoutes:
    @pytest.mark.asyncio
    async def test_filtered_history(self, client, db, user):
        liked = await add_job(db, title="liked")
        disliked = await add_job(db, title="disliked")
        headers = auth_headers(user)
        await client.post("/swipe/decision", json={"job_id": liked.id, "decision": "like"}, headers=headers)
        await client.post("/swipe/decision", json={"job_id": disliked.id, "decision": "dislike"}, headers=headers)

        response = await client.get("/history/swipes", params={"decision": "like"}, headers=headers)

        items = response.json()
        assert [item["job"]["title"] for item in items] == ["liked"]
        assert items[0]["swipe"]["decision"] == "like"

    @pytest.mark.asyncio
    async def test_application_history(self, client, db, user):
        job = await add_job(db, title="liked")
        headers = auth_headers(user)
        await client.post("/swipe/decision", json={"job_id": job.id, "decision": "like"}, headers=headers)

        response = await client.get("/history/applications", headers=headers)

        items = response.json()
        assert len(items) == 1
        assert items[0]["application"]["status"] == "queued"
        assert items[0]["job"]["title"] == "liked"


class TestProfileRoutes:
    @pytest.mark.asyncio
    async def test_empty_profile_bundle(self, client, user):
        response = await client.get("/profile", headers=auth_headers(user))
        assert response.json() == {"profile": None, "resume": None}

    @pytest.mark.asyncio
    async def test_upsert_profile_then_partial_update(self, client, user):
        headers = auth_headers(user)

        created = await client.put(
            "/profile", json={"city": "Berlin", "min_salary": 70000, "skills": ["Go"]}, headers=headers
        )
        assert created.status_code == 200
        assert created.json()["currency"] == "USD"

        updated = await client.put("/profile", json={"min_salary": 80000}, headers=headers)
        body = updated.json()
        assert body["id"] == created.json()["id"]
        assert body["city"] == "Berlin"
        assert body["min_salary"] == 80000
        assert body["skills"] == ["Go"]

    @pytest.mark.asyncio
    async def test_resume_upload_stamps_parsed_at(self, client, user):
        response = await client.put(
            "/profile/resume",
            json={"file_url": "https://f/cv.pdf", "file_key": "cv.pdf", "parsed_text": "Python"},
            headers=auth_headers(user),
        )
        assert response.status_code == 200
        assert response.json()["parsed_at"] is not None


class TestAdminRoutes:
    @pytest.mark.asyncio
    async def test_non_admin_is_403(self, client, user):
        response = await client.get("/admin/jobs", headers=auth_headers(user))
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_create_and_list_jobs(self, client, db):
        admin = await add_user(db, email="admin@example.com", role="admin")
        headers = auth_headers(admin)

        created = await client.post(
            "/admin/jobs",
            json={"title": "Data Engineer", "company_name": "Acme", "work_mode": "hybrid"},
            headers=headers,
        )
        assert created.status_code == 201
        job_id = created.json()["id"]

        listed = await client.get("/admin/jobs", headers=headers)
        assert [job["id"] for job in listed.json()] == [job_id]
        missing = await client.get("/admin/jobs/999", headers=headers)
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_mark_application_submitted(self, client, db, user, session_factory):
        admin = await add_user(db, email="admin@example.com", role="admin")
        job = await add_job(db)
        await add_profile(db, user.id)
        await client.post(
            "/swipe/decision", json={"job_id": job.id, "decision": "like"}, headers=auth_headers(user)
        )
        application = (await fetch_all(session_factory, Application))[0]

        response = await client.patch(
            f"/admin/applications/{application.id}",
            json={"status": "submitted"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "submitted"
        assert response.json()["submitted_at"] is not None

    @pytest.mark.asyncio
    async def test_terminal_application_is_409(self, client, db, user, session_factory):
        admin = await add_user(db, email="admin@example.com", role="admin")
        job = await add_job(db)
        headers = auth_headers(user)
        await client.post("/swipe/decision", json={"job_id": job.id, "decision": "like"}, headers=headers)
        await client.post("/swipe/undo", headers=headers)
        application = (await fetch_all(session_factory, Application))[0]

        response = await client.patch(
            f"/admin/applications/{application.id}",
            json={"status": "queued"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 409
        assert response.json() == {"detail": "cannot move application from failed to queued"}


class TestErrorMapping:
    """Storage failures surface as a generic 500."""

    @pytest.mark.asyncio
    async def test_failed_write_is_500(self, client, db, session_factory, user):
        job = await add_job(db)

        with patch(
            "jobswipe.services.ledger.create_swipe",
            side_effect=OperationalError("INSERT", {}, Exception("disk I/O error")),
        ):
            response = await client.post(
                "/swipe/decision", json={"job_id": job.id, "decision": "like"}, headers=auth_headers(user)
            )

        assert response.status_code == 500
        assert response.json() == {"detail": "storage failure, please try again"}
        assert await fetch_all(session_factory, Swipe) == []

    @pytest.mark.asyncio
    async def test_failed_read_is_500(self, client, user):
        with patch(
            "jobswipe.services.ledger.get_application_history",
            side_effect=OperationalError("SELECT", {}, Exception("no such table")),
        ):
            response = await client.get("/history/applications", headers=auth_headers(user))

        assert response.status_code == 500
        assert response.json() == {"detail": "storage failure, please try again"}


class TestMetrics:
    """Request metrics are labelled by route template."""

    @pytest.mark.asyncio
    async def test_path_parameters_are_templated(self, client, db):
        admin = await add_user(db, email="admin@example.com", role="admin")
        labels = {"method": "GET", "endpoint": "/admin/jobs/{job_id}", "status": "404"}
        before = REGISTRY.get_sample_value("http_requests_total", labels) or 0

        response = await client.get("/admin/jobs/999", headers=auth_headers(admin))

        assert response.status_code == 404
        assert REGISTRY.get_sample_value("http_requests_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_static_routes_keep_their_path(self, client, user):
        labels = {"method": "POST", "endpoint": "/swipe/undo", "status": "404"}
        before = REGISTRY.get_sample_value("http_requests_total", labels) or 0

        await client.post("/swipe/undo", headers=auth_headers(user))

        assert REGISTRY.get_sample_value("http_requests_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_metrics_endpoint(self, client):
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "http_requests_total" in response.text
