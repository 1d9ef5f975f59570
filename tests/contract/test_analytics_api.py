"""Contract tests for visitor analytics endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from hopebridge.db.models import Visit
from hopebridge.services.visits import hash_client_address

API_PREFIX = "/api/v1/analytics"


def test_visit_beacon_is_accepted_with_plain_body(client: TestClient, session_factory: sessionmaker) -> None:
    response = client.post(
        f"{API_PREFIX}/visit",
        json={"path": "/en/projects/water", "locale": "en", "projectId": "water"},
        headers={"X-Forwarded-For": "203.0.113.5, 10.0.0.1", "User-Agent": "pytest", "CF-IPCountry": "DE"},
    )

    assert response.status_code == 202
    assert response.json() == {"success": True, "message": "Visit recorded successfully."}
    assert response.headers["cache-control"] == "no-store"

    with session_factory() as session:
        visit = session.scalars(select(Visit)).one()
    assert visit.path == "/en/projects/water"
    assert visit.project_id == "water"
    assert visit.country == "DE"
    assert visit.user_agent == "pytest"
    assert visit.ip_hash == hash_client_address("203.0.113.5", "test-secret")
    assert "203.0.113.5" not in visit.ip_hash


def test_unreadable_beacon_bodies_still_record_a_visit(client: TestClient, session_factory: sessionmaker) -> None:
    empty = client.post(f"{API_PREFIX}/visit", headers={"Referer": "https://hopebridge.org/de"})
    malformed = client.post(
        f"{API_PREFIX}/visit",
        content=b"{oops",
        headers={"Content-Type": "text/plain"},
    )
    oversized = client.post(f"{API_PREFIX}/visit", json={"locale": "x" * 40})

    assert [empty.status_code, malformed.status_code, oversized.status_code] == [202, 202, 202]
    with session_factory() as session:
        visits = session.scalars(select(Visit)).all()
    assert sorted(visit.path for visit in visits) == ["/", "/", "https://hopebridge.org/de"]
    assert all(visit.ip_hash is None for visit in visits)


def test_visit_summary_clamps_query_values(client: TestClient, manager_headers: dict[str, str]) -> None:
    for path in ("/en", "/en", "/de"):
        client.post(f"{API_PREFIX}/visit", json={"path": path})

    response = client.get(
        f"{API_PREFIX}/visits/summary",
        params={"recent": "0", "days": "999"},
        headers=manager_headers,
    )

    assert response.status_code == 200
    summary = response.json()["details"]
    assert summary["total_visits"] == 3
    assert summary["window_days"] == 30
    assert len(summary["daily"]) == 30
    assert summary["daily"][-1]["count"] == 3
    assert summary["top_paths"] == [{"path": "/en", "count": 2}, {"path": "/de", "count": 1}]
    assert len(summary["recent"]) == 1


def test_visit_summary_defaults_for_unparsable_values(client: TestClient, manager_headers: dict[str, str]) -> None:
    response = client.get(
        f"{API_PREFIX}/visits/summary",
        params={"recent": "lots", "days": "week"},
        headers=manager_headers,
    )

    assert response.status_code == 200
    assert response.json()["details"]["window_days"] == 7
    assert response.json()["details"]["total_visits"] == 0


def test_visit_summary_requires_a_manager(client: TestClient, user_headers: dict[str, str]) -> None:
    anonymous = client.get(f"{API_PREFIX}/visits/summary")
    plain_user = client.get(f"{API_PREFIX}/visits/summary", headers=user_headers)

    assert anonymous.status_code == 401
    assert anonymous.json()["error"]["code"] == "ERR_UNAUTHORIZED"
    assert plain_user.status_code == 403


def test_visit_summary_falls_back_for_non_finite_values(client: TestClient, manager_headers: dict[str, str]) -> None:
    response = client.get(
        f"{API_PREFIX}/visits/summary",
        params={"recent": "inf", "days": "1e400"},
        headers=manager_headers,
    )

    assert response.status_code == 200
    assert response.json()["details"]["window_days"] == 7
    assert len(response.json()["details"]["daily"]) == 7
