"""Contract tests for task management endpoints."""

from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from hopebridge.core.auth import token_subject

API_PREFIX = "/api/v1"
USER_SUBJECT = token_subject("user-token")

FORM_FIELDS = [
    {"id": "visited", "type": "date", "label": "Visit date", "required": True},
    {"id": "families", "type": "number", "label": "Families reached", "required": True},
    {"id": "notes", "type": "textarea", "label": "Notes"},
]


def _create_task(client: TestClient, headers: dict[str, str], **overrides) -> dict:
    body = {
        "title": "Distribute food parcels",
        "description": "Deliver parcels to the north camp and record the count.",
        "assigned_to": USER_SUBJECT,
        "priority": "high",
        "form_fields": FORM_FIELDS,
    }
    body.update(overrides)
    response = client.post(f"{API_PREFIX}/tasks", json=body, headers=headers)
    assert response.status_code == 201
    return response.json()["details"]


def test_manager_creates_task_for_assignee(client: TestClient, manager_headers: dict[str, str]) -> None:
    task = _create_task(client, manager_headers)

    uuid.UUID(task["id"])
    assert task["status"] == "pending"
    assert task["priority"] == "high"
    assert task["assigned_to"] == USER_SUBJECT
    assert task["assigned_by"] == token_subject("manager-token")
    assert [field["id"] for field in task["form_fields"]] == ["visited", "families", "notes"]
    assert task["response"] is None


def test_only_managers_create_tasks(client: TestClient, user_headers: dict[str, str]) -> None:
    anonymous = client.post(f"{API_PREFIX}/tasks", json={})
    plain_user = client.post(f"{API_PREFIX}/tasks", json={}, headers=user_headers)

    assert anonymous.status_code == 401
    assert plain_user.status_code == 403
    assert plain_user.json()["error"]["code"] == "ERR_UNAUTHORIZED"


def test_task_payload_validation(client: TestClient, manager_headers: dict[str, str]) -> None:
    duplicate_ids = [FORM_FIELDS[0], dict(FORM_FIELDS[0], label="Again")]

    response = client.post(
        f"{API_PREFIX}/tasks",
        json={"title": "", "description": "x", "assigned_to": USER_SUBJECT, "form_fields": duplicate_ids},
        headers=manager_headers,
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "ERR_VALIDATION_ERROR"
    assert set(error["details"]) == {"title", "form_fields"}
    assert error["details"]["form_fields"] == "Form field ids must be unique"


def test_assignees_only_see_their_own_tasks(
    client: TestClient,
    manager_headers: dict[str, str],
    user_headers: dict[str, str],
) -> None:
    own = _create_task(client, manager_headers)
    other = _create_task(client, manager_headers, assigned_to="someone-else")

    mine = client.get(f"{API_PREFIX}/tasks", headers=user_headers).json()["details"]
    everything = client.get(f"{API_PREFIX}/tasks", headers=manager_headers).json()["details"]
    forbidden = client.get(f"{API_PREFIX}/tasks/{other['id']}", headers=user_headers)

    assert [task["id"] for task in mine["items"]] == [own["id"]]
    assert mine["pagination"]["total"] == 1
    assert everything["pagination"]["total"] == 2
    assert forbidden.status_code == 403
    assert forbidden.json()["error"]["cause"] == "Access denied to this task"
    assert client.get(f"{API_PREFIX}/tasks").status_code == 401


def test_unknown_task_returns_not_found(client: TestClient, manager_headers: dict[str, str]) -> None:
    response = client.get(f"{API_PREFIX}/tasks/{uuid.uuid4()}", headers=manager_headers)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ERR_NOT_FOUND"


def test_submit_requires_every_required_field(
    client: TestClient,
    manager_headers: dict[str, str],
    user_headers: dict[str, str],
) -> None:
    task = _create_task(client, manager_headers)

    response = client.post(
        f"{API_PREFIX}/tasks/{task['id']}/submit",
        json={"response": {"visited": "2026-10-18", "families": ""}},
        headers=user_headers,
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "ERR_MISSING_PARAMETER"
    assert error["cause"] == "Required fields missing: Families reached"
    assert error["details"] == {"fields": ["families"]}


def test_only_the_assignee_can_submit(
    client: TestClient,
    manager_headers: dict[str, str],
) -> None:
    task = _create_task(client, manager_headers)

    response = client.post(
        f"{API_PREFIX}/tasks/{task['id']}/submit",
        json={"response": {"visited": "2026-10-18", "families": 12}},
        headers=manager_headers,
    )

    assert response.status_code == 403
    assert response.json()["error"]["cause"] == "You can only submit tasks assigned to you"


def test_submit_and_review_lifecycle(
    client: TestClient,
    manager_headers: dict[str, str],
    user_headers: dict[str, str],
) -> None:
    task = _create_task(client, manager_headers)
    answer = {"visited": "2026-10-18", "families": 12}

    early_review = client.post(
        f"{API_PREFIX}/tasks/{task['id']}/review",
        json={"review_comment": "Looks good"},
        headers=manager_headers,
    )
    submitted = client.post(f"{API_PREFIX}/tasks/{task['id']}/submit", json={"response": answer}, headers=user_headers)
    resubmitted = client.post(
        f"{API_PREFIX}/tasks/{task['id']}/submit",
        json={"response": answer},
        headers=user_headers,
    )
    user_review = client.post(
        f"{API_PREFIX}/tasks/{task['id']}/review",
        json={"review_comment": "Self approval"},
        headers=user_headers,
    )
    reviewed = client.post(
        f"{API_PREFIX}/tasks/{task['id']}/review",
        json={"review_comment": "Looks good"},
        headers=manager_headers,
    )

    assert early_review.status_code == 400
    assert early_review.json()["error"]["cause"] == "Can only complete submitted tasks"
    assert submitted.status_code == 200
    assert submitted.json()["details"]["status"] == "submitted"
    assert submitted.json()["details"]["response"] == answer
    assert submitted.json()["details"]["submitted_at"] is not None
    assert resubmitted.status_code == 409
    assert resubmitted.json()["error"]["code"] == "ERR_DATA_ALREADY_EXIST"
    assert user_review.status_code == 403
    assert reviewed.status_code == 200
    completed = reviewed.json()["details"]
    assert completed["status"] == "completed"
    assert completed["review_comment"] == "Looks good"
    assert completed["completed_at"] is not None


def test_status_transitions(
    client: TestClient,
    manager_headers: dict[str, str],
    user_headers: dict[str, str],
) -> None:
    task = _create_task(client, manager_headers)
    url = f"{API_PREFIX}/tasks/{task['id']}/status"

    started = client.patch(url, json={"status": "in_progress"}, headers=user_headers)
    not_allowed = client.patch(url, json={"status": "completed"}, headers=user_headers)
    client.post(
        f"{API_PREFIX}/tasks/{task['id']}/submit",
        json={"response": {"visited": "2026-10-18", "families": 3}},
        headers=user_headers,
    )
    reopened = client.patch(url, json={"status": "pending"}, headers=user_headers)
    cancelled = client.patch(url, json={"status": "cancelled"}, headers=manager_headers)
    late_submit = client.post(
        f"{API_PREFIX}/tasks/{task['id']}/submit",
        json={"response": {"visited": "2026-10-18", "families": 3}},
        headers=user_headers,
    )

    assert started.status_code == 200
    assert started.json()["details"]["status"] == "in_progress"
    assert not_allowed.status_code == 400
    assert not_allowed.json()["error"]["code"] == "ERR_VALIDATION_ERROR"
    assert reopened.status_code == 400
    assert reopened.json()["error"]["cause"] == "Task is submitted and awaiting review"
    assert cancelled.status_code == 200
    assert cancelled.json()["details"]["status"] == "cancelled"
    assert late_submit.status_code == 400
    assert late_submit.json()["error"]["cause"] == "Cannot submit a cancelled task"
