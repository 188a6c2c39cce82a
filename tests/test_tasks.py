# tests/test_tasks.py

from datetime import date

import pytest

from task_manager.core.database import SessionLocal
from task_manager.models import Task
from task_manager.services.task_service import TaskService

from .conftest import audit_entries, create_task

NEW_TASK = {
    "title": "Complete project documentation",
    "description": "Write comprehensive documentation for the API",
    "due_date": "2025-11-01",
    "status": 1,
    "priority": 3,
}


def load_task(task_id: int):
    with SessionLocal() as session:
        return session.query(Task).filter(Task.id == task_id).first()


def titles(response) -> list:
    return [task["title"] for task in response.json()["data"]["data"]]


# =====================================================
# CREATE
# =====================================================

def test_create_task_belongs_to_actor_and_is_audited(client, alice):
    response = client.post("/api/tasks", json=NEW_TASK, headers=alice.headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Task Created Successfully"
    task = body["data"]
    assert task["user_id"] == alice.id
    assert task["status"] == 1
    assert task["priority"] == 3
    assert task["due_date"] == "2025-11-01"

    entries = audit_entries(task_id=task["id"])
    assert len(entries) == 1
    assert entries[0].action == "created"
    assert entries[0].user_id == alice.id
    assert entries[0].old_values is None
    assert entries[0].new_values == {
        "title": NEW_TASK["title"],
        "description": NEW_TASK["description"],
        "status": 1,
        "priority": 3,
        "due_date": "2025-11-01",
        "user_id": alice.id,
    }


@pytest.mark.parametrize("field,value", [("status", 4), ("status", 0), ("priority", 5)])
def test_create_task_rejects_values_outside_enumeration(client, alice, field, value):
    payload = dict(NEW_TASK, **{field: value})

    response = client.post("/api/tasks", json=payload, headers=alice.headers)

    assert response.status_code == 422
    assert response.json()["success"] is False
    with SessionLocal() as session:
        assert session.query(Task).count() == 0


def test_create_task_requires_title(client, alice):
    payload = {k: v for k, v in NEW_TASK.items() if k != "title"}

    response = client.post("/api/tasks", json=payload, headers=alice.headers)

    assert response.status_code == 422
    assert response.json()["message"] == "The title field is required."


def test_create_task_rejects_empty_description(client, alice):
    payload = dict(NEW_TASK, description="")

    response = client.post("/api/tasks", json=payload, headers=alice.headers)

    assert response.status_code == 422
    assert response.json()["message"].startswith("The description field is invalid")
    with SessionLocal() as session:
        assert session.query(Task).count() == 0


def test_update_rejects_empty_description(client, alice):
    task_id = create_task(alice.id, description="Keep")

    response = client.put(f"/api/tasks/{task_id}", json={"description": ""}, headers=alice.headers)

    assert response.status_code == 422
    assert load_task(task_id).description == "Keep"
    assert audit_entries(task_id=task_id) == []


def test_non_admin_cannot_assign_task_to_someone_else(client, alice, bob):
    response = client.post("/api/tasks", json=dict(NEW_TASK, user_id=bob.id), headers=alice.headers)

    assert response.status_code == 200
    assert response.json()["data"]["user_id"] == alice.id


def test_admin_assigns_task_on_create(client, admin, bob):
    response = client.post("/api/tasks", json=dict(NEW_TASK, user_id=bob.id), headers=admin.headers)

    assert response.status_code == 200
    assert response.json()["data"]["user_id"] == bob.id
    assert audit_entries(task_id=response.json()["data"]["id"])[0].user_id == admin.id


def test_admin_assigning_to_unknown_user_is_a_validation_error(client, admin):
    response = client.post("/api/tasks", json=dict(NEW_TASK, user_id=999), headers=admin.headers)

    assert response.status_code == 422
    assert response.json()["message"] == "The selected user id is invalid."


# =====================================================
# UPDATE
# =====================================================

def test_update_audits_exactly_the_payload_fields(client, alice):
    task_id = create_task(alice.id, title="Draft", status=1, priority=1)

    response = client.put(
        f"/api/tasks/{task_id}",
        json={"status": 2, "title": "Draft v2"},
        headers=alice.headers,
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Task Updated Successfully"
    assert response.json()["data"]["status"] == 2
    assert response.json()["data"]["priority"] == 1

    entries = audit_entries(task_id=task_id, action="updated")
    assert len(entries) == 1
    assert entries[0].user_id == alice.id
    assert entries[0].old_values == {"status": 1, "title": "Draft"}
    assert entries[0].new_values == {"status": 2, "title": "Draft v2"}


def test_update_of_someone_elses_task_is_forbidden(client, alice, bob):
    task_id = create_task(alice.id, title="Alice's task")

    response = client.put(f"/api/tasks/{task_id}", json={"title": "Hijacked"}, headers=bob.headers)

    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "message": "You are not authorized to perform this action.",
        "data": [],
    }
    assert load_task(task_id).title == "Alice's task"
    assert audit_entries(task_id=task_id) == []


def test_update_unknown_task_is_not_found(client, alice):
    response = client.put("/api/tasks/12345", json={"title": "Ghost"}, headers=alice.headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Task not found"


def test_update_rejects_invalid_priority(client, alice):
    task_id = create_task(alice.id)

    response = client.put(f"/api/tasks/{task_id}", json={"priority": 9}, headers=alice.headers)

    assert response.status_code == 422
    assert load_task(task_id).priority == 2


def test_admin_updates_and_reassigns_any_task(client, admin, alice, bob):
    task_id = create_task(alice.id)

    response = client.put(
        f"/api/tasks/{task_id}",
        json={"user_id": bob.id, "priority": 3},
        headers=admin.headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["user_id"] == bob.id
    entry = audit_entries(task_id=task_id, action="updated")[0]
    assert entry.user_id == admin.id
    assert entry.old_values == {"user_id": alice.id, "priority": 2}
    assert entry.new_values == {"user_id": bob.id, "priority": 3}


def test_owner_cannot_reassign_task(client, alice, bob):
    task_id = create_task(alice.id)

    response = client.put(f"/api/tasks/{task_id}", json={"user_id": bob.id}, headers=alice.headers)

    assert response.status_code == 200
    assert load_task(task_id).user_id == alice.id


# =====================================================
# DELETE
# =====================================================

def test_delete_removes_task_and_leaves_one_audit_entry(client, alice):
    task_id = create_task(alice.id, title="Old chore")

    response = client.delete(f"/api/tasks/{task_id}", headers=alice.headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Task Deleted Successfully", "data": []}
    assert load_task(task_id) is None

    entries = audit_entries(task_id=task_id, action="deleted")
    assert len(entries) == 1
    assert entries[0].new_values is None
    assert entries[0].old_values["title"] == "Old chore"
    assert entries[0].old_values["user_id"] == alice.id


def test_delete_of_someone_elses_task_is_forbidden(client, alice, bob):
    task_id = create_task(alice.id)

    response = client.delete(f"/api/tasks/{task_id}", headers=bob.headers)

    assert response.status_code == 403
    assert load_task(task_id) is not None
    assert audit_entries(task_id=task_id) == []


def test_admin_deletes_any_task(client, admin, alice):
    task_id = create_task(alice.id)

    assert client.delete(f"/api/tasks/{task_id}", headers=admin.headers).status_code == 200
    assert load_task(task_id) is None
    assert audit_entries(task_id=task_id, action="deleted")[0].user_id == admin.id


def test_delete_unknown_task_is_not_found(client, alice):
    assert client.delete("/api/tasks/404", headers=alice.headers).status_code == 404


# =====================================================
# LIST
# =====================================================

def test_users_only_see_their_own_tasks(client, admin, alice, bob):
    create_task(alice.id, title="Alice 1")
    create_task(bob.id, title="Bob 1")

    mine = client.get("/api/tasks", headers=alice.headers)
    everything = client.get("/api/tasks", headers=admin.headers)
    # user_id is an admin-only filter
    sneaky = client.get(f"/api/tasks?user_id={bob.id}", headers=alice.headers)
    bobs = client.get(f"/api/tasks?user_id={bob.id}", headers=admin.headers)

    assert titles(mine) == ["Alice 1"]
    assert sorted(titles(everything)) == ["Alice 1", "Bob 1"]
    assert titles(sneaky) == ["Alice 1"]
    assert titles(bobs) == ["Bob 1"]


def test_due_date_range_is_inclusive_and_sorted(client, alice):
    create_task(alice.id, title="December", due_date=date(2024, 12, 31))
    create_task(alice.id, title="First", due_date=date(2025, 1, 1))
    create_task(alice.id, title="Middle", due_date=date(2025, 1, 15))
    create_task(alice.id, title="Last", due_date=date(2025, 1, 31))
    create_task(alice.id, title="February", due_date=date(2025, 2, 1))

    ascending = client.get("/api/tasks?due_from=2025-01-01&due_to=2025-01-31", headers=alice.headers)
    descending = client.get(
        "/api/tasks?due_from=2025-01-01&due_to=2025-01-31&sort=desc", headers=alice.headers
    )

    assert ascending.status_code == 200
    assert titles(ascending) == ["First", "Middle", "Last"]
    assert titles(descending) == ["Last", "Middle", "First"]
    assert ascending.json()["data"]["total"] == 3


def test_search_matches_title_or_description_case_insensitively(client, alice):
    create_task(alice.id, title="Fix LOGIN bug", description="auth")
    create_task(alice.id, title="Release", description="after login works")
    create_task(alice.id, title="Unrelated", description="nothing here")

    response = client.get("/api/tasks?search=login", headers=alice.headers)

    assert sorted(titles(response)) == ["Fix LOGIN bug", "Release"]


def test_status_and_priority_filters_are_conjunctive(client, alice):
    create_task(alice.id, title="match", status=2, priority=3)
    create_task(alice.id, title="wrong priority", status=2, priority=1)
    create_task(alice.id, title="wrong status", status=3, priority=3)

    response = client.get("/api/tasks?status=2&priority=3", headers=alice.headers)

    assert titles(response) == ["match"]


def test_pagination_metadata(client, alice):
    for day in range(1, 6):
        create_task(alice.id, title=f"Task {day}", due_date=date(2025, 3, day))

    response = client.get("/api/tasks?per_page=2&page=2", headers=alice.headers)

    data = response.json()["data"]
    assert response.json()["message"] == "Tasks List"
    assert [t["title"] for t in data["data"]] == ["Task 3", "Task 4"]
    assert data["current_page"] == 2
    assert data["per_page"] == 2
    assert data["total"] == 5
    assert data["last_page"] == 3


def test_per_page_must_be_positive(client, alice):
    assert client.get("/api/tasks?per_page=0", headers=alice.headers).status_code == 422


@pytest.mark.parametrize("query", [
    "page=99999999999999999999",
    "per_page=99999999999999999999",
    "per_page=101",
])
def test_oversized_paging_parameters_are_rejected(client, alice, query):
    response = client.get(f"/api/tasks?{query}", headers=alice.headers)

    assert response.status_code == 422
    assert response.json()["success"] is False


def test_paging_parameters_are_bounded_on_every_listing(client, admin):
    huge = "page=99999999999999999999"

    assert client.get(f"/api/users?{huge}", headers=admin.headers).status_code == 422
    assert client.get(f"/api/audit-logs?{huge}", headers=admin.headers).status_code == 422


def test_invalid_status_filter_is_rejected(client, alice):
    assert client.get("/api/tasks?status=7", headers=alice.headers).status_code == 422


# =====================================================
# SERVER ERRORS
# =====================================================

def _explode(*args, **kwargs):
    raise RuntimeError("connection to db-primary:3306 refused")


def test_unexpected_errors_return_a_generic_500(client, alice, monkeypatch):
    monkeypatch.setattr(TaskService, "list_tasks", staticmethod(_explode))

    response = client.get("/api/tasks", headers=alice.headers)

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error", "data": []}


def test_error_details_can_be_exposed_for_debugging(client, alice, monkeypatch):
    from task_manager.core.config import settings

    monkeypatch.setattr(TaskService, "list_tasks", staticmethod(_explode))
    monkeypatch.setattr(settings, "EXPOSE_ERROR_DETAILS", True)

    response = client.get("/api/tasks", headers=alice.headers)

    assert response.status_code == 500
    assert response.json()["message"] == "connection to db-primary:3306 refused"


# =====================================================
# AUDIT ATOMICITY
# =====================================================

def _audit_unavailable(*args, **kwargs):
    raise RuntimeError("audit table is locked")


def test_update_is_rolled_back_when_audit_fails(client, alice, monkeypatch):
    from task_manager.services.audit_service import AuditService

    task_id = create_task(alice.id, title="Keep")
    monkeypatch.setattr(AuditService, "record", _audit_unavailable)

    response = client.put(f"/api/tasks/{task_id}", json={"title": "Changed"}, headers=alice.headers)

    assert response.status_code == 500
    assert load_task(task_id).title == "Keep"
    assert audit_entries(task_id=task_id) == []


def test_delete_is_rolled_back_when_audit_fails(client, alice, monkeypatch):
    from task_manager.services.audit_service import AuditService

    task_id = create_task(alice.id)
    monkeypatch.setattr(AuditService, "record", _audit_unavailable)

    response = client.delete(f"/api/tasks/{task_id}", headers=alice.headers)

    assert response.status_code == 500
    assert load_task(task_id) is not None
    with SessionLocal() as session:
        assert session.query(Task).count() == 1


def test_create_is_rolled_back_when_audit_fails(client, alice, monkeypatch):
    from task_manager.services.audit_service import AuditService

    monkeypatch.setattr(AuditService, "record", _audit_unavailable)

    response = client.post("/api/tasks", json=NEW_TASK, headers=alice.headers)

    assert response.status_code == 500
    with SessionLocal() as session:
        assert session.query(Task).count() == 0
