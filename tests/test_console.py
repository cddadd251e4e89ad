# tests/test_console.py

from __future__ import annotations

from fastapi.testclient import TestClient

from .conftest import csrf_from

PROJECT_FORM = {
    "title": "Apollo",
    "description": "Moon",
    "startDate": "2024-05-01",
    "endDate": "2024-09-30",
    "owner": "1",
}

TASK_FORM = {
    "title": "Deploy lander",
    "description": "Site A",
    "dueDate": "2024-06-01",
    "priority": "HIGH",
    "employeeId": "2",
    "taskStatus": "PENDING",
    "projectId": "1",
}


def open_console(client: TestClient) -> str:
    r = client.get("/")
    assert r.status_code == 200
    return csrf_from(r.text)


def test_first_visit_mounts_and_renders_forms(console_client: TestClient) -> None:
    r = console_client.get("/")

    assert r.status_code == 200
    assert "Create a New Project" in r.text
    assert "Create a New Task" in r.text
    assert ">Alice</option>" in r.text
    assert "Loading..." not in r.text
    assert "Show All Tasks" not in r.text


def test_create_project_and_task(console_client: TestClient) -> None:
    token = open_console(console_client)

    r = console_client.post("/projects/submit", data={**PROJECT_FORM, "csrf_token": token})
    assert r.status_code == 200
    assert "Project created successfully" in r.text
    assert "<h3>Apollo</h3>" in r.text
    assert "Owner: Alice" in r.text
    assert "No tasks for this project" in r.text

    r = console_client.post("/tasks/submit", data={**TASK_FORM, "csrf_token": token})
    assert "Task created successfully" in r.text
    assert "Assigned To: Bob" in r.text
    assert "No tasks for this project" not in r.text


def test_notices_are_shown_once(console_client: TestClient) -> None:
    token = open_console(console_client)
    console_client.post("/projects/submit", data={**PROJECT_FORM, "csrf_token": token})

    r = console_client.get("/")
    assert "Project created successfully" not in r.text


def test_failed_project_submit_keeps_form(console_client: TestClient) -> None:
    token = open_console(console_client)

    r = console_client.post(
        "/projects/submit",
        data={**PROJECT_FORM, "title": "Half typed", "owner": "nobody", "csrf_token": token},
    )

    assert "Failed to create/update project" in r.text
    assert 'value="Half typed"' in r.text
    assert "<h3>Half typed</h3>" not in r.text


def test_edit_and_update_project(console_client: TestClient) -> None:
    token = open_console(console_client)
    console_client.post("/projects/submit", data={**PROJECT_FORM, "csrf_token": token})

    r = console_client.post("/projects/1/edit", data={"csrf_token": token})
    assert "Edit Project" in r.text
    assert "Update Project" in r.text
    assert 'value="2024-05-01"' in r.text

    r = console_client.post(
        "/projects/submit", data={**PROJECT_FORM, "title": "Apollo 11", "owner": "2", "csrf_token": token}
    )
    assert "Project updated successfully" in r.text
    assert "<h3>Apollo 11</h3>" in r.text
    assert "Owner: Bob" in r.text
    assert "Create a New Project" in r.text


def test_cancel_edit(console_client: TestClient) -> None:
    token = open_console(console_client)
    console_client.post("/projects/submit", data={**PROJECT_FORM, "csrf_token": token})
    console_client.post("/projects/1/edit", data={"csrf_token": token})

    r = console_client.post("/projects/cancel", data={"csrf_token": token})

    assert "Create a New Project" in r.text


def test_edit_unknown_project_is_404(console_client: TestClient) -> None:
    token = open_console(console_client)
    r = console_client.post("/projects/77/edit", data={"csrf_token": token})
    assert r.status_code == 404


def test_search_and_show_all(console_client: TestClient) -> None:
    token = open_console(console_client)
    console_client.post("/projects/submit", data={**PROJECT_FORM, "csrf_token": token})
    console_client.post("/tasks/submit", data={**TASK_FORM, "csrf_token": token})
    console_client.post("/tasks/submit", data={**TASK_FORM, "title": "Dock", "description": "", "csrf_token": token})

    r = console_client.post("/tasks/search", data={"term": "deploy", "csrf_token": token})
    assert "Show All Tasks" in r.text
    assert "<h3>Deploy lander</h3>" in r.text
    assert "<h3>Dock</h3>" not in r.text
    assert 'value="deploy"' in r.text

    r = console_client.post("/tasks/show-all", data={"csrf_token": token})
    assert "Show All Tasks" not in r.text
    assert "<h3>Dock</h3>" in r.text


def test_delete_project_removes_its_tasks(console_client: TestClient) -> None:
    token = open_console(console_client)
    console_client.post("/projects/submit", data={**PROJECT_FORM, "csrf_token": token})
    console_client.post("/tasks/submit", data={**TASK_FORM, "csrf_token": token})

    r = console_client.post("/projects/1/delete", data={"csrf_token": token})

    assert "Project deleted successfully" in r.text
    assert "<h3>Apollo</h3>" not in r.text
    assert "Deploy lander" not in r.text


def test_delete_task(console_client: TestClient) -> None:
    token = open_console(console_client)
    console_client.post("/projects/submit", data={**PROJECT_FORM, "csrf_token": token})
    console_client.post("/tasks/submit", data={**TASK_FORM, "csrf_token": token})

    r = console_client.post("/tasks/1/delete", data={"csrf_token": token})
    assert "Task deleted successfully" in r.text
    assert "No tasks for this project" in r.text

    r = console_client.post("/tasks/1/delete", data={"csrf_token": token})
    assert "Failed to delete task" in r.text


def test_post_with_bad_csrf_token_is_rejected(console_client: TestClient) -> None:
    open_console(console_client)
    r = console_client.post("/projects/submit", data={**PROJECT_FORM, "csrf_token": "forged"})
    assert r.status_code == 400


def test_post_without_session_token_is_rejected(console_client: TestClient) -> None:
    r = console_client.post("/tasks/show-all", data={"csrf_token": "anything"})
    assert r.status_code == 400


def test_cookieless_visits_keep_panel_count_bounded(console_app, console_client: TestClient) -> None:
    console_app.state.panels.max_panels = 3

    for _ in range(25):
        console_client.cookies.clear()
        assert console_client.get("/").status_code == 200

    assert len(console_app.state.panels) == 3
