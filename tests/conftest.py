# tests/conftest.py

from __future__ import annotations

import os
import re
import tempfile

# Settings are read at import time; point them at a throwaway database first.
_DB_DIR = tempfile.mkdtemp(prefix="taskboard-tests-")
os.environ["TASKBOARD_DATABASE_URL"] = f"sqlite:///{_DB_DIR}/taskboard.db"
os.environ["TASKBOARD_SEED_USERS"] = '["Alice", "Bob"]'
os.environ["TASKBOARD_SECRET_KEY"] = "test-secret"

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskboard import api
from taskboard.client import AdminService
from taskboard.console.records import Project, Task, User
from taskboard.crud import users as cu
from taskboard.db import Base, engine, session_scope
from taskboard.main import create_app

from .fakes import FakeAdminService

_CSRF_RE = re.compile(r'name="csrf_token" value="([^"]+)"')


@pytest.fixture()
def tables():
    """Fresh schema with users Alice (id 1) and Bob (id 2)."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with session_scope() as db:
        cu.seed_users(db, ["Alice", "Bob"])
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def api_app(tables) -> FastAPI:
    app = FastAPI()
    app.include_router(api.router)
    return app


@pytest.fixture()
def api_client(api_app: FastAPI) -> TestClient:
    return TestClient(api_app)


@pytest.fixture()
def console_app(api_app: FastAPI) -> FastAPI:
    """Console app whose AdminService talks to the in-process data service."""
    service = AdminService(
        httpx.AsyncClient(transport=httpx.ASGITransport(app=api_app), base_url="http://data/api/")
    )
    return create_app(service=service, serve_api=False)


@pytest.fixture()
def console_client(console_app: FastAPI) -> TestClient:
    return TestClient(console_app)


def csrf_from(html: str) -> str:
    m = _CSRF_RE.search(html)
    assert m, "page has no csrf token"
    return m.group(1)


@pytest.fixture()
def users() -> list[User]:
    return [User(id=1, name="Alice"), User(id=2, name="Bob")]


@pytest.fixture()
def projects() -> list[Project]:
    return [
        Project(id=10, title="Apollo", description="Moon", start_date="2024-05-01T00:00:00",
                end_date="2024-09-30", owner_id=1, owner_name="Alice"),
        Project(id=11, title="Gemini", description="Orbit", start_date="2024-01-01",
                end_date="2024-03-01", owner_id=2, owner_name="Bob"),
    ]


@pytest.fixture()
def tasks() -> list[Task]:
    return [
        Task(id=100, title="Deploy lander", description="", due_date="2024-06-01T12:30:00",
             priority="HIGH", employee_id=2, task_status="IN_PROGRESS", project_id=10),
        Task(id=101, title="Dock", description="", due_date="2024-02-01",
             priority="LOW", employee_id=1, task_status="PENDING", project_id=11),
        Task(id=102, title="Deploy flag", description="", due_date="2024-07-01",
             priority="MEDIUM", employee_id=99, task_status="COMPLETED", project_id=10),
    ]


@pytest.fixture()
def service(projects, tasks, users) -> FakeAdminService:
    return FakeAdminService(projects=projects, tasks=tasks, users=users)
