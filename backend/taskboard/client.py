"""
Data service client used by the admin console.

One AdminService (and one httpx.AsyncClient) lives for the console's
lifetime. Every transport failure or non-2xx answer surfaces as
AdminServiceError; callers decide how to report it.
"""
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from .console.records import Project, Task, User

logger = logging.getLogger(__name__)

_PROJECTS = TypeAdapter(list[Project])
_TASKS = TypeAdapter(list[Task])
_USERS = TypeAdapter(list[User])


class AdminServiceError(Exception):
    """A data service call failed (network, HTTP status or bad payload)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AdminService:
    """CRUD client for projects, tasks and users."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    @classmethod
    def from_settings(cls, settings) -> "AdminService":
        base_url = settings.api_base_url.rstrip("/") + "/"
        return cls(httpx.AsyncClient(base_url=base_url, timeout=settings.api_timeout))

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AdminServiceError(
                f"{method} {path} returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise AdminServiceError(f"{method} {path} failed: {e}") from e
        logger.debug("%s %s -> %s", method, path, response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _parse(self, adapter_or_model, data):
        try:
            if isinstance(adapter_or_model, TypeAdapter):
                return adapter_or_model.validate_python(data)
            return adapter_or_model.model_validate(data)
        except ValidationError as e:
            raise AdminServiceError(f"Unexpected response payload: {e}") from e

    # Projects
    async def get_projects(self) -> list[Project]:
        return self._parse(_PROJECTS, await self._request("GET", "projects"))

    async def create_project(self, payload: dict) -> Project:
        return self._parse(Project, await self._request("POST", "projects", json=payload))

    async def update_project(self, project_id: int, payload: dict) -> Project:
        return self._parse(Project, await self._request("PUT", f"projects/{project_id}", json=payload))

    async def delete_project(self, project_id: int) -> None:
        await self._request("DELETE", f"projects/{project_id}")

    # Tasks
    async def get_tasks(self) -> list[Task]:
        return self._parse(_TASKS, await self._request("GET", "tasks"))

    async def create_task(self, payload: dict) -> Task:
        return self._parse(Task, await self._request("POST", "tasks", json=payload))

    async def update_task(self, task_id: int, payload: dict) -> Task:
        return self._parse(Task, await self._request("PUT", f"tasks/{task_id}", json=payload))

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", f"tasks/{task_id}")

    async def search_tasks(self, term: str) -> list[Task]:
        return self._parse(_TASKS, await self._request("GET", "tasks/search", params={"term": term}))

    # Users
    async def get_users(self) -> list[User]:
        return self._parse(_USERS, await self._request("GET", "users"))
