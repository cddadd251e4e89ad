"""
AdminPanel: the console's view-model.

Owns the drafts, the fetched lists, edit mode and search state, and keeps
them consistent across create/update/delete/search. Every service call is
guarded on its own: failures are logged, mutations and searches also raise a
user notice, and state stays as it was before the attempt. Lists are always
refetched wholesale after a successful mutation.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from ..client import AdminService, AdminServiceError
from ..utils.formatting import date_part, parse_int
from .project_list import project_list_view
from .records import Project, ProjectDraft, Task, TaskDraft, User

logger = logging.getLogger(__name__)

MSG_PROJECT_CREATED = "Project created successfully"
MSG_PROJECT_UPDATED = "Project updated successfully"
MSG_PROJECT_SAVE_FAILED = "Failed to create/update project"
MSG_PROJECT_DELETED = "Project deleted successfully"
MSG_PROJECT_DELETE_FAILED = "Failed to delete project"
MSG_TASK_CREATED = "Task created successfully"
MSG_TASK_UPDATED = "Task updated successfully"
MSG_TASK_SAVE_FAILED = "Failed to create/update task"
MSG_TASK_DELETED = "Task deleted successfully"
MSG_TASK_DELETE_FAILED = "Failed to delete task"
MSG_SEARCH_FAILED = "Failed to search tasks"


class AdminPanel:
    def __init__(self, service: AdminService, notify: Optional[Callable[[str], None]] = None):
        self.service = service
        self.notifications: list[str] = []
        self._notify = notify or self.notifications.append

        self.project_draft = ProjectDraft()
        self.task_draft = TaskDraft()
        self.projects: list[Project] = []
        self.tasks: list[Task] = []
        self.users: list[User] = []
        self.loading = True
        self.editing_project_id: int | None = None
        self.editing_task_id: int | None = None
        self.search_term = ""
        self.is_searching = False

    @property
    def is_editing_project(self) -> bool:
        return self.editing_project_id is not None

    @property
    def is_editing_task(self) -> bool:
        return self.editing_task_id is not None

    def take_notifications(self) -> list[str]:
        """Pending notices, drained once shown."""
        out = list(self.notifications)
        self.notifications.clear()
        return out

    # ------------------
    # Fetching
    # ------------------

    async def mount(self) -> None:
        await asyncio.gather(self.fetch_projects(), self.fetch_tasks(), self.fetch_users())

    async def fetch_projects(self) -> None:
        try:
            self.projects = await self.service.get_projects()
        except AdminServiceError:
            logger.exception("Error fetching projects")

    async def fetch_tasks(self) -> None:
        try:
            self.tasks = await self.service.get_tasks()
        except AdminServiceError:
            logger.exception("Error fetching tasks")
        finally:
            self.loading = False

    async def fetch_users(self) -> None:
        try:
            self.users = await self.service.get_users()
        except AdminServiceError:
            logger.exception("Error fetching users")

    # ------------------
    # Field changes
    # ------------------

    def set_project_field(self, name: str, value: str) -> None:
        self.project_draft.set(name, value)

    def set_task_field(self, name: str, value: str) -> None:
        self.task_draft.set(name, value)

    def set_search_term(self, value: str) -> None:
        self.search_term = value

    # ------------------
    # Projects
    # ------------------

    def project_payload(self) -> dict:
        payload = self.project_draft.to_form()
        payload["ownerId"] = parse_int(self.project_draft.owner)
        return payload

    async def submit_project(self) -> bool:
        try:
            payload = self.project_payload()
            if self.is_editing_project:
                await self.service.update_project(self.editing_project_id, payload)
                self._notify(MSG_PROJECT_UPDATED)
                self.editing_project_id = None
            else:
                await self.service.create_project(payload)
                self._notify(MSG_PROJECT_CREATED)
        except AdminServiceError:
            logger.exception("Error creating/updating project")
            self._notify(MSG_PROJECT_SAVE_FAILED)
            return False
        self.project_draft = ProjectDraft()
        await self.fetch_projects()
        return True

    async def delete_project(self, project_id: int) -> bool:
        try:
            await self.service.delete_project(project_id)
            self._notify(MSG_PROJECT_DELETED)
        except AdminServiceError:
            logger.exception("Error deleting project %s", project_id)
            self._notify(MSG_PROJECT_DELETE_FAILED)
            return False
        # tasks may reference the deleted project
        await asyncio.gather(self.fetch_projects(), self.fetch_tasks())
        return True

    def edit_project(self, project: Project) -> None:
        self.project_draft = ProjectDraft(
            title=project.title,
            description=project.description,
            start_date=date_part(project.start_date),
            end_date=date_part(project.end_date),
            owner="" if project.owner_id is None else str(project.owner_id),
        )
        self.editing_project_id = project.id

    def cancel_project_edit(self) -> None:
        self.editing_project_id = None
        self.project_draft = ProjectDraft()

    def find_project(self, project_id: int) -> Project | None:
        return next((p for p in self.projects if p.id == project_id), None)

    # ------------------
    # Tasks
    # ------------------

    def task_payload(self) -> dict:
        return self.task_draft.to_form()

    async def submit_task(self) -> bool:
        try:
            payload = self.task_payload()
            if self.is_editing_task:
                await self.service.update_task(self.editing_task_id, payload)
                self._notify(MSG_TASK_UPDATED)
                self.editing_task_id = None
            else:
                await self.service.create_task(payload)
                self._notify(MSG_TASK_CREATED)
        except AdminServiceError:
            logger.exception("Error creating/updating task")
            self._notify(MSG_TASK_SAVE_FAILED)
            return False
        self.task_draft = TaskDraft()
        await self.fetch_tasks()
        return True

    async def delete_task(self, task_id: int) -> bool:
        try:
            await self.service.delete_task(task_id)
            self._notify(MSG_TASK_DELETED)
        except AdminServiceError:
            logger.exception("Error deleting task %s", task_id)
            self._notify(MSG_TASK_DELETE_FAILED)
            return False
        await self.fetch_tasks()
        return True

    def edit_task(self, task: Task) -> None:
        self.task_draft = TaskDraft(
            title=task.title,
            description=task.description,
            due_date=date_part(task.due_date),
            priority=task.priority,
            employee_id="" if task.employee_id is None else str(task.employee_id),
            task_status=task.task_status,
            project_id="" if task.project_id is None else str(task.project_id),
        )
        self.editing_task_id = task.id

    def cancel_task_edit(self) -> None:
        self.editing_task_id = None
        self.task_draft = TaskDraft()

    def find_task(self, task_id: int) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    # ------------------
    # Search
    # ------------------

    async def search(self) -> bool:
        try:
            self.tasks = await self.service.search_tasks(self.search_term)
        except AdminServiceError:
            logger.exception("Error searching tasks for %r", self.search_term)
            self._notify(MSG_SEARCH_FAILED)
            return False
        self.is_searching = True
        return True

    async def show_all_tasks(self) -> None:
        if not self.is_searching:
            return
        self.search_term = ""
        self.is_searching = False
        await self.fetch_tasks()

    # ------------------
    # Rendering
    # ------------------

    def view(self) -> dict:
        """Template context for the console page."""
        return {
            "project_form": self.project_draft.to_form(),
            "task_form": self.task_draft.to_form(),
            "is_editing_project": self.is_editing_project,
            "is_editing_task": self.is_editing_task,
            "projects": self.projects,
            "users": self.users,
            "search_term": self.search_term,
            "is_searching": self.is_searching,
            "blocks": project_list_view(self.projects, self.tasks, self.users, self.loading),
        }
