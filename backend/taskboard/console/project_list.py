from __future__ import annotations
from types import SimpleNamespace

from .records import Project, Task, User

UNKNOWN_USER = "Unknown"

def tasks_for_project(tasks: list[Task], project_id: int) -> list[Task]:
    return [t for t in tasks if t.project_id == project_id]

def name_of(users: list[User], user_id: int | None) -> str:
    user = next((u for u in users if u.id == user_id), None)
    return user.name if user else UNKNOWN_USER

def project_list_view(
    projects: list[Project],
    tasks: list[Task],
    users: list[User],
    loading: bool,
) -> list[SimpleNamespace] | None:
    """
    Template-friendly project -> tasks structure for `_project_list.html`.
    None while loading; the partial then shows only the loading indicator.
    """
    if loading:
        return None
    blocks = []
    for p in projects:
        rows = [
            SimpleNamespace(task=t, assignee=name_of(users, t.employee_id))
            for t in tasks_for_project(tasks, p.id)
        ]
        blocks.append(SimpleNamespace(project=p, tasks=rows))
    return blocks
