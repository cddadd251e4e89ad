"""Console-side records and form drafts.

Records mirror what the data service sends; dates stay as the wire text.
Drafts are the form-shaped, all-string projections used while composing.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

class User(_Record):
    id: int
    name: str

class Project(_Record):
    id: int
    title: str
    description: str = ""
    start_date: str
    end_date: str
    owner_id: int | None = None
    owner_name: str | None = None

class Task(_Record):
    id: int
    title: str
    description: str = ""
    due_date: str
    priority: str = "LOW"
    employee_id: int | None = None
    task_status: str = "PENDING"
    project_id: int | None = None

# --- Drafts ---

class _Draft:
    # form field name -> attribute name
    FORM_FIELDS: dict[str, str] = {}

    def set(self, name: str, value: str) -> None:
        """Change one field, by form name or attribute name."""
        attr = self.FORM_FIELDS.get(name, name)
        if attr not in {f.name for f in fields(self)}:
            raise KeyError(name)
        setattr(self, attr, value)

    def to_form(self) -> dict[str, str]:
        by_attr = {v: k for k, v in self.FORM_FIELDS.items()}
        return {by_attr.get(k, k): v for k, v in asdict(self).items()}

@dataclass
class ProjectDraft(_Draft):
    FORM_FIELDS = {"startDate": "start_date", "endDate": "end_date"}

    title: str = ""
    description: str = ""
    start_date: str = ""
    end_date: str = ""
    owner: str = ""

@dataclass
class TaskDraft(_Draft):
    FORM_FIELDS = {
        "dueDate": "due_date",
        "employeeId": "employee_id",
        "taskStatus": "task_status",
        "projectId": "project_id",
    }

    title: str = ""
    description: str = ""
    due_date: str = ""
    priority: str = "LOW"
    employee_id: str = ""
    task_status: str = "PENDING"
    project_id: str = ""
