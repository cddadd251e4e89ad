from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .models import PriorityEnum, TaskStatusEnum

# Data service wire schemas: camelCase on the wire, snake_case in Python.

class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class UserOut(_Wire):
    id: int
    name: str

class ProjectIn(_Wire):
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    start_date: date
    end_date: date
    owner_id: int

class ProjectOut(_Wire):
    id: int
    title: str
    description: str
    start_date: date
    end_date: date
    owner_id: int
    owner_name: str | None = None

class TaskIn(_Wire):
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    due_date: date
    priority: PriorityEnum = PriorityEnum.LOW
    employee_id: int
    task_status: TaskStatusEnum = TaskStatusEnum.PENDING
    project_id: int

class TaskOut(_Wire):
    id: int
    title: str
    description: str
    due_date: date
    priority: PriorityEnum
    employee_id: int
    task_status: TaskStatusEnum
    project_id: int
