from sqlalchemy import select, or_
from sqlalchemy.orm import Session
from ..models import Project, Task, User
from ..schemas import TaskIn

def list_tasks(db: Session) -> list[Task]:
    return list(db.execute(select(Task).order_by(Task.id)).scalars())

def search_tasks(db: Session, term: str) -> list[Task]:
    """Tasks whose title or description contains `term`, case-insensitive."""
    term = term.strip()
    stmt = (
        select(Task)
        .filter(or_(
            Task.title.icontains(term, autoescape=True),
            Task.description.icontains(term, autoescape=True),
        ))
        .order_by(Task.id)
    )
    return list(db.execute(stmt).scalars())

def upsert_task(db: Session, *, id: int | None, data: TaskIn) -> Task:
    t = db.get(Task, id) if id else None
    if id and not t:
        raise ValueError("Task not found")
    if not db.get(User, data.employee_id):
        raise LookupError("Employee not found")
    if not db.get(Project, data.project_id):
        raise LookupError("Project not found")
    if t:
        t.title = data.title
        t.description = data.description
        t.due_date = data.due_date
        t.priority = data.priority.value
        t.employee_id = data.employee_id
        t.task_status = data.task_status.value
        t.project_id = data.project_id
    else:
        t = Task(
            title=data.title, description=data.description, due_date=data.due_date,
            priority=data.priority.value, employee_id=data.employee_id,
            task_status=data.task_status.value, project_id=data.project_id
        )
        db.add(t)
    db.flush()
    return t

def delete_task(db: Session, task_id: int) -> None:
    t = db.get(Task, task_id)
    if not t:
        raise ValueError("Task not found")
    db.delete(t)
    db.flush()
