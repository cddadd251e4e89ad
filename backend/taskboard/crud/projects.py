from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload
from ..models import Project, User
from ..schemas import ProjectIn

def list_projects(db: Session) -> list[Project]:
    stmt = select(Project).options(selectinload(Project.owner)).order_by(Project.id)
    return list(db.execute(stmt).scalars())

def get_project(db: Session, project_id: int) -> Project | None:
    return db.execute(
        select(Project)
        .options(selectinload(Project.owner))
        .filter(Project.id == project_id)
    ).scalars().first()

def upsert_project(db: Session, *, id: int | None, data: ProjectIn) -> Project:
    p = db.get(Project, id) if id else None
    if id and not p:
        raise ValueError("Project not found")
    if not db.get(User, data.owner_id):
        raise LookupError("Owner not found")
    if p:
        p.title = data.title
        p.description = data.description
        p.start_date = data.start_date
        p.end_date = data.end_date
        p.owner_id = data.owner_id
    else:
        p = Project(
            title=data.title, description=data.description,
            start_date=data.start_date, end_date=data.end_date, owner_id=data.owner_id
        )
        db.add(p)
    db.flush()
    db.refresh(p, attribute_names=["owner"])
    return p

def delete_project(db: Session, project_id: int) -> None:
    """Delete a project; its tasks go with it (delete-orphan cascade)."""
    p = db.get(Project, project_id)
    if not p:
        raise ValueError("Project not found")
    db.delete(p)
    db.flush()
