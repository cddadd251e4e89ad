"""JSON CRUD data service consumed by the admin console."""
import logging
from fastapi import APIRouter, HTTPException, Response

from .db import session_scope
from .crud import projects as cp
from .crud import tasks as ct
from .crud import users as cu
from .schemas import ProjectIn, ProjectOut, TaskIn, TaskOut, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["data-service"])

def _not_found(e: ValueError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e))

def _bad_reference(e: LookupError) -> HTTPException:
    return HTTPException(status_code=400, detail=str(e))

# Users
@router.get("/users", response_model=list[UserOut])
def api_users_list():
    with session_scope() as db:
        return [UserOut.model_validate(u) for u in cu.list_users(db)]

# Projects
@router.get("/projects", response_model=list[ProjectOut])
def api_projects_list():
    with session_scope() as db:
        return [ProjectOut.model_validate(p) for p in cp.list_projects(db)]

@router.post("/projects", response_model=ProjectOut, status_code=201)
def api_projects_create(data: ProjectIn):
    with session_scope() as db:
        try:
            p = cp.upsert_project(db, id=None, data=data)
        except LookupError as e:
            raise _bad_reference(e)
        logger.info("Created project %s", p.id)
        return ProjectOut.model_validate(p)

@router.put("/projects/{pid}", response_model=ProjectOut)
def api_projects_update(pid: int, data: ProjectIn):
    with session_scope() as db:
        try:
            p = cp.upsert_project(db, id=pid, data=data)
        except ValueError as e:
            raise _not_found(e)
        except LookupError as e:
            raise _bad_reference(e)
        logger.info("Updated project %s", pid)
        return ProjectOut.model_validate(p)

@router.delete("/projects/{pid}", status_code=204)
def api_projects_delete(pid: int):
    with session_scope() as db:
        try:
            cp.delete_project(db, pid)
        except ValueError as e:
            raise _not_found(e)
    logger.info("Deleted project %s", pid)
    return Response(status_code=204)

# Tasks
@router.get("/tasks", response_model=list[TaskOut])
def api_tasks_list():
    with session_scope() as db:
        return [TaskOut.model_validate(t) for t in ct.list_tasks(db)]

# registered before /tasks/{tid} routes so "search" is never read as an id
@router.get("/tasks/search", response_model=list[TaskOut])
def api_tasks_search(term: str = ""):
    with session_scope() as db:
        return [TaskOut.model_validate(t) for t in ct.search_tasks(db, term)]

@router.post("/tasks", response_model=TaskOut, status_code=201)
def api_tasks_create(data: TaskIn):
    with session_scope() as db:
        try:
            t = ct.upsert_task(db, id=None, data=data)
        except LookupError as e:
            raise _bad_reference(e)
        logger.info("Created task %s", t.id)
        return TaskOut.model_validate(t)

@router.put("/tasks/{tid}", response_model=TaskOut)
def api_tasks_update(tid: int, data: TaskIn):
    with session_scope() as db:
        try:
            t = ct.upsert_task(db, id=tid, data=data)
        except ValueError as e:
            raise _not_found(e)
        except LookupError as e:
            raise _bad_reference(e)
        logger.info("Updated task %s", tid)
        return TaskOut.model_validate(t)

@router.delete("/tasks/{tid}", status_code=204)
def api_tasks_delete(tid: int):
    with session_scope() as db:
        try:
            ct.delete_task(db, tid)
        except ValueError as e:
            raise _not_found(e)
    logger.info("Deleted task %s", tid)
    return Response(status_code=204)
