import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import APIRouter, FastAPI, Request, Form, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware
from starlette.templating import Jinja2Templates

from .settings import settings
from .db import engine, Base, session_scope
from .logging_setup import setup_logging
from .security.csrf import get_or_set_csrf, validate_csrf
from .client import AdminService
from .console.registry import PanelRegistry
from .crud import users as cu
from . import api

logger = logging.getLogger(__name__)

# --- FS
static_dir = Path(__file__).parent / "static"
templates_dir = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(templates_dir))
templates.env.globals["APP_NAME"] = settings.app_name
templates.env.globals["PRIORITIES"] = [("LOW", "Low"), ("MEDIUM", "Medium"), ("HIGH", "High")]
templates.env.globals["STATUSES"] = [("PENDING", "Pending"), ("IN_PROGRESS", "In Progress"), ("COMPLETED", "Completed")]

def render(tpl: str, **ctx):
    template = templates.get_template(tpl)
    return HTMLResponse(template.render(**ctx))

def _back_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)

console = APIRouter(tags=["console"])

async def _panel(request: Request):
    return await request.app.state.panels.for_request(request)

# ------------------
# Page
# ------------------
@console.get("/")
async def admin_page(request: Request):
    panel = await _panel(request)
    return render(
        "admin.html",
        request=request,
        csrf_token=get_or_set_csrf(request),
        title="Admin",
        notices=panel.take_notifications(),
        **panel.view()
    )

# ------------------
# Projects
# ------------------
@console.post("/projects/submit")
async def project_submit(
    request: Request,
    csrf_token: str = Form(...),
    title: str = Form(""),
    description: str = Form(""),
    start_date: str = Form("", alias="startDate"),
    end_date: str = Form("", alias="endDate"),
    owner: str = Form(""),
):
    validate_csrf(request, csrf_token)
    panel = await _panel(request)
    for name, value in (("title", title), ("description", description), ("startDate", start_date),
                        ("endDate", end_date), ("owner", owner)):
        panel.set_project_field(name, value)
    await panel.submit_project()
    return _back_home()

@console.post("/projects/cancel")
async def project_cancel(request: Request, csrf_token: str = Form(...)):
    validate_csrf(request, csrf_token)
    panel = await _panel(request)
    panel.cancel_project_edit()
    return _back_home()

@console.post("/projects/{pid}/edit")
async def project_edit(request: Request, pid: int, csrf_token: str = Form(...)):
    validate_csrf(request, csrf_token)
    panel = await _panel(request)
    project = panel.find_project(pid)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    panel.edit_project(project)
    return _back_home()

@console.post("/projects/{pid}/delete")
async def project_delete(request: Request, pid: int, csrf_token: str = Form(...)):
    validate_csrf(request, csrf_token)
    panel = await _panel(request)
    await panel.delete_project(pid)
    return _back_home()

# ------------------
# Tasks
# ------------------
@console.post("/tasks/submit")
async def task_submit(
    request: Request,
    csrf_token: str = Form(...),
    title: str = Form(""),
    description: str = Form(""),
    due_date: str = Form("", alias="dueDate"),
    priority: str = Form("LOW"),
    employee_id: str = Form("", alias="employeeId"),
    task_status: str = Form("PENDING", alias="taskStatus"),
    project_id: str = Form("", alias="projectId"),
):
    validate_csrf(request, csrf_token)
    panel = await _panel(request)
    for name, value in (("title", title), ("description", description), ("dueDate", due_date),
                        ("priority", priority), ("employeeId", employee_id),
                        ("taskStatus", task_status), ("projectId", project_id)):
        panel.set_task_field(name, value)
    await panel.submit_task()
    return _back_home()

@console.post("/tasks/cancel")
async def task_cancel(request: Request, csrf_token: str = Form(...)):
    validate_csrf(request, csrf_token)
    panel = await _panel(request)
    panel.cancel_task_edit()
    return _back_home()

@console.post("/tasks/search")
async def task_search(request: Request, csrf_token: str = Form(...), term: str = Form("")):
    validate_csrf(request, csrf_token)
    panel = await _panel(request)
    panel.set_search_term(term)
    await panel.search()
    return _back_home()

@console.post("/tasks/show-all")
async def task_show_all(request: Request, csrf_token: str = Form(...)):
    validate_csrf(request, csrf_token)
    panel = await _panel(request)
    await panel.show_all_tasks()
    return _back_home()

@console.post("/tasks/{tid}/edit")
async def task_edit(request: Request, tid: int, csrf_token: str = Form(...)):
    validate_csrf(request, csrf_token)
    panel = await _panel(request)
    task = panel.find_task(tid)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    panel.edit_task(task)
    return _back_home()

@console.post("/tasks/{tid}/delete")
async def task_delete(request: Request, tid: int, csrf_token: str = Form(...)):
    validate_csrf(request, csrf_token)
    panel = await _panel(request)
    await panel.delete_task(tid)
    return _back_home()

# ------------------
# App
# ------------------
def create_app(*, service: AdminService | None = None, serve_api: bool = True) -> FastAPI:
    """
    Console app. With `serve_api` the data service is mounted under /api in
    the same process; `service` overrides the client built from settings.
    """
    service = service or AdminService.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await service.aclose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.add_middleware(SessionMiddleware, secret_key=settings.secret_key, session_cookie=settings.session_cookie_name)
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    if serve_api:
        Base.metadata.create_all(bind=engine)
        with session_scope() as db:
            added = cu.seed_users(db, settings.seed_users)
        if added:
            logger.info("Seeded %d users", added)
        app.include_router(api.router)

    app.state.panels = PanelRegistry(service, max_panels=settings.max_panels)
    app.include_router(console)

    return app

setup_logging(level=settings.log_level, log_dir=settings.log_dir)
app = create_app()
