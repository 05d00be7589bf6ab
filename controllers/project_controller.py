from fastapi import HTTPException
from typing import Optional, List
import logging

from config import PROJECTS_KEY
from controllers.dashboard_controller import load_projects
from core.content_generator import ContentGenerator, client_id_for
from core.session import Session
from database import KeyValueStore, save_value
from models.project import Project, ProjectCreate, ProjectStatusUpdate, ProjectProgressUpdate

logger = logging.getLogger(__name__)


def _find(projects: List[dict], project_id: int) -> dict:
    for project in projects:
        if project.get("id") == project_id:
            return project
    raise HTTPException(status_code=404, detail="Project not found")


async def _save(store: KeyValueStore, projects: List[dict]) -> None:
    if not await save_value(store, PROJECTS_KEY, projects):
        raise HTTPException(status_code=503, detail="Could not save projects, please try again")


async def get_projects(store: KeyValueStore, session: Session, page: int = 1, limit: int = 10,
                       status: Optional[str] = None, search: Optional[str] = None) -> dict:
    projects = session.visible(await load_projects(store))
    if status and status != "all":
        projects = [p for p in projects if p.get("status") == status]
    if search:
        needle = search.lower()
        projects = [p for p in projects if needle in p.get("name", "").lower() or needle in p.get("client", "").lower()]
    total = len(projects)
    skip = (page - 1) * limit
    data = [Project(**p) for p in projects[skip:skip + limit]]
    pages = max(1, (total + limit - 1) // limit)
    return {"data": data, "total": total, "page": page, "pages": pages, "limit": limit}


async def get_project(store: KeyValueStore, session: Session, project_id: int) -> Project:
    project = _find(session.visible(await load_projects(store)), project_id)
    return Project(**project)


async def create_project(store: KeyValueStore, session: Session, project_data: ProjectCreate) -> Project:
    projects = await load_projects(store)
    next_id = max((p.get("id", 0) for p in projects), default=0) + 1
    project = Project(
        **project_data.model_dump(),
        id=next_id,
        client_id=client_id_for(project_data.client),
        created_by=session.user.name,
        created_by_id=session.user.id,
    )
    projects.append(project.model_dump(mode="json"))
    await _save(store, projects)
    logger.info("Project %d '%s' created by %s", project.id, project.name, session.user.email)
    return project


async def update_project(store: KeyValueStore, project_id: int, project_data: ProjectCreate) -> Project:
    projects = await load_projects(store)
    existing = _find(projects, project_id)
    existing.update(project_data.model_dump(mode="json"))
    existing["client_id"] = client_id_for(project_data.client)
    await _save(store, projects)
    return Project(**existing)


async def delete_project(store: KeyValueStore, session: Session, project_id: int) -> dict:
    projects = await load_projects(store)
    _find(projects, project_id)
    await _save(store, [p for p in projects if p.get("id") != project_id])
    logger.info("Project %d deleted by %s", project_id, session.user.email)
    return {"message": "Project deleted"}


async def update_project_status(store: KeyValueStore, project_id: int, data: ProjectStatusUpdate) -> Project:
    projects = await load_projects(store)
    existing = _find(projects, project_id)
    existing["status"] = data.status
    if data.status == "completed":
        existing["progress"] = 100
    await _save(store, projects)
    return Project(**existing)


async def update_project_progress(store: KeyValueStore, project_id: int, data: ProjectProgressUpdate) -> Project:
    projects = await load_projects(store)
    existing = _find(projects, project_id)
    existing["progress"] = data.progress
    await _save(store, projects)
    return Project(**existing)


async def get_client_portfolio(generator: ContentGenerator, session: Session, client_id: Optional[str] = None) -> List[Project]:
    """Generated project portfolio, optionally narrowed to one client."""
    projects = session.visible(generator.generate_projects())
    if client_id:
        projects = [p for p in projects if p.client_id == client_id]
    return projects
