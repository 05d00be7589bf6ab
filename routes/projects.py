from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from models.project import Project, ProjectCreate, ProjectStatusUpdate, ProjectProgressUpdate
from core.auth import get_store, get_generator, check_permission
from core.content_generator import ContentGenerator
from core.permissions import Permission
from core.session import Session
from controllers import project_controller
from database import KeyValueStore

router = APIRouter(prefix="/projects", tags=["projects"])


# ── Projects ──────────────────────────────────────────────

@router.post("", response_model=Project)
async def create_project(project_data: ProjectCreate, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.CREATE_CONTENT))):
    return await project_controller.create_project(store, session, project_data)


@router.get("")
async def get_projects(page: int = Query(1, ge=1), limit: int = Query(10, ge=1, le=100), status: Optional[str] = None, search: Optional[str] = None, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.VIEW_ALL_CLIENTS))):
    return await project_controller.get_projects(store, session, page, limit, status, search)


@router.get("/portfolio", response_model=List[Project])
async def get_portfolio(client_id: Optional[str] = None, generator: ContentGenerator = Depends(get_generator), session: Session = Depends(check_permission(Permission.VIEW_ALL_CLIENTS))):
    return await project_controller.get_client_portfolio(generator, session, client_id)


@router.get("/{project_id}", response_model=Project)
async def get_project(project_id: int, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.VIEW_ALL_CLIENTS))):
    return await project_controller.get_project(store, session, project_id)


@router.put("/{project_id}", response_model=Project)
async def update_project(project_id: int, project_data: ProjectCreate, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.EDIT_CONTENT))):
    return await project_controller.update_project(store, project_id, project_data)


@router.delete("/{project_id}")
async def delete_project(project_id: int, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.DELETE_CONTENT))):
    return await project_controller.delete_project(store, session, project_id)


@router.patch("/{project_id}/status", response_model=Project)
async def update_project_status(project_id: int, data: ProjectStatusUpdate, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.EDIT_CONTENT))):
    return await project_controller.update_project_status(store, project_id, data)


@router.patch("/{project_id}/progress", response_model=Project)
async def update_project_progress(project_id: int, data: ProjectProgressUpdate, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.EDIT_CONTENT))):
    return await project_controller.update_project_progress(store, project_id, data)
