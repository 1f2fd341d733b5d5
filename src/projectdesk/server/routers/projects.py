"""Project routes."""

from __future__ import annotations

from fastapi import APIRouter, Request

from projectdesk.models import Project, ProjectCreate, ProjectUpdate
from projectdesk.server.dependencies import CurrentUser, ServicesDep, read_payload

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=list[Project])
async def list_projects(user: CurrentUser, services: ServicesDep):
    return await services.projects.list_projects(user.id)


@router.post("", response_model=Project)
async def create_project(request: Request, user: CurrentUser, services: ServicesDep):
    payload = await read_payload(request, ProjectCreate)
    return await services.projects.create_project(user.id, payload)


@router.put("/{project_id}", response_model=Project)
async def update_project(
    project_id: str, request: Request, user: CurrentUser, services: ServicesDep
):
    payload = await read_payload(request, ProjectUpdate)
    return await services.projects.update_project(user.id, project_id, payload)


@router.delete("/{project_id}")
async def delete_project(project_id: str, user: CurrentUser, services: ServicesDep):
    await services.projects.delete_project(user.id, project_id)
    return {"success": True}
