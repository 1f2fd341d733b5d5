"""Task routes."""

from __future__ import annotations

from fastapi import APIRouter, Request

from projectdesk.models import Task, TaskCreate, TaskUpdate
from projectdesk.server.dependencies import CurrentUser, ServicesDep, read_payload

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[Task])
async def list_tasks(user: CurrentUser, services: ServicesDep, project_id: str | None = None):
    return await services.tasks.list_tasks(user.id, project_id)


@router.post("", response_model=Task)
async def create_task(request: Request, user: CurrentUser, services: ServicesDep):
    payload = await read_payload(request, TaskCreate)
    return await services.tasks.create_task(user.id, payload)


@router.put("/{task_id}", response_model=Task)
async def update_task(task_id: str, request: Request, user: CurrentUser, services: ServicesDep):
    payload = await read_payload(request, TaskUpdate)
    return await services.tasks.update_task(user.id, task_id, payload)


@router.delete("/{task_id}")
async def delete_task(task_id: str, user: CurrentUser, services: ServicesDep):
    await services.tasks.delete_task(user.id, task_id)
    return {"success": True}
