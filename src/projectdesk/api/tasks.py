"""Tasks API endpoints."""

from typing import Any, Optional

from projectdesk.api.client import APIClient


class TasksAPI:
    """Tasks API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_tasks(self, project_id: Optional[str] = None) -> list[dict]:
        """List tasks, optionally only those of one project."""
        params = {"project_id": project_id} if project_id else None
        return await self.client.get("/tasks", params=params)

    async def create_task(self, project_id: str, title: str, **fields: Any) -> dict:
        """Create a task under a project."""
        data = {"project_id": project_id, "title": title, **fields}
        return await self.client.post("/tasks", json=data)

    async def update_task(self, task_id: str, **updates: Any) -> dict:
        """Update a task with only the given fields."""
        return await self.client.put(f"/tasks/{task_id}", json=updates)

    async def delete_task(self, task_id: str) -> dict:
        """Delete a task."""
        return await self.client.delete(f"/tasks/{task_id}")
