"""Projects API endpoints."""

from typing import Any

from projectdesk.api.client import APIClient


class ProjectsAPI:
    """Projects API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_projects(self) -> list[dict]:
        """List the caller's projects."""
        return await self.client.get("/projects")

    async def create_project(self, name: str, **fields: Any) -> dict:
        """Create a new project."""
        return await self.client.post("/projects", json={"name": name, **fields})

    async def update_project(self, project_id: str, **updates: Any) -> dict:
        """Update a project with only the given fields."""
        return await self.client.put(f"/projects/{project_id}", json=updates)

    async def delete_project(self, project_id: str) -> dict:
        """Delete a project and its tasks."""
        return await self.client.delete(f"/projects/{project_id}")
