"""Service container constructed once per server process."""

from __future__ import annotations

from dataclasses import dataclass

from projectdesk.adapters import SqliteKeyValueStore
from projectdesk.config import Config
from projectdesk.repositories import KeyValueStore, RecordRepository
from projectdesk.services.auth_service import AuthGate, IdentityProvider
from projectdesk.services.project_service import ProjectService
from projectdesk.services.task_service import TaskService


@dataclass
class Services:
    """Everything a request handler needs, wired together explicitly."""

    store: KeyValueStore
    identity: IdentityProvider
    gate: AuthGate
    projects: ProjectService
    tasks: TaskService

    async def close(self) -> None:
        await self.identity.close()
        await self.store.close()


def build_services(
    config: Config,
    *,
    store: KeyValueStore | None = None,
    identity: IdentityProvider | None = None,
) -> Services:
    """Construct the service graph from configuration.

    ``store`` and ``identity`` may be supplied to replace the configured
    SQLite store and identity provider.

    Raises:
        ValueError: If the identity provider is not configured
    """
    if identity is None:
        if not config.identity.url or not config.identity.service_role_key:
            raise ValueError(
                "Missing required configuration: identity.url or identity.service_role_key "
                "(set PROJECTDESK_AUTH_URL and PROJECTDESK_SERVICE_ROLE_KEY)"
            )
        identity = IdentityProvider.from_config(config.identity)
    if store is None:
        store = SqliteKeyValueStore(config.server.db_path)

    repository = RecordRepository(store)
    return Services(
        store=store,
        identity=identity,
        gate=AuthGate(identity, config.identity.anon_key),
        projects=ProjectService(
            repository, seed_sample_projects=config.server.seed_sample_projects
        ),
        tasks=TaskService(repository),
    )
