"""HTTP server for ProjectDesk."""

from .app import create_app
from .services import Services, build_services

__all__ = ["Services", "build_services", "create_app"]
