"""Liveness, authentication debug and signup routes."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from projectdesk.models import SignupRequest
from projectdesk.server.dependencies import ServicesDep
from projectdesk.utils.logger import get_logger

logger = get_logger()

router = APIRouter()


@router.get("/")
async def read_root():
    return {"message": "Project Management API Server", "status": "running"}


@router.get("/test-auth")
async def test_auth(request: Request, services: ServicesDep):
    """Echo the authenticated user, or the received headers on failure."""
    user = await services.gate.authenticate(request.headers.get("authorization"))
    if user is None:
        return JSONResponse(
            status_code=401,
            content={"message": "Not authenticated", "headers": dict(request.headers)},
        )
    return {
        "message": "Authentication successful",
        "user": {"id": user.id, "email": user.email},
    }


@router.post("/signup")
async def signup(payload: SignupRequest, services: ServicesDep):
    """Create an account with a pre-confirmed email address."""
    user = await services.identity.create_user(payload.email, payload.password, payload.name)
    logger.info("signed up user %s", user.get("id"))
    return {"user": user}
