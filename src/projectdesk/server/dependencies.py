"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from typing import Annotated, TypeVar

from fastapi import Depends, Header, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel

from projectdesk.exceptions import UnauthenticatedError
from projectdesk.models import User
from projectdesk.server.services import Services
from projectdesk.utils.logger import get_logger

logger = get_logger()

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def get_services(request: Request) -> Services:
    return request.app.state.services


ServicesDep = Annotated[Services, Depends(get_services)]


async def get_current_user(
    request: Request,
    services: ServicesDep,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Authenticate the caller before any handler touches the repository."""
    user = await services.gate.authenticate(authorization)
    if user is None:
        logger.info("unauthorized %s %s", request.method, request.url.path)
        raise UnauthenticatedError()
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def read_payload(request: Request, model: type[PayloadT]) -> PayloadT:
    """Decode and validate the JSON body as *model*.

    Protected routes call this from the handler, after ``CurrentUser`` has
    resolved, so an unauthenticated request is rejected with 401 whatever
    its body contains. FastAPI would otherwise decode a declared body
    parameter before running any dependency.

    Raises:
        RequestValidationError: If the body is not valid JSON
        pydantic.ValidationError: If the JSON does not match *model*
    """
    try:
        data = await request.json()
    except ValueError as e:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": None}]
        ) from e
    return model.model_validate(data)
