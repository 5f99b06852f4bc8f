from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from liftit.models.errors import (
    InvalidArgumentError,
    WorkoutNotFoundError,
    WorkoutOwnershipError,
    WorkoutStateError,
)
from liftit.repositories.errors import RepoError
from liftit.utils.log import logger


def _error(status_code: int, detail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def not_found_handler(request: Request, exc: WorkoutNotFoundError):
    return _error(404, str(exc))


async def ownership_handler(request: Request, exc: WorkoutOwnershipError):
    return _error(403, "You do not own this workout")


async def state_handler(request: Request, exc: WorkoutStateError):
    return _error(409, str(exc))


async def invalid_argument_handler(request: Request, exc: Exception):
    logger.warning(f"Invalid argument: {exc}")
    return _error(422, str(exc))


async def repo_error_handler(request: Request, exc: RepoError):
    logger.exception("Repository error")
    return _error(500, "Error talking to the database")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return _error(500, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    # handlers are typed for Exception; the narrower exception types are fine at runtime
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(WorkoutNotFoundError, not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(WorkoutOwnershipError, ownership_handler)  # type: ignore[arg-type]
    app.add_exception_handler(WorkoutStateError, state_handler)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
    app.add_exception_handler(ValidationError, invalid_argument_handler)
    app.add_exception_handler(RepoError, repo_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
