"""
FastAPI application for the toy robot.

All routes live under /api/robot and answer with the JSON envelope
{success, data?, message?, error?}. Rejected commands still answer 200 with
success=false and the last known state; infrastructure failures answer 500.
"""

from typing import Any, Callable, Optional

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..engine import RobotCommandService
from ..errors import InfrastructureError, NotPlaced, RobotDomainError
from ..state.models import RobotState
from ..utils.time import format_timestamp
from .schemas import (
    PlaceRobotRequest,
    error_response,
    parse_coordinate,
    success_response,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/robot")


def _service(request: Request) -> RobotCommandService:
    return request.app.state.service


def _run_command(
    service: RobotCommandService,
    command: Callable[[], RobotState],
    success_message: str,
    failure_label: str,
) -> dict[str, Any]:
    """Execute a mutating command and wrap the outcome in an envelope."""
    try:
        state = command()
    except RobotDomainError as e:
        logger.warning(failure_label, error=e.message)
        # A failing read here is an infrastructure error and propagates as 500
        current = service.current_state()
        return error_response(e.message, data=current.to_dict())

    return success_response(state.to_dict(), success_message)


@router.get("/current")
def get_current_state(request: Request):
    logger.info("Getting current robot state")
    state = _service(request).current_state()
    return success_response(state.to_dict(), "Current robot state retrieved successfully")


@router.post("/place")
def place_robot(body: PlaceRobotRequest, request: Request):
    logger.info("Placing robot", x=body.x, y=body.y, direction=body.direction)
    service = _service(request)
    return _run_command(
        service,
        lambda: service.place(body.x, body.y, body.direction),
        f"Robot placed at ({body.x}, {body.y}) facing {body.direction.strip().upper()}",
        "Failed to place robot",
    )


@router.post("/move")
def move_robot(request: Request):
    logger.info("Moving robot forward")
    service = _service(request)
    return _run_command(service, service.move, "Robot moved successfully", "Failed to move robot")


@router.post("/turn-left")
def turn_left(request: Request):
    logger.info("Turning robot left")
    service = _service(request)
    return _run_command(
        service, service.turn_left, "Robot turned left successfully", "Failed to turn robot left"
    )


@router.post("/turn-right")
def turn_right(request: Request):
    logger.info("Turning robot right")
    service = _service(request)
    return _run_command(
        service, service.turn_right, "Robot turned right successfully", "Failed to turn robot right"
    )


@router.get("/report")
def get_report(request: Request):
    logger.info("Getting robot report")
    try:
        report = _service(request).report()
    except NotPlaced as e:
        return error_response(e.message)
    return success_response(report, "Robot report generated successfully")


@router.get("/history")
def get_history(request: Request):
    logger.info("Getting robot history")
    entries = _service(request).history()
    return success_response(
        [entry.to_dict() for entry in entries],
        "Robot history retrieved successfully",
    )


@router.get("/validate")
def validate_command(
    request: Request,
    command: str = "",
    x: Optional[str] = None,
    y: Optional[str] = None,
):
    logger.info("Validating command", command=command, x=x, y=y)
    is_valid = _service(request).validate_command(
        command, parse_coordinate(x), parse_coordinate(y)
    )
    return success_response(
        is_valid,
        f"Command '{command}' is {'valid' if is_valid else 'invalid'}",
    )


@router.get("/health")
def health_check():
    health = {"status": "healthy", "timestamp": format_timestamp()}
    return success_response(health, "Robot service is healthy")


async def _infrastructure_error_handler(request: Request, exc: InfrastructureError) -> JSONResponse:
    logger.error("Infrastructure failure", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content=error_response(str(exc)))


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.warning("Malformed request", path=request.url.path, errors=details)
    return JSONResponse(status_code=422, content=error_response(f"Invalid request: {details}"))


def create_app(
    service: RobotCommandService,
    cors_origins: Optional[tuple[str, ...]] = None,
) -> FastAPI:
    """
    Build the API application around an owned command service.

    Args:
        service: Command service wired to its store at startup
        cors_origins: Origins allowed to call the API from a browser
    """
    app = FastAPI(title="Toy Robot API")
    app.state.service = service

    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    app.add_exception_handler(InfrastructureError, _infrastructure_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(router)

    return app
