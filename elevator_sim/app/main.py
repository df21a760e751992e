# elevator_sim/app/main.py
from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from elevator_sim.config import MAX_FLOOR, MIN_FLOOR, configure_logging
from elevator_sim.models.exceptions import (
    CurrentFloorError,
    DuplicateRequestError,
    RequestRejectedError,
    SimulationStoppedError,
)
from elevator_sim.models.request import Direction
from elevator_sim.services.factory import create_simulation_service
from elevator_sim.services.simulation import SimulationService

logger = structlog.get_logger(__name__)


# --- Startup and shutdown events ---
@asynccontextmanager
async def lifespan(app: FastAPI):  # pylint: disable=redefined-outer-name
    """Start the simulation before the application starts receiving requests"""
    configure_logging()
    logger.info("application_starting")

    service = create_simulation_service()
    app.state.service = service
    await service.start()
    try:
        yield
    finally:
        await service.stop()
        logger.info("application_stopped")


app = FastAPI(title="Elevator Simulation", lifespan=lifespan)


def get_service(request: Request) -> SimulationService:
    return request.app.state.service


class ExternalRequestModel(BaseModel):
    """Model for hall calls (landing buttons)."""

    floor: int = Field(
        ...,
        ge=MIN_FLOOR,
        le=MAX_FLOOR,
        description="Floor number where the button was pressed",
    )
    direction: Direction = Field(..., description="Direction (up or down)")

    model_config = ConfigDict(
        json_schema_extra={"example": {"floor": 3, "direction": "up"}}
    )


class InternalRequestModel(BaseModel):
    """Model for car calls (destination buttons inside the car)."""

    destination_floor: int = Field(
        ..., ge=MIN_FLOOR, le=MAX_FLOOR, description="Target floor"
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"destination_floor": 5}}
    )


def _rejected(error: RequestRejectedError) -> HTTPException:
    if isinstance(error, DuplicateRequestError):
        status_code = 409
    elif isinstance(error, CurrentFloorError):
        status_code = 422
    else:
        status_code = 403
    return HTTPException(
        status_code=status_code,
        detail={"reason": error.reason.value, "floor": error.floor},
    )


def _unavailable(error: SimulationStoppedError) -> HTTPException:
    return HTTPException(
        status_code=503, detail={"reason": "stopped", "message": str(error)}
    )


@app.post("/api/requests/external", status_code=202)
async def create_external_request(
    req: ExternalRequestModel, service: SimulationService = Depends(get_service)
):
    try:
        request = await service.hall_call(req.direction, req.floor)
    except RequestRejectedError as e:
        raise _rejected(e) from e
    except SimulationStoppedError as e:
        raise _unavailable(e) from e
    return {"status": "accepted", "request": request.to_dict()}


@app.post("/api/requests/internal", status_code=202)
async def create_internal_request(
    req: InternalRequestModel, service: SimulationService = Depends(get_service)
):
    try:
        request = await service.car_call(req.destination_floor)
    except RequestRejectedError as e:
        raise _rejected(e) from e
    except SimulationStoppedError as e:
        raise _unavailable(e) from e
    return {"status": "accepted", "request": request.to_dict()}


@app.get("/api/elevator", status_code=200)
async def get_elevator(service: SimulationService = Depends(get_service)):
    """Get current status of the car."""
    return {"elevator": await service.snapshot()}


@app.get("/api/requests", status_code=200)
async def get_requests(service: SimulationService = Depends(get_service)):
    """List pending requests in the order they were accepted."""
    requests = await service.pending_requests()
    return {"requests": [request.to_dict() for request in requests]}
