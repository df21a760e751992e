"""
Status display

Builds a read-only snapshot of the engine, the controller and the plant once
per tick and emits it as a structured log event. Nothing here mutates the
objects it reads.
"""

from dataclasses import asdict, dataclass
from typing import List, Optional

import structlog

from elevator_sim.controller.controller import PIDPositionController
from elevator_sim.models.elevator import Elevator, ElevatorState
from elevator_sim.models.request import Request
from elevator_sim.simulation.hardware import SimulatedMotor
from elevator_sim.simulation.physics import ElevatorPhysics

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DisplayData:
    logic_current_floor: int
    logic_target_floor: int
    elevator_state: str
    requests: List[str]
    waiting_time: float

    controller_estimated_floor: Optional[int]
    current_height: float
    target_height: float

    position: float
    velocity: float
    motor_voltage: float

    def to_dict(self) -> dict:
        return asdict(self)


def format_request(request: Request) -> str:
    return f"Floor: {request.floor}, Dir: {request.direction.name}"


def format_state(state: ElevatorState) -> str:
    if state.direction is None:
        return state.status.name
    return f"{state.status.name} {state.direction.name}"


def build_display_data(
    elevator: Elevator,
    controller: PIDPositionController,
    physics: ElevatorPhysics,
    motor: SimulatedMotor,
) -> DisplayData:
    """Collect one tick worth of display values from the accessor surface."""
    return DisplayData(
        logic_current_floor=elevator.current_floor,
        logic_target_floor=elevator.target_floor,
        elevator_state=format_state(elevator.state),
        requests=[format_request(r) for r in elevator.pending_requests()],
        waiting_time=round(elevator.waiting_time, 2),
        controller_estimated_floor=controller.current_floor(),
        current_height=round(controller.current_height, 2),
        target_height=round(controller.target_height, 2),
        position=round(physics.get_position(), 2),
        velocity=round(physics.get_velocity(), 2),
        motor_voltage=round(motor.get_voltage(), 2),
    )


def log_display_data(data: DisplayData, level: str = "info") -> None:
    getattr(logger, level)("elevator_status", **data.to_dict())
