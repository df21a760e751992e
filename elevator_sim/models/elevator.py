"""
Elevator model for the simulator.

The ``Elevator`` aggregate is the dispatch engine: it owns the car's logical
floors, its operating state and the set of pending requests, and turns them
into a sequence of target floors one tick at a time.
"""

import enum
import json
from dataclasses import dataclass
from typing import Dict, List, Optional

import structlog

from elevator_sim.scheduler import selection

from .exceptions import (
    CurrentFloorError,
    DispatchInvariantError,
    DuplicateRequestError,
    NotMovingError,
)
from .request import Direction, Request

DEFAULT_DWELL_TIME = 5.0

logger = structlog.get_logger(__name__)


class ElevatorStatus(str, enum.Enum):
    """Possible states of an elevator."""

    IDLE = "idle"
    MOVING = "moving"
    WAITING = "waiting"


class DoorStatus(str, enum.Enum):
    """Possible states of elevator doors."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class ElevatorState:
    """
    Operating state of the car.

    IDLE carries no direction. MOVING carries the direction of travel.
    WAITING carries the direction the car was heading in, which decides
    where it goes once the dwell is over, plus the door status.
    """

    status: ElevatorStatus
    direction: Optional[Direction] = None
    door_status: DoorStatus = DoorStatus.CLOSED

    def __post_init__(self):
        if self.status == ElevatorStatus.IDLE and self.direction is not None:
            raise ValueError("an idle car has no direction")
        if self.status != ElevatorStatus.IDLE and self.direction is None:
            raise ValueError(f"a {self.status.value} car needs a direction")

    @classmethod
    def idle(cls) -> "ElevatorState":
        return cls(ElevatorStatus.IDLE)

    @classmethod
    def moving(cls, direction: Direction) -> "ElevatorState":
        return cls(ElevatorStatus.MOVING, direction)

    @classmethod
    def waiting(
        cls, direction: Direction, door_status: DoorStatus = DoorStatus.CLOSED
    ) -> "ElevatorState":
        return cls(ElevatorStatus.WAITING, direction, door_status)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "direction": self.direction.value if self.direction else None,
            "door_status": self.door_status.value,
        }


class Elevator:
    """
    Dispatch engine for one car.

    Attributes:
        current_floor: Floor the car last reached
        target_floor: Floor the car is heading for
        state: Current operating state
        waiting_time: Seconds spent in the current dwell
        dwell_time: Seconds the car stays stopped at each served floor
    """

    def __init__(self, initial_floor: int = 0, dwell_time: float = DEFAULT_DWELL_TIME):
        self._current_floor = initial_floor
        self._target_floor = initial_floor
        self._state = ElevatorState.idle()
        # Insertion-ordered set of unserved requests
        self._requests: Dict[Request, None] = {}
        self._waiting_time = 0.0
        # Set on entering WAITING, cleared once the arrival has been served
        self._just_arrived = False
        self.dwell_time = dwell_time

    @property
    def current_floor(self) -> int:
        return self._current_floor

    @property
    def target_floor(self) -> int:
        return self._target_floor

    @property
    def state(self) -> ElevatorState:
        return self._state

    @property
    def waiting_time(self) -> float:
        return self._waiting_time

    def pending_requests(self) -> List[Request]:
        """Pending requests in the order they were accepted."""
        return list(self._requests)

    def hall_call(self, direction: Direction, floor: int) -> bool:
        """
        Register a call made from a landing.

        Args:
            direction: Direction the passenger wants to travel in
            floor: Floor the call was made from

        Returns:
            True once the request is pending

        Raises:
            DuplicateRequestError: The same request is already pending
        """
        return self._add_request(Request(floor=floor, direction=direction))

    def car_call(self, floor: int) -> bool:
        """
        Register a destination chosen from inside the car.

        Args:
            floor: Destination floor

        Returns:
            True once the request is pending

        Raises:
            CurrentFloorError: The car is already at ``floor``
            DuplicateRequestError: The same request is already pending
        """
        if floor == self._current_floor:
            logger.info("car_call_rejected", floor=floor, reason="current_floor")
            raise CurrentFloorError(floor)
        direction = Direction.UP if floor > self._current_floor else Direction.DOWN
        return self._add_request(Request(floor=floor, direction=direction))

    def _add_request(self, request: Request) -> bool:
        if request in self._requests:
            logger.info(
                "request_rejected",
                floor=request.floor,
                direction=request.direction.value,
                reason="duplicate",
            )
            raise DuplicateRequestError(request.floor, request)
        self._requests[request] = None
        logger.debug(
            "request_accepted", floor=request.floor, direction=request.direction.value
        )
        return True

    def notify_reached_floor(self, floor: int) -> None:
        """
        Report that the car is at ``floor``.

        Stops the car for its dwell when ``floor`` is the target floor.

        Raises:
            NotMovingError: The car is idle or waiting
        """
        if self._state.status != ElevatorStatus.MOVING:
            raise NotMovingError(
                f"floor {floor} reported while {self._state.status.value}"
            )
        self._current_floor = floor
        if self._current_floor == self._target_floor:
            self._transition(ElevatorState.waiting(self._state.direction))

    def advance(self, dt: float) -> None:
        """
        Run one tick of the dispatch state machine.

        Apply any floor arrival with ``notify_reached_floor`` before calling
        this, and read ``target_floor`` after it returns.

        Args:
            dt: Seconds elapsed since the previous tick

        Raises:
            ValueError: ``dt`` is negative
            DispatchInvariantError: The car is moving with no request to serve
        """
        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")

        status = self._state.status
        if status == ElevatorStatus.IDLE:
            self._advance_idle()
        elif status == ElevatorStatus.WAITING:
            self._advance_waiting(dt)
        elif status == ElevatorStatus.MOVING:
            self._advance_moving()
        else:
            raise DispatchInvariantError(f"unhandled elevator status {status!r}")

    def force_idle(self) -> None:
        """
        Drop the car to IDLE, keeping its pending requests.

        Recovery hook for hosts that choose to survive a
        ``DispatchInvariantError`` instead of crashing.
        """
        logger.error(
            "forced_idle",
            current_floor=self._current_floor,
            target_floor=self._target_floor,
            previous_status=self._state.status.value,
            pending=len(self._requests),
        )
        self._waiting_time = 0.0
        self._target_floor = self._current_floor
        self._transition(ElevatorState.idle())

    def _advance_idle(self) -> None:
        request = selection.next_on_idle(self._requests)
        if request is None:
            return

        self._target_floor = request.floor
        if request.floor == self._current_floor:
            del self._requests[request]
            self._transition(ElevatorState.waiting(request.direction))
            return
        self._transition(ElevatorState.moving(request.toward(self._current_floor)))

    def _advance_waiting(self, dt: float) -> None:
        direction = self._state.direction
        if self._just_arrived:
            self._just_arrived = False
            self._remove_served_request(direction)

        self._waiting_time += dt
        if self._waiting_time < self.dwell_time:
            return

        self._waiting_time = 0.0
        request = selection.next_after_waiting(
            self._requests, direction, self._current_floor, self._target_floor
        )
        if request is None:
            self._transition(ElevatorState.idle())
            return
        self._target_floor = request.floor
        self._transition(ElevatorState.moving(request.toward(self._current_floor)))

    def _advance_moving(self) -> None:
        direction = self._state.direction
        request = selection.next_while_moving(
            self._requests, direction, self._current_floor, self._target_floor
        )
        if request is None:
            logger.error(
                "moving_without_request",
                current_floor=self._current_floor,
                target_floor=self._target_floor,
                direction=direction.value,
            )
            raise DispatchInvariantError(
                f"moving {direction.value} from floor {self._current_floor} "
                f"to {self._target_floor} with no pending request"
            )
        if request.floor != self._target_floor:
            logger.debug(
                "target_updated",
                previous=self._target_floor,
                target_floor=request.floor,
            )
        self._target_floor = request.floor

    def _remove_served_request(self, direction: Direction) -> None:
        # Serve the call that brought the car here, hall or car call alike
        for candidate in (
            Request(self._current_floor, direction),
            Request(self._current_floor, direction.opposite()),
        ):
            if candidate in self._requests:
                del self._requests[candidate]
                logger.debug(
                    "request_served",
                    floor=candidate.floor,
                    direction=candidate.direction.value,
                )
                return

    def _transition(self, state: ElevatorState) -> None:
        logger.debug(
            "state_changed",
            previous=self._state.status.value,
            status=state.status.value,
            direction=state.direction.value if state.direction else None,
            current_floor=self._current_floor,
            target_floor=self._target_floor,
        )
        self._state = state
        self._just_arrived = state.status == ElevatorStatus.WAITING

    def to_dict(self) -> dict:
        """
        Convert elevator state to a dictionary.

        Returns:
            Dictionary representation of elevator state
        """
        data = {
            "current_floor": self._current_floor,
            "target_floor": self._target_floor,
            "waiting_time": self._waiting_time,
            "requests": [request.to_dict() for request in self._requests],
        }
        data.update(self._state.to_dict())
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
