"""
Simulation Service

Closes the loop between the dispatch engine, the position controller and the
simulated plant, and serialises every access to the engine behind a single
lock so hall and car calls from concurrent callers never interleave with a
tick.
"""

import asyncio
from typing import Optional

import structlog

from elevator_sim.controller.controller import PositionController
from elevator_sim.models.elevator import Elevator, ElevatorStatus
from elevator_sim.models.exceptions import DispatchInvariantError, SimulationStoppedError
from elevator_sim.models.request import Direction, Request
from elevator_sim.simulation.hardware import Encoder, SimulatedMotor
from elevator_sim.simulation.physics import ElevatorPhysics

from .display import DisplayData, build_display_data, log_display_data

FAULT_POLICIES = ("raise", "force_idle")

logger = structlog.get_logger(__name__)


class Simulation:
    """
    One car with its controller and plant.

    Attributes:
        elevator: Dispatch engine
        controller: Position controller following the engine's target floor
        motor: Motor the controller drives
        encoder: Encoder the plant writes its position into
        physics: Plant model
        fault_policy: What to do when the engine reports an invariant fault
        elapsed: Simulated seconds since start
    """

    def __init__(
        self,
        elevator: Elevator,
        controller: PositionController,
        motor: SimulatedMotor,
        encoder: Encoder,
        physics: ElevatorPhysics,
        fault_policy: str = "raise",
    ):
        if fault_policy not in FAULT_POLICIES:
            raise ValueError(
                f"fault_policy must be one of {FAULT_POLICIES}, got {fault_policy!r}"
            )
        self.elevator = elevator
        self.controller = controller
        self.motor = motor
        self.encoder = encoder
        self.physics = physics
        self.fault_policy = fault_policy
        self.elapsed = 0.0

    def step(self, dt: float) -> None:
        """
        Run one tick.

        The floor arrival is applied before the engine advances, and the
        controller reads the target only after the engine has advanced.
        """
        reached = self.controller.current_floor()
        if reached is not None and self.elevator.state.status == ElevatorStatus.MOVING:
            self.elevator.notify_reached_floor(reached)

        try:
            self.elevator.advance(dt)
        except DispatchInvariantError:
            if self.fault_policy != "force_idle":
                raise
            logger.error("dispatch_fault_recovered", elapsed=self.elapsed, exc_info=True)
            self.elevator.force_idle()

        self.controller.set_target_floor(self.elevator.target_floor)
        self.controller.tick(dt)

        self.physics.set_voltage(self.motor.get_voltage())
        self.physics.update(dt)
        self.encoder.set_position(self.physics.get_position())
        self.elapsed += dt

    def is_idle(self) -> bool:
        """True when the car is idle with no work left."""
        return (
            self.elevator.state.status == ElevatorStatus.IDLE
            and not self.elevator.pending_requests()
        )

    def display_data(self) -> DisplayData:
        return build_display_data(self.elevator, self.controller, self.physics, self.motor)


class SimulationService:
    """
    Runs a Simulation in the background.

    The service is the single writer of the engine: ticks and incoming calls
    take the same lock, so each call lands between two ticks.
    """

    def __init__(self, simulation: Simulation, tick_interval: float = 0.05):
        self.simulation = simulation
        self.tick_interval = tick_interval
        self._lock = asyncio.Lock()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the tick loop in a background task."""
        if self._task is None:
            self._task = asyncio.create_task(self._run())
            logger.info("simulation_started", tick_interval=self.tick_interval)

    async def stop(self) -> None:
        """Stop the tick loop, collecting the error that ended it if it died."""
        if self._task is None:
            return
        task = self._task
        if not task.done():
            task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.error("simulation_loop_died", exc_info=True)
        finally:
            self._task = None
        logger.info("simulation_stopped", elapsed=self.simulation.elapsed)

    def _ensure_alive(self) -> None:
        # A loop that has started and finished on its own has hit a fault
        if self._task is not None and self._task.done():
            raise SimulationStoppedError("the tick loop is no longer running")

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        previous = loop.time()
        while True:
            await asyncio.sleep(self.tick_interval)
            now = loop.time()
            dt, previous = now - previous, now
            async with self._lock:
                try:
                    self.simulation.step(dt)
                except DispatchInvariantError as e:
                    logger.error("simulation_failed", error=str(e), exc_info=True)
                    raise
                log_display_data(self.simulation.display_data(), level="debug")

    async def tick(self, dt: float) -> None:
        """Run a single tick under the lock, for callers driving time themselves."""
        async with self._lock:
            self._ensure_alive()
            self.simulation.step(dt)

    async def hall_call(self, direction: Direction, floor: int) -> Request:
        async with self._lock:
            self._ensure_alive()
            self.simulation.elevator.hall_call(direction, floor)
        logger.info("hall_call_accepted", floor=floor, direction=direction.value)
        return Request(floor=floor, direction=direction)

    async def car_call(self, floor: int) -> Request:
        async with self._lock:
            self._ensure_alive()
            elevator = self.simulation.elevator
            elevator.car_call(floor)
            # The accepted request is the most recent one in the set
            request = elevator.pending_requests()[-1]
        logger.info("car_call_accepted", floor=floor, direction=request.direction.value)
        return request

    async def snapshot(self) -> dict:
        async with self._lock:
            return self.simulation.elevator.to_dict()

    async def pending_requests(self) -> list:
        async with self._lock:
            return self.simulation.elevator.pending_requests()
