from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from elevator_sim.app.main import app, get_service
from elevator_sim.controller.controller import PositionController
from elevator_sim.models.elevator import Elevator
from elevator_sim.services.simulation import Simulation, SimulationService
from elevator_sim.simulation.hardware import SimulatedEncoder, SimulatedMotor
from elevator_sim.simulation.physics import ElevatorPhysics


class StepController(PositionController):
    """Moves the car exactly one floor per tick and always knows its floor."""

    def __init__(self, floor: int = 0):
        self.floor = floor
        self.target_floor = floor

    def set_target_floor(self, floor: int) -> None:
        self.target_floor = floor

    def tick(self, dt: float) -> None:
        if self.target_floor > self.floor:
            self.floor += 1
        elif self.target_floor < self.floor:
            self.floor -= 1

    def current_floor(self) -> Optional[int]:
        return self.floor

    def has_reached_target(self) -> bool:
        return self.floor == self.target_floor

    # read by the display snapshot
    @property
    def current_height(self) -> float:
        return float(self.floor)

    @property
    def target_height(self) -> float:
        return float(self.target_floor)


@pytest.fixture
def make_simulation():
    """Build a Simulation driven by StepController instead of the PID loop."""

    def _make(initial_floor: int = 0, fault_policy: str = "raise") -> Simulation:
        return Simulation(
            elevator=Elevator(initial_floor=initial_floor),
            controller=StepController(initial_floor),
            motor=SimulatedMotor(),
            encoder=SimulatedEncoder(),
            physics=ElevatorPhysics(mass=100.0),
            fault_policy=fault_policy,
        )

    return _make


@pytest.fixture
def service(make_simulation):
    """A SimulationService whose tick loop is not started."""
    return SimulationService(make_simulation(), tick_interval=0.01)


@pytest_asyncio.fixture
async def async_client(service):
    """Create an async client for testing, wired to the ``service`` fixture."""
    original_overrides = app.dependency_overrides.copy()
    app.dependency_overrides[get_service] = lambda: service
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides = original_overrides
