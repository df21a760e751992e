"""Factory for creating and configuring Simulation instances."""

from elevator_sim import config
from elevator_sim.controller.controller import PIDPositionController
from elevator_sim.controller.pid import PIDController
from elevator_sim.models.elevator import Elevator
from elevator_sim.simulation.hardware import SimulatedEncoder, SimulatedMotor
from elevator_sim.simulation.physics import ElevatorPhysics

from .simulation import Simulation, SimulationService


def create_simulation(initial_floor: int = 0, fault_policy: str = None) -> Simulation:
    """Wire an engine, a PID position controller and the simulated plant."""
    initial_height = initial_floor * config.FLOOR_HEIGHT
    encoder = SimulatedEncoder(initial_height)
    motor = SimulatedMotor()
    physics = ElevatorPhysics(
        mass=config.CAR_MASS,
        position=initial_height,
        motor_constant=config.MOTOR_CONSTANT,
    )

    pid = PIDController(config.PID_KP, config.PID_KI, config.PID_KD)
    pid.set_output_limits(-config.VOLTAGE_LIMIT, config.VOLTAGE_LIMIT)
    controller = PIDPositionController(
        encoder,
        motor,
        pid,
        floor_height=config.FLOOR_HEIGHT,
        precision=config.FLOOR_PRECISION,
        voltage_limit=config.VOLTAGE_LIMIT,
    )
    controller.set_target_floor(initial_floor)

    return Simulation(
        elevator=Elevator(initial_floor=initial_floor, dwell_time=config.DWELL_TIME),
        controller=controller,
        motor=motor,
        encoder=encoder,
        physics=physics,
        fault_policy=fault_policy or config.FAULT_POLICY,
    )


def create_simulation_service(initial_floor: int = 0) -> SimulationService:
    return SimulationService(
        create_simulation(initial_floor), tick_interval=config.TICK_INTERVAL
    )
