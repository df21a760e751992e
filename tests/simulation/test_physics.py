import pytest

from elevator_sim.simulation.hardware import SimulatedEncoder, SimulatedMotor
from elevator_sim.simulation.physics import ElevatorPhysics


def test_physics_integrates_motor_force():
    physics = ElevatorPhysics(mass=100.0, motor_constant=10.0)
    physics.set_voltage(10.0)

    physics.update(1.0)

    assert physics.get_acceleration() == 1.0
    assert physics.get_velocity() == 1.0
    assert physics.get_position() == 1.0

    physics.update(1.0)
    assert physics.get_velocity() == 2.0
    assert physics.get_position() == 3.0


def test_physics_keeps_velocity_without_voltage():
    physics = ElevatorPhysics(mass=100.0, position=5.0)
    physics.set_voltage(20.0)
    physics.update(0.5)
    physics.set_voltage(0.0)

    physics.update(1.0)

    assert physics.get_acceleration() == 0.0
    assert physics.get_velocity() == 1.0
    assert physics.get_position() == 6.5


def test_physics_ignores_non_positive_dt():
    physics = ElevatorPhysics(mass=100.0, voltage=12.0)

    physics.update(0.0)
    physics.update(-1.0)

    assert physics.get_position() == 0.0
    assert physics.get_velocity() == 0.0


def test_physics_requires_positive_mass():
    with pytest.raises(ValueError):
        ElevatorPhysics(mass=0.0)


def test_simulated_hardware():
    encoder = SimulatedEncoder(2.5)
    motor = SimulatedMotor()

    assert encoder.get_position() == 2.5
    encoder.set_position(7.0)
    assert encoder.get_position() == 7.0

    assert motor.get_voltage() == 0.0
    motor.set_voltage(-3.0)
    assert motor.get_voltage() == -3.0
