import argparse

import pytest

from elevator_sim.main import parse_hall_call, run, seed_calls
from elevator_sim.models.request import Direction


def test_parse_hall_call():
    assert parse_hall_call("up:3") == (Direction.UP, 3)
    assert parse_hall_call("DOWN:-1") == (Direction.DOWN, -1)

    for value in ("up", "left:3", "down:x"):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_hall_call(value)


def test_seed_calls_skips_rejected_calls(make_simulation):
    simulation = make_simulation(initial_floor=2)

    accepted = seed_calls(
        simulation,
        hall_calls=[(Direction.DOWN, 8), (Direction.DOWN, 8)],
        car_calls=[5, 2],
    )

    assert accepted == 2
    assert len(simulation.elevator.pending_requests()) == 2


def test_run_stops_once_all_requests_are_served(make_simulation):
    simulation = make_simulation()
    seed_calls(simulation, hall_calls=[(Direction.DOWN, 2)], car_calls=[4])

    elapsed = run(simulation, duration=100.0, dt=1.0)

    assert simulation.is_idle()
    assert elapsed < 100.0


def test_run_stops_at_duration(make_simulation):
    simulation = make_simulation()
    seed_calls(simulation, hall_calls=[], car_calls=[10])

    elapsed = run(simulation, duration=3.0, dt=1.0)

    assert elapsed == 3.0
    assert not simulation.is_idle()
