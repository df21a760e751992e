#!/usr/bin/env python3
"""
Headless simulation runner

Seeds the car with hall and car calls, then runs the closed loop in
simulated time and logs one status event per tick.

    python -m elevator_sim.main --car-call 5 --car-call 12 --hall-call down:8
"""

import argparse
from typing import List, Optional, Tuple

import structlog

from elevator_sim.config import configure_logging
from elevator_sim.models.exceptions import RequestRejectedError
from elevator_sim.models.request import Direction
from elevator_sim.services.display import log_display_data
from elevator_sim.services.factory import create_simulation
from elevator_sim.services.simulation import Simulation

logger = structlog.get_logger(__name__)


def parse_hall_call(value: str) -> Tuple[Direction, int]:
    """Parse ``up:3`` / ``down:8`` into a direction and a floor."""
    try:
        direction, floor = value.split(":", 1)
        return Direction(direction.strip().lower()), int(floor)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"expected DIRECTION:FLOOR such as up:3, got {value!r}"
        ) from e


def seed_calls(
    simulation: Simulation,
    hall_calls: List[Tuple[Direction, int]],
    car_calls: List[int],
) -> int:
    """Register calls with the engine; returns how many were accepted."""
    accepted = 0
    for direction, floor in hall_calls:
        try:
            simulation.elevator.hall_call(direction, floor)
            accepted += 1
        except RequestRejectedError as e:
            logger.warning("hall_call_rejected", floor=floor, reason=e.reason.value)
    for floor in car_calls:
        try:
            simulation.elevator.car_call(floor)
            accepted += 1
        except RequestRejectedError as e:
            logger.warning("car_call_rejected", floor=floor, reason=e.reason.value)
    return accepted


def run(simulation: Simulation, duration: float, dt: float) -> float:
    """
    Step the simulation until it runs out of work or time.

    Returns:
        Simulated seconds elapsed
    """
    while simulation.elapsed < duration:
        simulation.step(dt)
        log_display_data(simulation.display_data())
        if simulation.is_idle():
            logger.info("all_requests_served", elapsed=round(simulation.elapsed, 2))
            break
    else:
        logger.warning(
            "duration_elapsed",
            pending=len(simulation.elevator.pending_requests()),
        )
    return simulation.elapsed


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--hall-call",
        action="append",
        default=[],
        type=parse_hall_call,
        metavar="DIR:FLOOR",
        help="Landing call, e.g. up:3 (repeatable)",
    )
    parser.add_argument(
        "--car-call",
        action="append",
        default=[],
        type=int,
        metavar="FLOOR",
        help="Destination chosen inside the car (repeatable)",
    )
    parser.add_argument("--initial-floor", type=int, default=0)
    parser.add_argument(
        "--duration", type=float, default=600.0, help="Simulated seconds to run at most"
    )
    parser.add_argument("--dt", type=float, default=0.1, help="Seconds per tick")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    simulation = create_simulation(initial_floor=args.initial_floor)
    accepted = seed_calls(simulation, args.hall_call, args.car_call)
    logger.info("simulation_seeded", accepted=accepted)
    run(simulation, args.duration, args.dt)


if __name__ == "__main__":
    main()
