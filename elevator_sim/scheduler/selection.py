"""
Request selection for a single car.

Every function here is pure: it reads the pending requests and the car's
floors and returns the request to serve next, or None. The dispatch state
machine in ``elevator_sim.models.elevator`` decides which policy applies.
"""

from typing import Iterable, List, Optional

from elevator_sim.models.request import Direction, Request


def _in_direction(requests: Iterable[Request], direction: Direction) -> List[Request]:
    return [request for request in requests if request.direction == direction]


def on_the_way(
    requests: Iterable[Request],
    direction: Direction,
    current_floor: int,
    target_floor: int,
    is_at_target: bool,
) -> Optional[Request]:
    """
    Closest same-direction request the car passes without turning around.

    A request qualifies when it is at the current floor, or ahead of the car
    in ``direction``. While the car is still heading for ``target_floor`` the
    request must also not lie beyond that target; once the car has stopped
    at its target (``is_at_target``) the bound no longer applies.

    Args:
        requests: Pending requests
        direction: Direction the car travels in
        current_floor: Floor the car is at
        target_floor: Floor the car is heading for
        is_at_target: Whether the car has already stopped at its target

    Returns:
        The nearest qualifying request; the lower floor wins a tie
    """

    def qualifies(request: Request) -> bool:
        if request.floor == current_floor:
            return True
        if direction == Direction.UP and request.floor > current_floor:
            return is_at_target or request.floor <= target_floor
        if direction == Direction.DOWN and request.floor < current_floor:
            return is_at_target or request.floor >= target_floor
        return False

    candidates = [r for r in _in_direction(requests, direction) if qualifies(r)]
    if not candidates:
        return None
    return min(candidates, key=lambda r: (abs(current_floor - r.floor), r.floor))


def first_in_direction(
    requests: Iterable[Request], direction: Direction
) -> Optional[Request]:
    """
    Request a sweep in ``direction`` starts from.

    Returns:
        Lowest UP request or highest DOWN request, None if there is none
    """
    candidates = _in_direction(requests, direction)
    if not candidates:
        return None
    if direction == Direction.UP:
        return min(candidates, key=lambda r: r.floor)
    return max(candidates, key=lambda r: r.floor)


def best_opposite(
    requests: Iterable[Request], direction: Direction, current_floor: int
) -> Optional[Request]:
    """
    Furthest opposite-direction request still ahead of the car.

    Before turning around, a car travelling UP serves the highest DOWN call
    at or above it; a car travelling DOWN serves the lowest UP call at or
    below it.
    """
    candidates = _in_direction(requests, direction.opposite())
    if direction == Direction.UP:
        ahead = [r for r in candidates if r.floor >= current_floor]
        return max(ahead, key=lambda r: r.floor) if ahead else None
    ahead = [r for r in candidates if r.floor <= current_floor]
    return min(ahead, key=lambda r: r.floor) if ahead else None


def next_on_idle(requests: Iterable[Request]) -> Optional[Request]:
    """UP work first, then DOWN work."""
    requests = list(requests)
    return first_in_direction(requests, Direction.UP) or first_in_direction(
        requests, Direction.DOWN
    )


def next_while_moving(
    requests: Iterable[Request],
    direction: Direction,
    current_floor: int,
    target_floor: int,
) -> Optional[Request]:
    """Pick up on the way to the target, else serve the turn-around call."""
    requests = list(requests)
    return on_the_way(
        requests, direction, current_floor, target_floor, is_at_target=False
    ) or best_opposite(requests, direction, current_floor)


def next_after_waiting(
    requests: Iterable[Request],
    direction: Direction,
    current_floor: int,
    target_floor: int,
) -> Optional[Request]:
    """Keep going the same way if there is work ahead, else bounce back."""
    requests = list(requests)
    return (
        on_the_way(requests, direction, current_floor, target_floor, is_at_target=True)
        or first_in_direction(requests, direction.opposite())
        or first_in_direction(requests, direction)
    )
