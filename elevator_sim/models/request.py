"""
Request models for the elevator simulator.

A request is a travel intent registered with the car, either from a landing
(hall call, direction chosen by the passenger) or from inside the car
(car call, direction derived from the car's position).
"""

import enum
import json
from dataclasses import dataclass


class Direction(str, enum.Enum):
    """Direction of travel."""

    UP = "up"
    DOWN = "down"

    def opposite(self) -> "Direction":
        return Direction.DOWN if self is Direction.UP else Direction.UP


@dataclass(frozen=True, order=True)
class Request:
    """
    Pending travel intent.

    Two requests are the same request when both floor and direction match.
    Ordering is by floor first, then direction.

    Attributes:
        floor: Floor the car has to stop at
        direction: Direction the car is expected to leave that floor in
    """

    floor: int
    direction: Direction

    def toward(self, current_floor: int) -> Direction:
        """
        Direction the car has to travel from ``current_floor`` to reach this request.

        Args:
            current_floor: Floor the car is at

        Returns:
            UP or DOWN; the request's own direction when the car is already there
        """
        if self.floor > current_floor:
            return Direction.UP
        if self.floor < current_floor:
            return Direction.DOWN
        return self.direction

    def to_dict(self) -> dict:
        """
        Convert request to a dictionary.

        Returns:
            Dictionary representation
        """
        return {"floor": self.floor, "direction": self.direction.value}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "Request":
        """
        Create a Request from a dictionary.

        Args:
            data: Dictionary containing ``floor`` and ``direction``

        Returns:
            New Request instance
        """
        return cls(floor=int(data["floor"]), direction=Direction(data["direction"]))

    @classmethod
    def from_json(cls, json_str: str) -> "Request":
        return cls.from_dict(json.loads(json_str))
