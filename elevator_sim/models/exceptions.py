"""
Custom exceptions for the dispatch engine.
"""

import enum
from typing import Optional

from .request import Request


class RejectReason(str, enum.Enum):
    """Why a call was not added to the request set."""

    DUPLICATE = "duplicate"
    DENIED = "denied"
    CURRENT_FLOOR = "current_floor"


class ElevatorError(Exception):
    """Base exception for all dispatch engine errors."""

    pass


class RequestRejectedError(ElevatorError):
    """Raised when a hall or car call is not accepted. The engine state is unchanged."""

    reason: RejectReason = RejectReason.DENIED

    def __init__(self, floor: int, request: Optional[Request] = None):
        self.floor = floor
        self.request = request
        super().__init__(f"{self.reason.value} request for floor {floor}")


class DuplicateRequestError(RequestRejectedError):
    """Raised when an identical request is already pending."""

    reason = RejectReason.DUPLICATE


class CurrentFloorError(RequestRejectedError):
    """Raised when a car call names the floor the car is already at."""

    reason = RejectReason.CURRENT_FLOOR


class RequestDeniedError(RequestRejectedError):
    """Reserved for admission policies; nothing raises it yet."""

    reason = RejectReason.DENIED


class NotMovingError(ElevatorError):
    """Raised when a floor arrival is reported while the car is not moving."""

    pass


class DispatchInvariantError(ElevatorError):
    """
    Raised when the car is moving but no pending request justifies it.

    The request that put the car in motion is expected to stay in the set
    until the car stops for it. Hosts decide whether to crash or force the
    car idle.
    """

    pass


class SimulationStoppedError(ElevatorError):
    """Raised when a call reaches a simulation whose tick loop has died."""

    pass


__all__ = [
    "RejectReason",
    "ElevatorError",
    "RequestRejectedError",
    "DuplicateRequestError",
    "CurrentFloorError",
    "RequestDeniedError",
    "NotMovingError",
    "DispatchInvariantError",
    "SimulationStoppedError",
]
