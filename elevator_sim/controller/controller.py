"""
Position controller

Drives the hoist motor so the car settles at the floor the dispatch engine
asks for, and tells the engine which floor the car is at once the encoder
reading is close enough to one.
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog

from elevator_sim.simulation.hardware import Encoder, Motor

from .pid import PIDController

logger = structlog.get_logger(__name__)


class PositionController(ABC):
    """Contract between the dispatch engine and whatever moves the car."""

    @abstractmethod
    def set_target_floor(self, floor: int) -> None:
        pass

    @abstractmethod
    def tick(self, dt: float) -> None:
        pass

    @abstractmethod
    def current_floor(self) -> Optional[int]:
        """Floor the car is confidently at, None while between floors."""
        pass

    @abstractmethod
    def has_reached_target(self) -> bool:
        pass


class PIDPositionController(PositionController):
    """
    Closed-loop height controller.

    Attributes:
        encoder: Height sensor
        motor: Hoist motor
        pid: Regulator turning height error into voltage
        floor_height: Metres between two floors
        precision: Tolerance, in floors, for reporting a floor
        voltage_limit: Largest voltage magnitude sent to the motor
    """

    def __init__(
        self,
        encoder: Encoder,
        motor: Motor,
        pid: PIDController,
        floor_height: float = 5.0,
        precision: float = 0.1,
        voltage_limit: float = 12.0,
    ):
        if floor_height <= 0:
            raise ValueError(f"floor_height must be positive, got {floor_height}")
        self.encoder = encoder
        self.motor = motor
        self.pid = pid
        self.floor_height = floor_height
        self.precision = precision
        self.voltage_limit = voltage_limit
        self.target_floor = 0

    @property
    def current_height(self) -> float:
        return self.encoder.get_position()

    @property
    def target_height(self) -> float:
        return self.target_floor * self.floor_height

    def set_target_floor(self, floor: int) -> None:
        if floor == self.target_floor:
            return
        logger.debug(
            "controller_target_changed", previous=self.target_floor, target_floor=floor
        )
        self.target_floor = floor
        self.pid.reset()

    def tick(self, dt: float) -> None:
        error = self.target_height - self.current_height
        voltage = self.pid.update(error, dt)
        voltage = max(-self.voltage_limit, min(self.voltage_limit, voltage))
        self.motor.set_voltage(voltage)

    def current_floor(self) -> Optional[int]:
        position = self.current_height / self.floor_height
        nearest = round(position)
        if abs(position - nearest) <= self.precision:
            return int(nearest)
        return None

    def has_reached_target(self) -> bool:
        error = abs(self.current_height - self.target_height)
        return error <= self.precision * self.floor_height
