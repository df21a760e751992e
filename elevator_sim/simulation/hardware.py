"""Sensor and actuator contracts, with in-memory implementations for simulation."""
from abc import ABC, abstractmethod


class Encoder(ABC):
    """Reports the car's height in the shaft, in metres."""

    @abstractmethod
    def get_position(self) -> float:
        pass

    @abstractmethod
    def set_position(self, position: float) -> None:
        """Feed a new reading into the encoder.

        Args:
            position: Height in metres
        """
        pass


class Motor(ABC):
    """Hoist motor driven by a voltage."""

    @abstractmethod
    def set_voltage(self, voltage: float) -> None:
        pass


class SimulatedEncoder(Encoder):
    """Encoder whose reading is written by the physics loop."""

    def __init__(self, initial_position: float = 0.0):
        self._position = initial_position

    def get_position(self) -> float:
        return self._position

    def set_position(self, position: float) -> None:
        self._position = position


class SimulatedMotor(Motor):
    """Motor that only remembers the last commanded voltage."""

    def __init__(self):
        self._voltage = 0.0

    def get_voltage(self) -> float:
        return self._voltage

    def set_voltage(self, voltage: float) -> None:
        self._voltage = voltage
