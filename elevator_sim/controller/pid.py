"""PID regulator used by the position controller."""

import math


class PIDController:
    """
    Proportional-integral-derivative regulator.

    Attributes:
        kp: Proportional gain
        ki: Integral gain
        kd: Derivative gain
        min_limit: Lowest output value
        max_limit: Highest output value
    """

    def __init__(self, kp: float, ki: float, kd: float):
        self.kp = kp
        self.ki = ki
        self.kd = kd
        self.min_limit = -math.inf
        self.max_limit = math.inf
        self._integral = 0.0
        self._previous_error = 0.0

    @property
    def integral(self) -> float:
        return self._integral

    def set_output_limits(self, min_limit: float, max_limit: float) -> None:
        if min_limit > max_limit:
            raise ValueError(f"min_limit {min_limit} is above max_limit {max_limit}")
        self.min_limit = min_limit
        self.max_limit = max_limit

    def reset(self) -> None:
        """Forget accumulated error, e.g. after the setpoint changed."""
        self._integral = 0.0
        self._previous_error = 0.0

    def update(self, error: float, dt: float) -> float:
        """
        Compute the regulator output for one step.

        Args:
            error: Setpoint minus measured value
            dt: Seconds since the previous update

        Returns:
            The output, clamped to the configured limits
        """
        derivative = 0.0
        if dt > 0:
            self._integral += error * dt
            derivative = (error - self._previous_error) / dt
        self._previous_error = error

        output = self.kp * error + self.ki * self._integral + self.kd * derivative
        return max(self.min_limit, min(self.max_limit, output))
