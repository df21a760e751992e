"""
Point-mass model of the car.

The counterweight is assumed to balance gravity, so the motor force is the
only force acting on the car.
"""

class ElevatorPhysics:
    """
    Integrates the car's motion under the motor voltage.

    Attributes:
        mass: Car mass in kg
        motor_constant: Force per volt, in N/V
    """

    def __init__(
        self,
        mass: float,
        position: float = 0.0,
        voltage: float = 0.0,
        motor_constant: float = 10.0,
    ):
        if mass <= 0:
            raise ValueError(f"mass must be positive, got {mass}")
        self.mass = mass
        self.motor_constant = motor_constant
        self._position = position
        self._velocity = 0.0
        self._acceleration = 0.0
        self._voltage = voltage

    def set_voltage(self, voltage: float) -> None:
        self._voltage = voltage

    def update(self, dt: float) -> None:
        """Advance the model by ``dt`` seconds (semi-implicit Euler)."""
        if dt <= 0:
            return

        motor_force = self._voltage * self.motor_constant
        self._acceleration = motor_force / self.mass
        self._velocity += self._acceleration * dt
        self._position += self._velocity * dt

    def get_position(self) -> float:
        return self._position

    def get_velocity(self) -> float:
        return self._velocity

    def get_acceleration(self) -> float:
        return self._acceleration
