import os

from dotenv import load_dotenv

from .logging import configure_logging

load_dotenv()


# Building configuration
MIN_FLOOR = int(os.getenv("MIN_FLOOR", "0"))
MAX_FLOOR = int(os.getenv("MAX_FLOOR", "15"))

# Dispatch
DWELL_TIME = float(os.getenv("DWELL_TIME", "5.0"))
TICK_INTERVAL = float(os.getenv("TICK_INTERVAL", "0.05"))
# "raise" propagates invariant faults, "force_idle" recovers by idling the car
FAULT_POLICY = os.getenv("FAULT_POLICY", "raise").lower()

# Position controller
FLOOR_HEIGHT = float(os.getenv("FLOOR_HEIGHT", "5.0"))
FLOOR_PRECISION = float(os.getenv("FLOOR_PRECISION", "0.1"))
PID_KP = float(os.getenv("PID_KP", "1.0"))
PID_KI = float(os.getenv("PID_KI", "0.0"))
PID_KD = float(os.getenv("PID_KD", "25.0"))
VOLTAGE_LIMIT = float(os.getenv("VOLTAGE_LIMIT", "12.0"))

# Plant
CAR_MASS = float(os.getenv("CAR_MASS", "100.0"))
MOTOR_CONSTANT = float(os.getenv("MOTOR_CONSTANT", "10.0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

__all__ = [
    "configure_logging",
    "MIN_FLOOR",
    "MAX_FLOOR",
    "DWELL_TIME",
    "TICK_INTERVAL",
    "FAULT_POLICY",
    "FLOOR_HEIGHT",
    "FLOOR_PRECISION",
    "PID_KP",
    "PID_KI",
    "PID_KD",
    "VOLTAGE_LIMIT",
    "CAR_MASS",
    "MOTOR_CONSTANT",
    "LOG_LEVEL",
]
