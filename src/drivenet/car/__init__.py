"""
Car module - Simulated vehicles.

This module contains all car-related components:
- Car: kinematics, outline and damage
- Controls: forward/left/right/reverse flags
- Sensor: ray fan distance sensing
"""

from drivenet.car.car import Car, CarConfig
from drivenet.car.controls import Controls, ControlsType
from drivenet.car.sensor import Sensor, SensorConfig

__all__ = [
    "Car",
    "CarConfig",
    "Controls",
    "ControlsType",
    "Sensor",
    "SensorConfig",
]
