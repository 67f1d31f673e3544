"""
Simulation module - Tick loop driving cars along the road.

This module contains:
- Simulator: main loop, update order, telemetry
- World: road, agent and traffic car management
"""

from drivenet.simulation.simulator import Simulator, SimulatorConfig
from drivenet.simulation.world import World

__all__ = [
    "Simulator",
    "SimulatorConfig",
    "World",
]
