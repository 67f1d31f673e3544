"""
Track module - Road geometry consumed by the simulation.

This module contains:
- Road: lane layout and border segments
"""

from drivenet.track.road import Road, RoadConfig

__all__ = [
    "Road",
    "RoadConfig",
]
