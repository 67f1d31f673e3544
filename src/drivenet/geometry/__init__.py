"""
Geometry module - Pure 2D primitives used by the simulation kernel.

This module contains:
- Point / Intersection: immutable value types
- segment_intersection: parametric segment crossing test
- polygons_intersect: edge-pair polygon overlap test
"""

from drivenet.geometry.intersection import (
    Point,
    Intersection,
    Segment,
    Polygon,
    lerp,
    segment_intersection,
    polygons_intersect,
)

__all__ = [
    "Point",
    "Intersection",
    "Segment",
    "Polygon",
    "lerp",
    "segment_intersection",
    "polygons_intersect",
]
