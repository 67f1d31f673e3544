"""
Sensor - Ray fan distance sensing.

Casts a fixed fan of rays from the car and reports, per ray, the
nearest crossing with a road border or another car's outline.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence
import math

from drivenet.geometry import (
    Intersection,
    Point,
    Polygon,
    Segment,
    lerp,
    segment_intersection,
)

if TYPE_CHECKING:
    from drivenet.car.car import Car


@dataclass
class SensorConfig:
    """Ray fan configuration."""
    ray_count: int = 5
    ray_length: float = 150.0
    ray_spread: float = math.pi / 2    # Total fan angle (radians)


class Sensor:
    """Ray fan attached to a car.
    
    Rays are spread evenly from ``+ray_spread/2`` (left) to
    ``-ray_spread/2`` (right) around the car heading. Angle 0 points
    along -y, the same frame the car moves in.
    
    Attributes:
        rays: Ray segments from the last update
        readings: Nearest hit per ray, or None when the ray is clear
    """
    
    def __init__(self, car: "Car", config: SensorConfig | None = None):
        """Initialize sensor.
        
        Args:
            car: Car the sensor is mounted on
            config: Sensor configuration
        """
        self.config = config or SensorConfig()
        if self.config.ray_count <= 0:
            raise ValueError(f"ray_count must be positive, got {self.config.ray_count}")
        if self.config.ray_length <= 0:
            raise ValueError(f"ray_length must be positive, got {self.config.ray_length}")
        
        self.car = car
        self.rays: List[Segment] = []
        self.readings: List[Optional[Intersection]] = []
    
    @property
    def ray_count(self) -> int:
        return self.config.ray_count
    
    @property
    def ray_length(self) -> float:
        return self.config.ray_length
    
    @property
    def ray_spread(self) -> float:
        return self.config.ray_spread
    
    def cast_rays(self, x: float, y: float, angle: float) -> List[Segment]:
        """Build the ray fan for a pose.
        
        Args:
            x: Origin x
            y: Origin y
            angle: Heading in radians
            
        Returns:
            ray_count segments, leftmost first
        """
        rays = []
        start = Point(x, y)
        for i in range(self.ray_count):
            t = 0.5 if self.ray_count == 1 else i / (self.ray_count - 1)
            ray_angle = lerp(self.ray_spread / 2, -self.ray_spread / 2, t) + angle
            end = Point(
                x - math.sin(ray_angle) * self.ray_length,
                y - math.cos(ray_angle) * self.ray_length,
            )
            rays.append((start, end))
        return rays
    
    def update(
        self,
        road_borders: Sequence[Segment],
        obstacles: Sequence[Polygon],
    ) -> List[Optional[Intersection]]:
        """Recast rays from the car pose and measure every ray.
        
        Args:
            road_borders: Border segments
            obstacles: Outlines of other cars
            
        Returns:
            New readings, one per ray
        """
        self.rays = self.cast_rays(self.car.x, self.car.y, self.car.angle)
        self.readings = [
            self._get_reading(ray, road_borders, obstacles)
            for ray in self.rays
        ]
        return self.readings
    
    def _get_reading(
        self,
        ray: Segment,
        road_borders: Sequence[Segment],
        obstacles: Sequence[Polygon],
    ) -> Optional[Intersection]:
        """Get the closest hit along one ray.
        
        Borders are checked before obstacles, and obstacle edges in
        vertex order; on equal offsets the first hit wins.
        """
        touches: List[Intersection] = []
        
        for border in road_borders:
            touch = segment_intersection(ray[0], ray[1], border[0], border[1])
            if touch is not None:
                touches.append(touch)
        
        for poly in obstacles:
            for j in range(len(poly)):
                touch = segment_intersection(
                    ray[0], ray[1], poly[j], poly[(j + 1) % len(poly)]
                )
                if touch is not None:
                    touches.append(touch)
        
        if not touches:
            return None
        # min() keeps the first of equal offsets
        return min(touches, key=lambda touch: touch.offset)
    
    def get_state(self) -> dict:
        """Get rays and readings for rendering.
        
        Returns:
            Dictionary with ray endpoints and hit points
        """
        return {
            "rays": [
                ((start.x, start.y), (end.x, end.y)) for start, end in self.rays
            ],
            "readings": [
                None if r is None else {"x": r.x, "y": r.y, "offset": r.offset}
                for r in self.readings
            ],
        }
