"""
Car - Vehicle kinematics, footprint and decision loop.

Integrates:
- Controls
- Sensor (ray fan)
- NeuralNetwork (brain)
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple
import math

import numpy as np

from drivenet.car.controls import Controls, ControlsType
from drivenet.car.sensor import Sensor, SensorConfig
from drivenet.geometry import Point, Polygon, Segment, polygons_intersect
from drivenet.ml.network import NeuralNetwork

# Network outputs map to controls in this order
OUTPUT_COUNT = 4


@dataclass
class CarConfig:
    """Car configuration.
    
    Default values match the standard simulation car.
    """
    width: float = 30.0
    height: float = 50.0
    
    # Kinematics (per tick)
    max_speed: float = 3.0
    acceleration: float = 0.2
    friction: float = 0.05
    steering_rate: float = 0.013       # Heading change per tick (radians)
    
    # Hidden layer widths of the brain
    hidden_layers: Tuple[int, ...] = (6,)
    
    sensor: SensorConfig | None = None


class Car:
    """Car driving on a straight road.
    
    A car is either:
    - AI: sensor and brain present, brain outputs set the controls
    - KEYS: sensor and brain present, controls set externally and the
      brain output is only recorded
    - DUMMY: no sensor or brain, always driving forward
    
    Once damaged the car freezes in place: no more movement and no more
    damage checks. Sensing and the brain still run every tick.
    
    Usage:
        car = Car(x=road.get_lane_center(1), y=100, controls_type="AI")
        car.update(road.borders, [other.polygon for other in traffic])
    """
    
    def __init__(
        self,
        x: float,
        y: float,
        controls_type: ControlsType | str = ControlsType.AI,
        config: CarConfig | None = None,
        car_id: int = 0,
        brain: NeuralNetwork | None = None,
        rng: np.random.Generator | int | None = None,
    ):
        """Initialize car.
        
        Args:
            x: Center x position
            y: Center y position
            controls_type: Who drives the car
            config: Car configuration. Uses defaults if None.
            car_id: Identifier for this car instance
            brain: Network to use instead of a freshly randomized one
            rng: Random generator or seed for the brain
        """
        self.config = config or CarConfig()
        self.car_id = car_id
        self.controls_type = ControlsType.parse(controls_type)
        
        self.x = x
        self.y = y
        self.width = self.config.width
        self.height = self.config.height
        
        self.speed = 0.0
        self.max_speed = self.config.max_speed
        self.friction = self.config.friction
        self.acceleration = self.config.acceleration
        self.angle = 0.0
        self.damaged = False
        self.polygon: Optional[Polygon] = None
        
        self.sensor: Optional[Sensor] = None
        self.brain: Optional[NeuralNetwork] = None
        self.outputs: Optional[np.ndarray] = None
        
        if self.controls_type is not ControlsType.DUMMY:
            self.sensor = Sensor(self, self.config.sensor)
            layer_sizes = [self.sensor.ray_count, *self.config.hidden_layers, OUTPUT_COUNT]
            if brain is None:
                brain = NeuralNetwork(layer_sizes, rng)
            elif brain.input_count != layer_sizes[0] or brain.output_count != OUTPUT_COUNT:
                raise ValueError(
                    f"Brain shape {brain.layer_sizes} does not fit "
                    f"{layer_sizes[0]} rays and {OUTPUT_COUNT} controls"
                )
            self.brain = brain
        
        self.controls = Controls.for_type(self.controls_type)
    
    @property
    def has_brain(self) -> bool:
        """True unless this is a dummy car."""
        return self.brain is not None
    
    @property
    def use_brain(self) -> bool:
        """True if the brain drives the controls."""
        return self.controls_type is ControlsType.AI
    
    @property
    def position(self) -> tuple[float, float]:
        """Current (x, y) position."""
        return (self.x, self.y)
    
    def update(
        self,
        road_borders: Sequence[Segment],
        obstacles: Sequence[Polygon],
    ) -> None:
        """Advance the car by one tick.
        
        Args:
            road_borders: Road border segments
            obstacles: Current outlines of the other cars
        """
        if not self.damaged:
            self._move()
            self.polygon = self.create_polygon()
            self.damaged = self.assess_damage(road_borders, obstacles)
        
        if self.sensor is not None:
            self.sensor.update(road_borders, obstacles)
            self.outputs = self.brain.feed_forward(self.get_offsets())
            
            if self.use_brain:
                self.controls.forward = bool(self.outputs[0])
                self.controls.left = bool(self.outputs[1])
                self.controls.right = bool(self.outputs[2])
                self.controls.reverse = bool(self.outputs[3])
    
    def get_offsets(self) -> List[float]:
        """Sensor readings as brain inputs.
        
        Each hit becomes ``1 - offset`` (closer is larger); a clear ray
        becomes 0.
        """
        if self.sensor is None:
            return []
        return [
            0.0 if reading is None else 1.0 - reading.offset
            for reading in self.sensor.readings
        ]
    
    def assess_damage(
        self,
        road_borders: Sequence[Segment],
        obstacles: Sequence[Polygon],
    ) -> bool:
        """Check the current outline against borders and other cars.
        
        Args:
            road_borders: Road border segments
            obstacles: Outlines of other cars
            
        Returns:
            True if the car touches anything
        """
        if self.polygon is None:
            return False
        for border in road_borders:
            if polygons_intersect(self.polygon, border):
                return True
        for poly in obstacles:
            if polygons_intersect(self.polygon, poly):
                return True
        return False
    
    def create_polygon(self) -> Polygon:
        """Build the rectangular outline for the current pose.
        
        Returns:
            Four corners, front pair first
        """
        rad = math.hypot(self.width, self.height) / 2
        alpha = math.atan2(self.width, self.height)
        corners = (
            self.angle - alpha,
            self.angle + alpha,
            math.pi + self.angle - alpha,
            math.pi + self.angle + alpha,
        )
        return [
            Point(
                self.x - math.sin(corner) * rad,
                self.y - math.cos(corner) * rad,
            )
            for corner in corners
        ]
    
    def _move(self) -> None:
        """Integrate speed, heading and position for one tick."""
        if self.controls.forward:
            self.speed += self.acceleration
        if self.controls.reverse:
            self.speed -= self.acceleration
        
        if self.speed > self.max_speed:
            self.speed = self.max_speed
        if self.speed < -self.max_speed / 2:
            self.speed = -self.max_speed / 2
        
        if self.speed < 0:
            self.speed += self.friction
        if self.speed > 0:
            self.speed -= self.friction
        if abs(self.speed) < self.friction:
            self.speed = 0.0
        
        if self.speed != 0:
            # Steering reverses when backing up
            flip = 1 if self.speed > 0 else -1
            if self.controls.left:
                self.angle += self.config.steering_rate * flip
            if self.controls.right:
                self.angle -= self.config.steering_rate * flip
        
        self.x -= math.sin(self.angle) * self.speed
        self.y -= math.cos(self.angle) * self.speed
    
    def get_telemetry(self) -> Dict[str, Any]:
        """Get complete car state for renderers and recorders.
        
        Returns:
            Dictionary containing pose, controls, sensor and brain data
        """
        return {
            "car_id": self.car_id,
            "controls_type": self.controls_type.value,
            "state": {
                "x": self.x,
                "y": self.y,
                "angle_rad": self.angle,
                "angle_deg": math.degrees(self.angle),
                "speed": self.speed,
                "damaged": self.damaged,
            },
            "polygon": None if self.polygon is None else [(p.x, p.y) for p in self.polygon],
            "controls": {
                "forward": self.controls.forward,
                "left": self.controls.left,
                "right": self.controls.right,
                "reverse": self.controls.reverse,
            },
            "sensor": None if self.sensor is None else self.sensor.get_state(),
            "brain": None if self.brain is None else self.brain.get_state(),
        }
