"""
World - World state management for the simulation.

Manages:
- The road
- Agent cars (AI or externally controlled)
- Traffic cars (dummies)
- Frame counter
"""

from typing import Dict, List, Optional
import logging

import numpy as np

from drivenet.car.car import Car, CarConfig
from drivenet.car.controls import ControlsType
from drivenet.geometry import Polygon
from drivenet.ml.network import NeuralNetwork
from drivenet.track.road import Road

logger = logging.getLogger(__name__)


class World:
    """World state container for simulation.
    
    Agents are kept in insertion order, which is also their update
    order within a tick.
    """
    
    def __init__(self, road: Road | None = None):
        """Initialize world.
        
        Args:
            road: Road (can be set later)
        """
        self.road = road
        
        self._cars: Dict[int, Car] = {}
        self._traffic: List[Car] = []
        self._next_car_id: int = 0
        
        self._frame: int = 0
    
    @property
    def frame(self) -> int:
        """Number of ticks simulated."""
        return self._frame
    
    @property
    def cars(self) -> List[Car]:
        """Agent cars in update order."""
        return list(self._cars.values())
    
    @property
    def traffic(self) -> List[Car]:
        """Traffic cars in update order."""
        return list(self._traffic)
    
    @property
    def car_count(self) -> int:
        """Number of agent cars."""
        return len(self._cars)
    
    @property
    def damaged_count(self) -> int:
        """Number of damaged agent cars."""
        return sum(1 for car in self._cars.values() if car.damaged)
    
    def set_road(self, road: Road) -> None:
        """Set the road.
        
        Args:
            road: Road to use
        """
        self.road = road
    
    def _take_id(self) -> int:
        car_id = self._next_car_id
        self._next_car_id += 1
        return car_id
    
    def add_car(self, car: Car) -> int:
        """Add an agent car to the world.
        
        Args:
            car: Car to add
            
        Returns:
            Car ID
        """
        car.car_id = self._take_id()
        self._cars[car.car_id] = car
        return car.car_id
    
    def add_traffic(
        self,
        lane: int,
        y: float,
        config: CarConfig | None = None,
    ) -> Car:
        """Add a dummy traffic car in a lane.
        
        Args:
            lane: Lane index
            y: Starting y position
            config: Car configuration (e.g. a lower max_speed)
            
        Returns:
            The created car
        """
        if self.road is None:
            raise RuntimeError("No road set for spawning traffic")
        
        car = Car(
            x=self.road.get_lane_center(lane),
            y=y,
            controls_type=ControlsType.DUMMY,
            config=config,
            car_id=self._take_id(),
        )
        self._traffic.append(car)
        return car
    
    def remove_car(self, car_id: int) -> bool:
        """Remove an agent car from the world.
        
        Args:
            car_id: ID of car to remove
            
        Returns:
            True if car was removed
        """
        if car_id not in self._cars:
            return False
        del self._cars[car_id]
        return True
    
    def get_car(self, car_id: int) -> Optional[Car]:
        """Get agent car by ID.
        
        Args:
            car_id: Car ID
            
        Returns:
            Car if found, None otherwise
        """
        return self._cars.get(car_id)
    
    def spawn_cars(
        self,
        count: int,
        controls_type: ControlsType | str = ControlsType.AI,
        lane: int = 1,
        y: float = 100.0,
        config: CarConfig | None = None,
        brain: NeuralNetwork | None = None,
        seed: int | None = None,
    ) -> List[int]:
        """Spawn several agent cars at the same start point.
        
        Args:
            count: Number of cars to spawn
            controls_type: Controls type for every car
            lane: Start lane
            y: Start y position
            config: Car configuration
            brain: Network copied into every car; random brains if None
            seed: Seed for the random brains or brain copies
            
        Returns:
            List of car IDs
        """
        if self.road is None:
            raise RuntimeError("No road set for spawning cars")
        
        rng = np.random.default_rng(seed)
        x = self.road.get_lane_center(lane)
        car_ids = []
        for _ in range(count):
            car = Car(
                x=x,
                y=y,
                controls_type=controls_type,
                config=config,
                brain=None if brain is None else brain.copy(rng),
                rng=rng,
            )
            car_ids.append(self.add_car(car))
        
        logger.debug(f"Spawned {count} {ControlsType.parse(controls_type).value} cars in lane {lane}")
        return car_ids
    
    def get_obstacles(self, car: Car, include_cars: bool) -> List[Polygon]:
        """Collect the current outlines a car must avoid.
        
        Traffic outlines always count. Other agents' outlines count when
        include_cars is set; those already updated this tick show their
        new position. Cars without an outline yet are skipped.
        
        Args:
            car: Car being updated
            include_cars: Whether other agents are obstacles
            
        Returns:
            List of polygons
        """
        obstacles = [t.polygon for t in self._traffic if t.polygon is not None]
        if include_cars:
            obstacles.extend(
                other.polygon
                for other in self._cars.values()
                if other is not car and other.polygon is not None
            )
        return obstacles
    
    def advance_frame(self) -> None:
        """Advance the tick counter."""
        self._frame += 1
    
    def reset(self) -> None:
        """Remove all cars and reset the frame counter."""
        self._cars.clear()
        self._traffic.clear()
        self._next_car_id = 0
        self._frame = 0
    
    def get_state(self) -> dict:
        """Get world state for serialization.
        
        Returns:
            Dictionary containing world state
        """
        return {
            "frame": self._frame,
            "car_count": self.car_count,
            "traffic_count": len(self._traffic),
            "damaged_count": self.damaged_count,
            "road": self.road.get_state() if self.road else None,
        }
