"""
Simulator - Main simulation loop and controller.

Provides:
- Tick stepping in a fixed car order
- Traffic and agent updates
- Run-until-crashed loop
- Telemetry collection
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import logging

import numpy as np

from drivenet.car.car import Car
from drivenet.simulation.world import World
from drivenet.track.road import Road

logger = logging.getLogger(__name__)


def _pose(car: Car) -> Dict[str, Any]:
    return {
        "x": car.x,
        "y": car.y,
        "angle": car.angle,
        "speed": car.speed,
        "damaged": car.damaged,
    }


@dataclass
class SimulatorConfig:
    """Simulator configuration."""
    # Simulation limits
    max_steps: int = 0                   # Tick budget for run() (0 = unlimited)
    stop_when_all_damaged: bool = True   # End run() once every agent crashed
    
    # Agents collide with and sense each other, not only traffic
    allow_car_collision: bool = False
    
    # Telemetry
    enable_telemetry: bool = True
    telemetry_buffer_size: int = 10000


class Simulator:
    """Main driving simulator.
    
    Each tick updates traffic first, then agents in insertion order.
    Traffic cars see no obstacles. Agents see the traffic outlines and,
    with ``allow_car_collision``, the other agents' outlines as they
    stand at that moment in the tick: agents earlier in the order
    already show their new position.
    
    Usage:
        sim = Simulator()
        sim.set_road(Road(x=100, width=180))
        sim.spawn_cars(100)
        sim.add_traffic(lane=1, y=-100)
        
        steps = sim.run(max_steps=2000)
        best = min(sim.cars, key=lambda car: car.y)
    """
    
    def __init__(self, config: SimulatorConfig | None = None):
        """Initialize simulator.
        
        Args:
            config: Simulator configuration. Uses defaults if None.
        """
        self.config = config or SimulatorConfig()
        
        self.world = World()
        
        # State
        self._running: bool = False
        self._paused: bool = False
        
        # Telemetry collection
        self._telemetry_buffer: List[Dict[str, Any]] = []
        
        # Step callbacks
        self._pre_step_callbacks: List[Callable] = []
        self._post_step_callbacks: List[Callable] = []
    
    @property
    def is_running(self) -> bool:
        """Check if simulation is running."""
        return self._running
    
    @property
    def is_paused(self) -> bool:
        """Check if simulation is paused."""
        return self._paused
    
    @property
    def frame(self) -> int:
        """Number of ticks simulated."""
        return self.world.frame
    
    @property
    def road(self) -> Optional[Road]:
        """Current road."""
        return self.world.road
    
    @property
    def cars(self) -> List[Car]:
        """Agent cars."""
        return self.world.cars
    
    @property
    def traffic(self) -> List[Car]:
        """Traffic cars."""
        return self.world.traffic
    
    @property
    def all_damaged(self) -> bool:
        """True when there is at least one agent and all are damaged."""
        cars = self.world.cars
        return bool(cars) and all(car.damaged for car in cars)
    
    def set_road(self, road: Road) -> None:
        """Set the road.
        
        Args:
            road: Road to drive on
        """
        self.world.set_road(road)
    
    def spawn_cars(self, count: int, **kwargs) -> List[int]:
        """Spawn agent cars. See World.spawn_cars for arguments."""
        return self.world.spawn_cars(count, **kwargs)
    
    def add_car(self, car: Car) -> int:
        """Add a specific agent car to the simulation.
        
        Args:
            car: Car to add
            
        Returns:
            Car ID
        """
        return self.world.add_car(car)
    
    def add_traffic(self, lane: int, y: float, **kwargs) -> Car:
        """Add a traffic car. See World.add_traffic for arguments."""
        return self.world.add_traffic(lane, y, **kwargs)
    
    def get_car(self, car_id: int) -> Optional[Car]:
        """Get agent car by ID.
        
        Args:
            car_id: Car ID
            
        Returns:
            Car if found
        """
        return self.world.get_car(car_id)
    
    def add_pre_step_callback(self, callback: Callable) -> None:
        """Add callback called before each step.
        
        External input sources hook in here to set controls.
        
        Args:
            callback: Function taking the simulator
        """
        self._pre_step_callbacks.append(callback)
    
    def add_post_step_callback(self, callback: Callable) -> None:
        """Add callback called after each step.
        
        Args:
            callback: Function taking the simulator
        """
        self._post_step_callbacks.append(callback)
    
    def start(self) -> None:
        """Start the simulation."""
        if self.world.road is None:
            raise RuntimeError("No road set")
        
        self._running = True
        self._paused = False
        logger.info(
            f"Simulation started with {self.world.car_count} cars "
            f"and {len(self.world.traffic)} traffic cars"
        )
    
    def stop(self) -> None:
        """Stop the simulation."""
        if self._running:
            logger.info(
                f"Simulation stopped at frame {self.frame}: "
                f"{self.world.damaged_count}/{self.world.car_count} cars damaged"
            )
        self._running = False
    
    def pause(self) -> None:
        """Pause the simulation."""
        self._paused = True
    
    def resume(self) -> None:
        """Resume the simulation."""
        self._paused = False
    
    def step(self) -> Dict[int, np.ndarray]:
        """Advance simulation by one tick.
        
        Returns:
            Dictionary mapping car_id to sensor input vectors
        """
        if not self._running or self._paused:
            return {}
        
        for callback in self._pre_step_callbacks:
            callback(self)
        
        borders = self.world.road.borders
        
        for car in self.world.traffic:
            car.update(borders, [])
        
        observations = {}
        for car in self.world.cars:
            was_damaged = car.damaged
            obstacles = self.world.get_obstacles(car, self.config.allow_car_collision)
            car.update(borders, obstacles)
            
            if car.damaged and not was_damaged:
                logger.debug(f"Car {car.car_id} damaged at frame {self.frame} (y={car.y:.1f})")
            
            observations[car.car_id] = np.array(car.get_offsets(), dtype=np.float32)
        
        self.world.advance_frame()
        
        if self.config.enable_telemetry:
            self._collect_telemetry()
        
        for callback in self._post_step_callbacks:
            callback(self)
        
        return observations
    
    def step_until(
        self,
        condition: Callable[["Simulator"], bool],
        max_steps: int | None = 100000,
    ) -> int:
        """Step simulation until condition is met.

        Args:
            condition: Function returning True when should stop
            max_steps: Maximum steps to take (None = no limit)

        Returns:
            Number of steps taken
        """
        steps = 0
        while self._running and (max_steps is None or steps < max_steps):
            if condition(self):
                break
            self.step()
            steps += 1
        return steps
    
    def run(self, max_steps: int | None = None) -> int:
        """Run until every agent is damaged or the tick budget is spent.
        
        Args:
            max_steps: Tick budget; uses config.max_steps if None
                (0 = unlimited)
            
        Returns:
            Number of steps taken
        """
        if max_steps is None:
            max_steps = self.config.max_steps
        if not max_steps and not self.config.stop_when_all_damaged:
            raise ValueError("Unbounded run: set max_steps or stop_when_all_damaged")
        if not max_steps and self.world.car_count == 0:
            raise ValueError("Unbounded run: no cars to wait for, set max_steps")

        if not self._running:
            self.start()
        
        def finished(sim: "Simulator") -> bool:
            return sim.config.stop_when_all_damaged and sim.all_damaged
        
        steps = self.step_until(finished, max_steps or None)
        self.stop()
        return steps
    
    def _collect_telemetry(self) -> None:
        """Record pose and damage of every car for this frame.

        Full per-car state (sensor, brain) is available on demand
        through get_all_telemetry.
        """
        frame_telemetry = {
            "frame": self.world.frame,
            "cars": {car.car_id: _pose(car) for car in self.world.cars},
            "traffic": {car.car_id: _pose(car) for car in self.world.traffic},
        }
        self._telemetry_buffer.append(frame_telemetry)
        
        # Limit buffer size
        limit = self.config.telemetry_buffer_size
        if len(self._telemetry_buffer) > limit:
            self._telemetry_buffer = self._telemetry_buffer[-max(limit // 2, 1):]
    
    def get_telemetry(self) -> List[Dict[str, Any]]:
        """Get collected telemetry data.
        
        Returns:
            List of telemetry frames
        """
        return self._telemetry_buffer.copy()
    
    def clear_telemetry(self) -> None:
        """Clear telemetry buffer."""
        self._telemetry_buffer.clear()
    
    def get_all_telemetry(self) -> Dict[int, Dict[str, Any]]:
        """Get current telemetry for all agent cars.
        
        Returns:
            Dictionary mapping car_id to telemetry dicts
        """
        return {car.car_id: car.get_telemetry() for car in self.cars}
    
    def reset(self, keep_road: bool = True) -> None:
        """Reset simulation, removing all cars.
        
        Args:
            keep_road: Keep current road
        """
        road = self.world.road if keep_road else None
        self.world.reset()
        self.world.set_road(road)
        
        self._telemetry_buffer.clear()
        self._running = False
        self._paused = False
    
    def get_state(self) -> Dict[str, Any]:
        """Get complete simulation state.
        
        Returns:
            Dictionary containing simulation state
        """
        return {
            "config": {
                "max_steps": self.config.max_steps,
                "allow_car_collision": self.config.allow_car_collision,
            },
            "running": self._running,
            "paused": self._paused,
            "world": self.world.get_state(),
        }
