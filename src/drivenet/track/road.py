"""
Road - Straight multi-lane road.

Contains:
- Lane layout and lane-center lookup
- Two vertical border segments acting as infinite walls
"""

from dataclasses import dataclass
from typing import List

from drivenet.geometry import Point, Segment, lerp


@dataclass
class RoadConfig:
    """Road configuration."""
    lane_count: int = 3
    
    # Half-length of the borders; large enough to act as infinite walls
    infinity: float = 1_000_000.0


class Road:
    """Straight road running along the y axis.
    
    The road is static once built. Cars read its ``borders`` every tick
    for both collision checks and sensor casts.
    
    Usage:
        road = Road(x=100, width=180, lane_count=3)
        start_x = road.get_lane_center(1)
    """
    
    def __init__(
        self,
        x: float,
        width: float,
        lane_count: int | None = None,
        config: RoadConfig | None = None,
    ):
        """Initialize road.
        
        Args:
            x: X coordinate of the road center line
            width: Total road width
            lane_count: Number of lanes; overrides config.lane_count
            config: Road configuration
        """
        self.config = config or RoadConfig()
        if lane_count is None:
            lane_count = self.config.lane_count
        
        if width <= 0:
            raise ValueError(f"Road width must be positive, got {width}")
        if lane_count <= 0:
            raise ValueError(f"Lane count must be positive, got {lane_count}")
        
        self.x = x
        self.width = width
        self.lane_count = lane_count
        
        self.left = x - width / 2
        self.right = x + width / 2
        self.top = -self.config.infinity
        self.bottom = self.config.infinity
        
        top_left = Point(self.left, self.top)
        top_right = Point(self.right, self.top)
        bottom_left = Point(self.left, self.bottom)
        bottom_right = Point(self.right, self.bottom)
        self._borders: List[Segment] = [
            (top_left, bottom_left),
            (top_right, bottom_right),
        ]
    
    @property
    def borders(self) -> List[Segment]:
        """Left and right border segments."""
        return list(self._borders)
    
    @property
    def lane_width(self) -> float:
        """Width of a single lane."""
        return self.width / self.lane_count
    
    def get_lane_center(self, lane_index: int) -> float:
        """Get the x coordinate of a lane center.
        
        Indices past the last lane are clamped to the last lane.
        
        Args:
            lane_index: Zero-based lane index from the left
            
        Returns:
            Lane center x coordinate
        """
        lane_width = self.lane_width
        return self.left + lane_width / 2 + min(lane_index, self.lane_count - 1) * lane_width
    
    def get_lane_markings(self) -> List[float]:
        """Get x coordinates of the dashed lines between lanes."""
        return [
            lerp(self.left, self.right, i / self.lane_count)
            for i in range(1, self.lane_count)
        ]
    
    def get_state(self) -> dict:
        """Get road layout.
        
        Returns:
            Dictionary with road geometry
        """
        return {
            "x": self.x,
            "width": self.width,
            "lane_count": self.lane_count,
            "left": self.left,
            "right": self.right,
            "lane_markings": self.get_lane_markings(),
        }
