"""Basic tests for the DriveNet sensor module."""

from types import SimpleNamespace
import math

import pytest

import drivenet.car.sensor as sensor_module
from drivenet.car.sensor import Sensor, SensorConfig
from drivenet.geometry import Intersection, Point


def make_sensor(x=0.0, y=0.0, angle=0.0, **config):
    car = SimpleNamespace(x=x, y=y, angle=angle)
    return Sensor(car, SensorConfig(**config))


def horizontal_border(y: float) -> tuple:
    return (Point(-500, y), Point(500, y))


class TestCastRays:
    """Test ray fan geometry."""
    
    def test_ray_count(self):
        """Test the fan has exactly ray_count rays."""
        sensor = make_sensor(ray_count=7)
        
        assert len(sensor.cast_rays(0, 0, 0)) == 7
        
    def test_fan_spread(self):
        """Test rays sweep from left to right across the spread."""
        sensor = make_sensor()
        rays = sensor.cast_rays(0, 0, 0)
        diagonal = math.sin(math.pi / 4) * 150
        
        first_end = rays[0][1]
        middle_end = rays[2][1]
        last_end = rays[4][1]
        
        assert first_end.x == pytest.approx(-diagonal)
        assert first_end.y == pytest.approx(-diagonal)
        assert middle_end.x == pytest.approx(0.0)
        assert middle_end.y == pytest.approx(-150.0)
        assert last_end.x == pytest.approx(diagonal)
        assert last_end.y == pytest.approx(-diagonal)
        
    def test_single_ray_points_ahead(self):
        """Test a single ray points along the heading."""
        sensor = make_sensor(ray_count=1)
        rays = sensor.cast_rays(10, 20, 0)
        
        assert len(rays) == 1
        assert rays[0][0] == Point(10, 20)
        assert rays[0][1].x == pytest.approx(10.0)
        assert rays[0][1].y == pytest.approx(-130.0)
        
    def test_rays_follow_heading(self):
        """Test rays rotate with the heading like the car does."""
        sensor = make_sensor(ray_count=1)
        rays = sensor.cast_rays(0, 0, math.pi / 2)
        
        # Heading pi/2 faces -x
        assert rays[0][1].x == pytest.approx(-150.0)
        assert rays[0][1].y == pytest.approx(0.0, abs=1e-9)
        
    def test_invalid_ray_count(self):
        """Test a sensor needs at least one ray."""
        with pytest.raises(ValueError):
            make_sensor(ray_count=0)


class TestSensorUpdate:
    """Test sensor readings."""
    
    def test_no_obstacles(self):
        """Test clear rays read None."""
        sensor = make_sensor()
        readings = sensor.update([], [])
        
        assert len(sensor.rays) == 5
        assert readings == [None] * 5
        
    def test_border_reading(self):
        """Test a wall across the fan is seen by every ray."""
        sensor = make_sensor()
        sensor.update([horizontal_border(-75)], [])
        
        middle = sensor.readings[2]
        assert middle.offset == pytest.approx(0.5)
        assert middle.y == pytest.approx(-75.0)
        
        diagonal = sensor.readings[0]
        assert diagonal.offset == pytest.approx(75 / (150 * math.cos(math.pi / 4)))
        
    def test_nearest_hit_wins(self):
        """Test the smallest offset is reported."""
        sensor = make_sensor(ray_count=1)
        sensor.update([horizontal_border(-100), horizontal_border(-50)], [])
        
        assert sensor.readings[0].offset == pytest.approx(1 / 3)
        
    def test_obstacle_reading(self):
        """Test another car's outline is sensed."""
        sensor = make_sensor(ray_count=1)
        obstacle = [
            Point(-10, -70), Point(10, -70), Point(10, -90), Point(-10, -90),
        ]
        sensor.update([horizontal_border(-120)], [obstacle])
        
        assert sensor.readings[0].offset == pytest.approx(70 / 150)
        
    def test_uses_car_pose(self):
        """Test rays are recast from the car's current pose."""
        sensor = make_sensor(ray_count=1)
        sensor.update([], [])
        
        sensor.car.x = 40.0
        sensor.update([], [])
        
        assert sensor.rays[0][0] == Point(40.0, 0.0)
        
    def test_state(self):
        """Test state exposes rays and readings."""
        sensor = make_sensor(ray_count=3)
        sensor.update([horizontal_border(-75)], [])
        state = sensor.get_state()
        
        assert len(state["rays"]) == 3
        assert state["readings"][1]["offset"] == pytest.approx(0.5)


class TestReadingOrder:
    """Test which hit wins when offsets are equal."""
    
    @pytest.fixture
    def tagged_hits(self, monkeypatch):
        """Every segment is hit at offset 0.5, tagged with its start point."""
        def fake_intersection(a, b, c, d):
            return Intersection(x=c.x, y=c.y, offset=0.5)
        
        monkeypatch.setattr(sensor_module, "segment_intersection", fake_intersection)
        
    def test_border_before_obstacle(self, tagged_hits):
        """Test a border wins over an obstacle edge at the same offset."""
        sensor = make_sensor(ray_count=1)
        border = (Point(-7, -75), Point(7, -75))
        obstacle = [Point(3, -75), Point(5, -75), Point(5, -80)]
        
        sensor.update([border], [obstacle])
        
        assert sensor.readings[0] == Intersection(x=-7, y=-75, offset=0.5)
        
    def test_obstacle_vertex_order(self, tagged_hits):
        """Test the first edge in vertex order wins among equal hits."""
        sensor = make_sensor(ray_count=1)
        first = [Point(11, -60), Point(12, -60), Point(12, -65)]
        second = [Point(21, -60), Point(22, -60), Point(22, -65)]
        
        sensor.update([], [first, second])
        
        assert sensor.readings[0] == Intersection(x=11, y=-60, offset=0.5)
