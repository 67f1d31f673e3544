"""
DriveNet - A lane-road driving simulation with mutation-tuned neural drivers.

This package provides the simulation kernel for self-driving cars:
- Cars with simple kinematics and rectangular outlines
- Ray fan sensors reading distances to borders and other cars
- Tiny threshold networks tuned only by random mutation
- A straight multi-lane road with infinite border walls
- A tick-based simulator for populations of cars among traffic
"""

__version__ = "0.1.0"

from drivenet.simulation.simulator import Simulator
from drivenet.car.car import Car
from drivenet.track.road import Road
from drivenet.ml.network import NeuralNetwork

__all__ = ["Simulator", "Car", "Road", "NeuralNetwork", "__version__"]
