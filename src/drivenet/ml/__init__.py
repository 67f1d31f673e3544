"""
ML module - Decision network for AI-controlled cars.

This module contains:
- Level: single threshold layer
- NeuralNetwork: feed-forward stack of levels with random mutation
"""

from drivenet.ml.network import Level, NeuralNetwork

__all__ = [
    "Level",
    "NeuralNetwork",
]
