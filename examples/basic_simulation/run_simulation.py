#!/usr/bin/env python3
"""
Basic Simulation Example

This example demonstrates how to:
1. Build a road with some traffic
2. Spawn a population of AI cars
3. Run the simulation until every car crashed or time ran out
4. Pick the car that got furthest and seed the next generation from it

Selection and seeding live here, outside the library: the library only
simulates and mutates.

Run with: python run_simulation.py
"""

import logging

from drivenet import Simulator, Road
from drivenet.simulation import SimulatorConfig

TRAFFIC = [(1, -100), (0, -300), (2, -300), (0, -500), (1, -500), (1, -700), (2, -700)]


def run_generation(road, brain, population, seed):
    sim = Simulator(SimulatorConfig(max_steps=3000))
    sim.set_road(road)
    sim.spawn_cars(population, brain=brain, seed=seed)
    for lane, y in TRAFFIC:
        sim.add_traffic(lane=lane, y=y)
    
    # First car keeps the parent brain unchanged, the rest are mutated
    for car in sim.cars[1:]:
        if brain is not None:
            car.brain.mutate(0.1)
    
    steps = sim.run()
    best = min(sim.cars, key=lambda car: car.y)
    return sim, best, steps


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    
    print("=" * 60)
    print("DriveNet Basic Simulation Example")
    print("=" * 60)
    
    road = Road(x=100, width=180, lane_count=3)
    print(f"\nRoad: {road.lane_count} lanes, x from {road.left:.0f} to {road.right:.0f}")
    
    brain = None
    for generation in range(5):
        sim, best, steps = run_generation(road, brain, population=50, seed=generation)
        print(f"   Generation {generation}: "
              f"steps = {steps}, "
              f"best y = {best.y:.1f}, "
              f"crashed = {sim.world.damaged_count}/{sim.world.car_count}")
        brain = best.brain.copy()
    
    print("\nBest brain parameters (level sizes):", brain.layer_sizes)
    print("\n" + "=" * 60)
    print("Simulation complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
