"""
Network - Feed-forward threshold network driving AI cars.

Provides:
- Level: single fully-connected layer with hard 0/1 threshold outputs
- NeuralNetwork: ordered stack of levels
- Random initialization and mutation (no gradient learning)
"""

from typing import Any, Dict, List, Sequence
import copy

import numpy as np


def _as_generator(rng: np.random.Generator | int | None) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


class Level:
    """Single layer of threshold perceptrons.
    
    Each output neuron emits 1.0 when the weighted sum of its inputs is
    strictly greater than its bias, otherwise 0.0. The last inputs and
    outputs are kept on the level so a renderer can show activations.
    
    Attributes:
        inputs: Last input vector, shape (input_count,)
        outputs: Last output vector, shape (output_count,)
        biases: Per-output thresholds, shape (output_count,)
        weights: Connection weights, shape (input_count, output_count)
    """
    
    def __init__(
        self,
        input_count: int,
        output_count: int,
        rng: np.random.Generator | int | None = None,
    ):
        """Create a level with random weights and biases in [-1, 1].
        
        Args:
            input_count: Number of input neurons
            output_count: Number of output neurons
            rng: Random generator or seed
        """
        if input_count <= 0 or output_count <= 0:
            raise ValueError(
                f"Level sizes must be positive, got {input_count}->{output_count}"
            )
        
        self.inputs = np.zeros(input_count)
        self.outputs = np.zeros(output_count)
        self.biases = np.zeros(output_count)
        self.weights = np.zeros((input_count, output_count))
        
        self.randomize(rng)
    
    @property
    def input_count(self) -> int:
        """Number of input neurons."""
        return self.weights.shape[0]
    
    @property
    def output_count(self) -> int:
        """Number of output neurons."""
        return self.weights.shape[1]
    
    def randomize(self, rng: np.random.Generator | int | None = None) -> None:
        """Draw fresh weights and biases uniformly from [-1, 1]."""
        rng = _as_generator(rng)
        self.weights = rng.uniform(-1.0, 1.0, size=self.weights.shape)
        self.biases = rng.uniform(-1.0, 1.0, size=self.biases.shape)
    
    def feed_forward(self, given_input: Sequence[float]) -> np.ndarray:
        """Evaluate the level on an input vector.
        
        Args:
            given_input: Input values, one per input neuron
            
        Returns:
            Output vector of 0.0/1.0 values
        """
        values = np.asarray(given_input, dtype=float)
        if values.shape != (self.input_count,):
            raise ValueError(
                f"Expected {self.input_count} inputs, got {values.size}"
            )
        
        self.inputs = values.copy()
        sums = values @ self.weights
        self.outputs = np.where(sums > self.biases, 1.0, 0.0)
        return self.outputs.copy()
    
    evaluate = feed_forward
    
    def mutate(
        self,
        amount: float,
        rng: np.random.Generator | int | None = None,
    ) -> None:
        """Blend every weight and bias toward a fresh random value.
        
        Args:
            amount: Interpolation factor, 0 = unchanged, 1 = fully random
            rng: Random generator or seed
        """
        rng = _as_generator(rng)
        targets = rng.uniform(-1.0, 1.0, size=self.biases.shape)
        self.biases = self.biases + (targets - self.biases) * amount
        targets = rng.uniform(-1.0, 1.0, size=self.weights.shape)
        self.weights = self.weights + (targets - self.weights) * amount


class NeuralNetwork:
    """Stack of threshold levels.
    
    Built from a list of layer widths; widths ``[5, 6, 4]`` produce two
    levels, 5->6 and 6->4. The output of each level is the input of the
    next.
    
    There is no training step. Parameters only change through
    ``mutate``, and any selection between networks happens outside.
    
    Usage:
        brain = NeuralNetwork([5, 6, 4], rng=42)
        outputs = brain.feed_forward([0.0, 0.3, 0.0, 0.0, 0.9])
        child = brain.copy()
        child.mutate(0.1)
    """
    
    def __init__(
        self,
        neuron_counts: Sequence[int],
        rng: np.random.Generator | int | None = None,
    ):
        """Initialize network with random parameters.
        
        Args:
            neuron_counts: Layer widths, input layer first
            rng: Random generator or seed, also used by later mutations
        """
        if len(neuron_counts) < 2:
            raise ValueError(
                f"Need at least 2 layer widths, got {list(neuron_counts)}"
            )
        
        self._rng = _as_generator(rng)
        self.levels: List[Level] = [
            Level(neuron_counts[i], neuron_counts[i + 1], self._rng)
            for i in range(len(neuron_counts) - 1)
        ]
    
    @property
    def layer_sizes(self) -> List[int]:
        """Layer widths this network was built from."""
        return [self.levels[0].input_count] + [
            level.output_count for level in self.levels
        ]
    
    @property
    def input_count(self) -> int:
        """Expected input vector length."""
        return self.levels[0].input_count
    
    @property
    def output_count(self) -> int:
        """Output vector length."""
        return self.levels[-1].output_count
    
    def feed_forward(self, given_input: Sequence[float]) -> np.ndarray:
        """Run an input vector through every level in order.
        
        Args:
            given_input: Input values, length must match input_count
            
        Returns:
            Output vector of the last level
        """
        outputs = self.levels[0].feed_forward(given_input)
        for level in self.levels[1:]:
            outputs = level.feed_forward(outputs)
        return outputs
    
    evaluate = feed_forward
    
    def mutate(
        self,
        amount: float = 1.0,
        rng: np.random.Generator | int | None = None,
    ) -> None:
        """Mutate all parameters in place.
        
        Every weight and bias ``v`` becomes ``lerp(v, uniform(-1, 1), amount)``.
        
        Args:
            amount: Mutation strength in [0, 1]
            rng: Random generator or seed; defaults to the network's own
        """
        if not 0.0 <= amount <= 1.0:
            raise ValueError(f"Mutation amount must be in [0, 1], got {amount}")
        
        rng = self._rng if rng is None else _as_generator(rng)
        for level in self.levels:
            level.mutate(amount, rng)
    
    def copy(
        self,
        rng: np.random.Generator | int | None = None,
    ) -> "NeuralNetwork":
        """Return an independent deep copy of this network.

        The copy gets its own generator so that mutating several copies
        of one parent does not repeat the same random draws.

        Args:
            rng: Generator or seed for the copy; derived from this
                network's generator if None
        """
        clone = copy.deepcopy(self)
        if rng is None:
            rng = int(self._rng.integers(2**32))
        clone._rng = _as_generator(rng)
        return clone
    
    def get_parameters(self) -> List[Dict[str, Any]]:
        """Get weights and biases as plain nested lists.
        
        Returns:
            One ``{"weights": [[...]], "biases": [...]}`` dict per level
        """
        return [
            {
                "weights": level.weights.tolist(),
                "biases": level.biases.tolist(),
            }
            for level in self.levels
        ]
    
    def load_parameters(self, parameters: Sequence[Dict[str, Any]]) -> None:
        """Overwrite weights and biases verbatim.
        
        Args:
            parameters: Same structure as returned by get_parameters
        """
        if len(parameters) != len(self.levels):
            raise ValueError(
                f"Expected {len(self.levels)} levels, got {len(parameters)}"
            )
        
        loaded = []
        for i, (level, params) in enumerate(zip(self.levels, parameters)):
            weights = np.asarray(params["weights"], dtype=float)
            biases = np.asarray(params["biases"], dtype=float)
            if weights.shape != level.weights.shape:
                raise ValueError(
                    f"Level {i}: weights shape {weights.shape} "
                    f"does not match {level.weights.shape}"
                )
            if biases.shape != level.biases.shape:
                raise ValueError(
                    f"Level {i}: biases shape {biases.shape} "
                    f"does not match {level.biases.shape}"
                )
            loaded.append((weights, biases))
        
        for level, (weights, biases) in zip(self.levels, loaded):
            level.weights = weights.copy()
            level.biases = biases.copy()
    
    def get_state(self) -> dict:
        """Get network activations for visualization.
        
        Returns:
            Dictionary with per-level inputs and outputs
        """
        return {
            "layer_sizes": self.layer_sizes,
            "levels": [
                {
                    "inputs": level.inputs.tolist(),
                    "outputs": level.outputs.tolist(),
                }
                for level in self.levels
            ],
        }
