"""Basic tests for the DriveNet network module."""

import pytest
import numpy as np

from drivenet.ml.network import Level, NeuralNetwork


class TestLevel:
    """Test single threshold level."""
    
    def test_level_shapes(self):
        """Test weights and biases have the right shapes."""
        level = Level(3, 2, rng=0)
        
        assert level.weights.shape == (3, 2)
        assert level.biases.shape == (2,)
        assert level.input_count == 3
        assert level.output_count == 2
        
    def test_parameters_in_range(self):
        """Test random parameters are drawn from [-1, 1]."""
        level = Level(20, 20, rng=1)
        
        assert np.all(level.weights >= -1.0) and np.all(level.weights <= 1.0)
        assert np.all(level.biases >= -1.0) and np.all(level.biases <= 1.0)
        
    def test_threshold(self):
        """Test output is 1 only when the sum exceeds the bias."""
        level = Level(2, 1, rng=0)
        level.weights = np.array([[1.0], [1.0]])
        level.biases = np.array([0.5])
        
        assert level.feed_forward([0.3, 0.3]).tolist() == [1.0]
        assert level.feed_forward([0.2, 0.2]).tolist() == [0.0]
        
    def test_sum_equal_to_bias_is_off(self):
        """Test a sum equal to the bias gives 0."""
        level = Level(2, 1, rng=0)
        level.weights = np.array([[1.0], [0.0]])
        level.biases = np.array([0.5])
        
        assert level.feed_forward([0.5, 0.0]).tolist() == [0.0]
        
    def test_stores_activations(self):
        """Test inputs and outputs are kept for visualization."""
        level = Level(2, 3, rng=0)
        outputs = level.feed_forward([0.1, 0.9])
        
        assert level.inputs.tolist() == [0.1, 0.9]
        assert level.outputs.tolist() == outputs.tolist()
        
    def test_wrong_input_length(self):
        """Test mismatched input length fails fast."""
        level = Level(3, 2, rng=0)
        
        with pytest.raises(ValueError):
            level.feed_forward([1.0, 0.0])
        with pytest.raises(ValueError):
            level.feed_forward([1.0, 0.0, 0.0, 0.0])
            
    def test_invalid_size(self):
        """Test zero-width levels are rejected."""
        with pytest.raises(ValueError):
            Level(0, 4)


class TestNeuralNetwork:
    """Test feed-forward network."""
    
    def test_network_shape(self):
        """Test widths [5, 6, 4] build two levels 5->6 and 6->4."""
        network = NeuralNetwork([5, 6, 4], rng=0)
        
        assert len(network.levels) == 2
        assert network.levels[0].weights.shape == (5, 6)
        assert network.levels[1].weights.shape == (6, 4)
        assert network.layer_sizes == [5, 6, 4]
        
    def test_outputs_are_binary(self):
        """Test outputs have the last width and are all 0 or 1."""
        network = NeuralNetwork([5, 6, 4], rng=0)
        rng = np.random.default_rng(7)
        
        for _ in range(20):
            outputs = network.feed_forward(rng.uniform(0, 1, size=5))
            assert len(outputs) == 4
            assert all(value in (0.0, 1.0) for value in outputs)
            
    def test_levels_are_chained(self):
        """Test each level feeds the next one in order."""
        network = NeuralNetwork([4, 5, 3, 2], rng=3)
        given = [0.2, 0.0, 0.7, 1.0]
        
        outputs = network.feed_forward(given)
        
        expected = given
        for level in network.levels:
            sums = np.asarray(expected) @ level.weights
            expected = np.where(sums > level.biases, 1.0, 0.0)
        assert outputs.tolist() == expected.tolist()
        assert network.levels[1].inputs.tolist() == network.levels[0].outputs.tolist()
        
    def test_too_few_widths(self):
        """Test a single width is rejected."""
        with pytest.raises(ValueError):
            NeuralNetwork([5])
            
    def test_wrong_input_length(self):
        """Test mismatched input length fails fast."""
        network = NeuralNetwork([5, 6, 4], rng=0)
        
        with pytest.raises(ValueError):
            network.feed_forward([0.0] * 6)
            
    def test_seed_reproducible(self):
        """Test the same seed gives the same parameters."""
        first = NeuralNetwork([5, 6, 4], rng=11)
        second = NeuralNetwork([5, 6, 4], rng=11)
        
        assert first.get_parameters() == second.get_parameters()
        
    def test_mutate_zero_is_identity(self):
        """Test mutate(0) changes nothing."""
        network = NeuralNetwork([5, 6, 4], rng=0)
        before = network.get_parameters()
        
        network.mutate(0.0)
        
        assert network.get_parameters() == before
        
    def test_mutate_one_randomizes(self):
        """Test mutate(1) gives values unrelated to the old ones."""
        network = NeuralNetwork([60, 60], rng=5)
        before = network.levels[0].weights.copy()
        
        network.mutate(1.0)
        after = network.levels[0].weights
        
        correlation = np.corrcoef(before.ravel(), after.ravel())[0, 1]
        assert abs(correlation) < 0.1
        assert np.all(np.abs(after) <= 1.0 + 1e-12)
        
    def test_mutate_partial_moves_toward_random(self):
        """Test small mutations stay close to the old values."""
        network = NeuralNetwork([10, 10], rng=2)
        before = network.levels[0].weights.copy()
        
        network.mutate(0.1)
        
        delta = np.abs(network.levels[0].weights - before)
        assert np.all(delta <= 0.2 + 1e-12)
        assert np.any(delta > 0)
        
    def test_mutate_rejects_bad_amount(self):
        """Test mutation amount must be within [0, 1]."""
        network = NeuralNetwork([2, 2], rng=0)
        
        with pytest.raises(ValueError):
            network.mutate(1.5)
        with pytest.raises(ValueError):
            network.mutate(-0.1)
            
    def test_copy_is_independent(self):
        """Test mutating a copy leaves the parent untouched."""
        parent = NeuralNetwork([5, 6, 4], rng=0)
        before = parent.get_parameters()
        
        first = parent.copy()
        second = parent.copy()
        first.mutate(0.5)
        second.mutate(0.5)
        
        assert parent.get_parameters() == before
        assert first.get_parameters() != second.get_parameters()
        
    def test_load_parameters(self):
        """Test parameters can be written back verbatim."""
        source = NeuralNetwork([5, 6, 4], rng=1)
        target = NeuralNetwork([5, 6, 4], rng=2)
        
        target.load_parameters(source.get_parameters())
        
        assert target.get_parameters() == source.get_parameters()
        
    def test_load_parameters_shape_mismatch(self):
        """Test loading parameters of another shape is rejected."""
        source = NeuralNetwork([5, 7, 4], rng=1)
        target = NeuralNetwork([5, 6, 4], rng=2)
        before = target.get_parameters()
        
        with pytest.raises(ValueError):
            target.load_parameters(source.get_parameters())
        assert target.get_parameters() == before
