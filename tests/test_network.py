"""Tests for the fixed-weight forward pass."""

import numpy as np
import pytest

from civic_intake.classifier.network import (
    HIDDEN_WEIGHTS,
    class_probabilities,
    class_scores,
    forward,
    hidden_layer,
    relu,
    softmax,
)


class TestHiddenLayer:
    """Tests for the hidden layer."""

    def test_position_weighted_sum(self):
        """Test h_k = w_k * 0.1 * sum_j x_j * (j + 1)."""
        features = np.array([1.0, 0.0, 2.0])
        # positions 1 and 3: 1*1 + 2*3 = 7
        expected = HIDDEN_WEIGHTS * 0.7
        assert hidden_layer(features) == pytest.approx(expected)

    def test_zero_input(self):
        assert hidden_layer(np.zeros(19)).tolist() == [0.0] * 8

    def test_relu_clamps_negative(self):
        assert relu(np.array([-1.0, 0.0, 2.0])).tolist() == [0.0, 0.0, 2.0]
        assert hidden_layer(np.array([-1.0])).tolist() == [0.0] * 8


class TestClassProbabilities:
    """Tests for class aggregation and softmax."""

    def test_class_scores(self):
        hidden = np.arange(1.0, 9.0)
        low, medium, high = class_scores(hidden)
        assert low == pytest.approx(0.2 * 1 + 0.3 * 2 + 0.1 * 3)
        assert medium == pytest.approx(0.4 * 4 + 0.5 * 5 + 0.4 * 6)
        assert high == pytest.approx(0.8 * 7 + 0.9 * 8)

    def test_softmax_sums_to_one(self):
        probs = softmax(np.array([1.0, 2.0, 3.0]))
        assert probs.sum() == pytest.approx(1.0)
        assert probs[2] > probs[1] > probs[0]

    def test_softmax_large_values(self):
        """Test that large scores do not overflow."""
        probs = softmax(np.array([1000.0, 1000.0, 1000.0]))
        assert probs.tolist() == pytest.approx([1 / 3] * 3)

    def test_zero_hidden_uniform(self):
        assert class_probabilities(np.zeros(8)).tolist() == pytest.approx([1 / 3] * 3)

    def test_forward(self):
        features = np.zeros(19)
        features[8] = 1.0
        hidden, probs = forward(features)
        assert hidden == pytest.approx(HIDDEN_WEIGHTS * 0.9)
        assert probs.sum() == pytest.approx(1.0)
