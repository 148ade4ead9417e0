"""Fixed-weight forward pass: one hidden layer with ReLU, then softmax over three classes.

Nothing here is trained. The constants are part of the scoring contract and
changing any of them changes every classification.
"""

import numpy as np

HIDDEN_WEIGHTS = np.array([0.3, 0.7, 0.5, 0.8, 0.4, 0.6, 0.9, 0.2])
INPUT_SCALE = 0.1

# Rows: Low, Medium, High. Columns: hidden units.
CLASS_WEIGHTS = np.array(
    [
        [0.2, 0.3, 0.1, 0.0, 0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.4, 0.5, 0.4, 0.0, 0.0],
        [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.8, 0.9],
    ]
)


def relu(values: np.ndarray) -> np.ndarray:
    return np.maximum(0.0, values)


def softmax(values: np.ndarray) -> np.ndarray:
    """Standard softmax, shifted by the max so large scores do not overflow."""
    exp = np.exp(values - np.max(values))
    return exp / exp.sum()


def hidden_layer(features: np.ndarray) -> np.ndarray:
    """h_k = max(0, sum_j x_j * w_k * (j + 1) * 0.1) for each of the 8 hidden weights."""
    positions = np.arange(1, len(features) + 1, dtype=float)
    weighted_input = float(np.dot(features, positions)) * INPUT_SCALE
    return relu(HIDDEN_WEIGHTS * weighted_input)


def class_scores(hidden: np.ndarray) -> np.ndarray:
    """Raw Low/Medium/High scores from the hidden vector."""
    return CLASS_WEIGHTS @ hidden


def class_probabilities(hidden: np.ndarray) -> np.ndarray:
    """Low/Medium/High probabilities, summing to 1."""
    return softmax(class_scores(hidden))


def forward(features: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Run the whole network. Returns (hidden vector, class probabilities)."""
    hidden = hidden_layer(features)
    return hidden, class_probabilities(hidden)
