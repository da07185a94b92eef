"""
Cognitive and affective metrics from band powers

This module maps the five band powers onto the eight normalized metrics and
smooths each metric over its recent history.
"""

from collections import deque
from typing import Deque, Dict

from ..core.config import METRIC_EPSILON, SMOOTHING_DECAY, SMOOTHING_HISTORY
from ..core.data_types import METRIC_NAMES, BandPowers, MetricVector, clamp


def raw_metrics(powers: BandPowers, epsilon: float = METRIC_EPSILON) -> Dict[str, float]:
    """
    Compute unsmoothed metrics from band powers

    Ratio metrics add epsilon to their denominator; every result is clamped
    to [0, 1].

    Args:
        powers: Current band powers
        epsilon: Denominator guard

    Returns:
        Dict[str, float]: Metric name -> raw value
    """
    delta, theta, alpha = powers.delta, powers.theta, powers.alpha
    beta, gamma = powers.beta, powers.gamma

    metrics = {
        # Beta/theta ratio
        "attention": beta / (theta + epsilon),
        # Alpha prominence over fast activity
        "relaxation": alpha / (beta + gamma + epsilon),
        "meditation": (theta + alpha) / (beta + epsilon),
        "engagement": (beta + gamma) / 2,
        "cognitive_load": gamma + 0.5 * beta,
        # Slow-wave activity during wakefulness
        "fatigue": delta / (alpha + beta + epsilon),
        "stress": max(0.0, beta - alpha),
        # Balanced alpha/theta with moderate beta
        "flow": ((alpha + theta) / 2) * (1 - abs(beta - 0.3)),
    }
    return {name: clamp(value) for name, value in metrics.items()}


class MetricComputer:
    """
    Map band powers to a smoothed MetricVector

    Each metric keeps its last `history` raw values. The reported value is
    their weighted mean, the i-th oldest of n values weighted
    decay ** (n - 1 - i), so recent values dominate.
    """

    def __init__(self, decay: float = SMOOTHING_DECAY, history: int = SMOOTHING_HISTORY,
                 epsilon: float = METRIC_EPSILON):
        self.decay = decay
        self.epsilon = epsilon
        self.history: Dict[str, Deque[float]] = {name: deque(maxlen=history) for name in METRIC_NAMES}

    def smooth(self, name: str, value: float) -> float:
        """Append a raw value to a metric's history and return the smoothed value"""
        values = self.history[name]
        values.append(clamp(value))

        n = len(values)
        weights = [self.decay ** (n - 1 - i) for i in range(n)]
        smoothed = sum(w * v for w, v in zip(weights, values)) / sum(weights)
        return clamp(smoothed)

    def compute(self, powers: BandPowers) -> MetricVector:
        """
        Compute the smoothed metrics for one set of band powers

        Args:
            powers: Current band powers

        Returns:
            MetricVector: Smoothed, clamped metrics
        """
        raw = raw_metrics(powers, self.epsilon)
        return MetricVector(**{name: self.smooth(name, raw[name]) for name in METRIC_NAMES})

    def reset(self):
        for values in self.history.values():
            values.clear()
