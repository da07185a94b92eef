"""
Neuro-feedback targets

Helpers for feedback displays that show a user how far a metric is from a
goal value, and the mental-state flags adaptive widgets key off.
"""

from typing import Dict

from ..core.config import FATIGUE_LEVEL, FLOW_LEVEL, HIGH_LOAD_LEVEL, LOW_ATTENTION_LEVEL
from ..core.data_types import METRIC_NAMES, MetricVector, TargetStatus, clamp


def evaluate_target(metrics: MetricVector, metric: str, target: float = 0.8,
                    tolerance: float = 0.1) -> TargetStatus:
    """
    Compare one metric with its target

    Args:
        metrics: Current metrics
        metric: Metric name, e.g. "attention"
        target: Goal value in [0, 1]
        tolerance: Distance still counted as on target (exclusive)

    Returns:
        TargetStatus: Value, signed difference and direction
    """
    if metric not in METRIC_NAMES:
        raise ValueError(f"Unknown metric '{metric}', expected one of {METRIC_NAMES}")

    value = getattr(metrics, metric)
    target = clamp(target)
    difference = value - target
    on_target = abs(difference) < tolerance

    if on_target:
        direction = "on-target"
    elif difference > 0:
        direction = "above"
    else:
        direction = "below"

    return TargetStatus(
        metric=metric,
        value=value,
        target=target,
        difference=difference,
        on_target=on_target,
        direction=direction,
    )


def is_high_cognitive_load(metrics: MetricVector) -> bool:
    return metrics.cognitive_load > HIGH_LOAD_LEVEL


def is_in_flow_state(metrics: MetricVector) -> bool:
    return metrics.flow > FLOW_LEVEL


def needs_attention_support(metrics: MetricVector) -> bool:
    return metrics.attention < LOW_ATTENTION_LEVEL


def is_fatigued(metrics: MetricVector) -> bool:
    return metrics.fatigue > FATIGUE_LEVEL


def state_flags(metrics: MetricVector) -> Dict[str, bool]:
    """
    Coarse mental-state flags for adaptive widgets

    Each flag compares one metric with a fixed level, independent of the
    adaptation selector, so widgets can react without waiting for a profile
    to fire.

    Returns:
        Dict[str, bool]: Flag name -> active
    """
    return {
        "high_cognitive_load": is_high_cognitive_load(metrics),
        "in_flow_state": is_in_flow_state(metrics),
        "needs_attention_support": needs_attention_support(metrics),
        "fatigued": is_fatigued(metrics),
    }
