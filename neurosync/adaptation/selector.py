"""
Adaptation selection

This module scores the current metric vector against every catalog profile
and picks the best match above the activation threshold.
"""

import logging
import time
from collections import deque
from dataclasses import replace
from typing import Deque, Dict, List, Optional, Tuple

from ..core.config import ACTIVATION_THRESHOLD, HISTORY_LIMIT, METRIC_WEIGHTS
from ..core.data_types import METRIC_NAMES, AdaptationEvent, AdaptationProfile, MetricVector
from .catalog import AdaptationCatalog


def similarity_score(current: MetricVector, trigger: MetricVector,
                     weights: Dict[str, float] = METRIC_WEIGHTS) -> float:
    """
    Weighted similarity between two metric vectors

    score = sum(w_m * (1 - |current_m - trigger_m|)) / sum(w_m)

    Returns:
        float: Similarity in [0, 1], 1 meaning identical vectors
    """
    total_score = 0.0
    total_weight = 0.0
    for name in METRIC_NAMES:
        weight = weights[name]
        total_score += weight * (1 - abs(getattr(current, name) - getattr(trigger, name)))
        total_weight += weight
    return total_score / total_weight


class AdaptationSelector:
    """
    Select the adaptation profile that best matches the current state

    A profile fires only when its score is strictly above the activation
    threshold. Among equal top scores the profile declared first in the
    catalog wins. Every selection is recorded in a bounded history, oldest
    entries evicted first.
    """

    def __init__(self, catalog: AdaptationCatalog,
                 weights: Dict[str, float] = METRIC_WEIGHTS,
                 threshold: float = ACTIVATION_THRESHOLD,
                 history_limit: int = HISTORY_LIMIT):
        self.catalog = catalog
        self.weights = dict(weights)
        self.threshold = threshold
        self.history: Deque[AdaptationEvent] = deque(maxlen=history_limit)

    def score_all(self, metrics: MetricVector) -> List[Tuple[AdaptationProfile, float]]:
        """Score every profile, in catalog order"""
        return [(p, similarity_score(metrics, p.trigger, self.weights)) for p in self.catalog]

    def best_match(self, metrics: MetricVector) -> Tuple[Optional[AdaptationProfile], float]:
        """
        Find the highest-scoring profile above the threshold

        Returns:
            Tuple[profile, score]: (None, best score seen) when nothing qualifies
        """
        best_profile = None
        best_score = 0.0
        for profile, score in self.score_all(metrics):
            # Strict comparison keeps the earliest of equal scores
            if best_profile is None or score > best_score:
                best_profile, best_score = profile, score

        if best_profile is None or best_score <= self.threshold:
            return None, best_score
        return best_profile, best_score

    def select(self, metrics: MetricVector, timestamp: Optional[float] = None) -> Optional[AdaptationProfile]:
        """
        Select an adaptation for the current metrics

        Args:
            metrics: Current smoothed metrics
            timestamp: Event time; defaults to now

        Returns:
            Optional[AdaptationProfile]: Snapshot of the selected profile, or None
        """
        profile, score = self.best_match(metrics)
        if profile is None:
            logging.debug(f"No adaptation above threshold {self.threshold} (best {score:.3f})")
            return None

        self.history.append(AdaptationEvent(
            profile=profile.snapshot(),
            metrics=metrics,
            timestamp=time.time() if timestamp is None else timestamp,
            score=score,
        ))
        return profile.snapshot()

    def get_history(self) -> List[AdaptationEvent]:
        """Recorded events, oldest first; each carries its own profile copy"""
        return [replace(event, profile=event.profile.snapshot()) for event in self.history]
