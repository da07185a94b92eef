"""
Online confidence learning from adaptation feedback

Effectiveness ratings come from outside the pipeline (explicit user rating or
an engagement signal); this module only folds them into profile confidence.
"""

import logging
import math

from ..core.config import CONFIDENCE_MAX, CONFIDENCE_MIN, LEARNING_RATE
from ..core.data_types import clamp
from .catalog import AdaptationCatalog


class FeedbackLearner:
    """Nudge profile confidence toward observed effectiveness"""

    def __init__(self, catalog: AdaptationCatalog, learning_rate: float = LEARNING_RATE):
        self.catalog = catalog
        self.learning_rate = learning_rate

    def apply_feedback(self, profile_id: str, effectiveness: float) -> None:
        """
        Adjust a profile's confidence

        confidence += (effectiveness - 0.5) * learning_rate, then clamped to
        [CONFIDENCE_MIN, CONFIDENCE_MAX]. Unknown ids and non-numeric ratings
        are ignored; feedback is best-effort.

        Args:
            profile_id: Catalog id of the rated profile
            effectiveness: Rating in [0, 1]; out-of-range values are clamped
        """
        profile = self.catalog.get(profile_id)
        if profile is None:
            logging.debug(f"Feedback for unknown profile '{profile_id}' ignored")
            return

        try:
            effectiveness = float(effectiveness)
        except (TypeError, ValueError):
            logging.debug(f"Non-numeric feedback for '{profile_id}' ignored: {effectiveness!r}")
            return
        if math.isnan(effectiveness):
            return

        adjustment = (clamp(effectiveness) - 0.5) * self.learning_rate
        previous = profile.confidence
        profile.confidence = clamp(previous + adjustment, CONFIDENCE_MIN, CONFIDENCE_MAX)
        logging.debug(f"Confidence of '{profile_id}': {previous:.3f} -> {profile.confidence:.3f}")
