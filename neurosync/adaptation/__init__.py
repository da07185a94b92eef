"""
Neuro-adaptive decision components

This module implements the adaptation catalog, the similarity-based
selector, confidence learning from feedback and neuro-feedback targets.
"""

from .catalog import AdaptationCatalog, default_profiles
from .selector import AdaptationSelector, similarity_score
from .learner import FeedbackLearner
from .targets import (
    evaluate_target, state_flags, is_high_cognitive_load, is_in_flow_state,
    needs_attention_support, is_fatigued,
)

__all__ = [
    'AdaptationCatalog', 'default_profiles',
    'AdaptationSelector', 'similarity_score',
    'FeedbackLearner', 'evaluate_target', 'state_flags',
    'is_high_cognitive_load', 'is_in_flow_state', 'needs_attention_support', 'is_fatigued',
]
