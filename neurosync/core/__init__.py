"""
Core data types and configuration for NeuroSync

This module contains the fundamental records and tunables shared by every
pipeline stage.
"""

from .data_types import (
    Sample, BandPowers, MetricVector, METRIC_NAMES,
    UIComplexity, ColorScheme, AnimationIntensity, InteractionStyle,
    ContentDensity, CognitiveSupport, AdaptationDescriptor,
    AdaptationProfile, AdaptationEvent, FilterSettings, DeviceInfo, ConnectionState,
    TargetStatus, clamp,
)
from .config import PipelineConfig

__all__ = [
    'Sample', 'BandPowers', 'MetricVector', 'METRIC_NAMES',
    'UIComplexity', 'ColorScheme', 'AnimationIntensity', 'InteractionStyle',
    'ContentDensity', 'CognitiveSupport', 'AdaptationDescriptor',
    'AdaptationProfile', 'AdaptationEvent', 'FilterSettings', 'DeviceInfo', 'ConnectionState',
    'TargetStatus', 'clamp', 'PipelineConfig',
]
