"""
NeuroSync - Neuro-adaptive UI pipeline

A modular Python package that turns streaming multi-channel EEG samples into
normalized cognitive/affective metrics and selects UI-adaptation profiles from
them, refining profile confidence from user feedback.

Python: 3.10+
"""

__version__ = "1.0.0"

# Main package imports for easy access
from .core.config import PipelineConfig
from .core.data_types import (
    Sample, BandPowers, MetricVector, AdaptationDescriptor, AdaptationProfile,
    AdaptationEvent, DeviceInfo, ConnectionState, TargetStatus,
)
from .processing.filters import FilterBank
from .processing.features import BandPowerEstimator
from .processing.metrics import MetricComputer
from .adaptation.catalog import AdaptationCatalog
from .adaptation.selector import AdaptationSelector
from .adaptation.learner import FeedbackLearner
from .adaptation.targets import evaluate_target, state_flags
from .acquisition.sources import SyntheticSignalSource, BrainFlowSource
from .session.orchestrator import NeuroSyncSession

__all__ = [
    'PipelineConfig',
    'Sample', 'BandPowers', 'MetricVector', 'AdaptationDescriptor', 'AdaptationProfile',
    'AdaptationEvent', 'DeviceInfo', 'ConnectionState', 'TargetStatus',
    'FilterBank', 'BandPowerEstimator', 'MetricComputer',
    'AdaptationCatalog', 'AdaptationSelector', 'FeedbackLearner', 'evaluate_target', 'state_flags',
    'SyntheticSignalSource', 'BrainFlowSource',
    'NeuroSyncSession',
]
