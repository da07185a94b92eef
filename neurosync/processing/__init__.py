"""
EEG signal processing components

This module contains the streaming stages of the pipeline: band filtering,
band power estimation and metric computation.
"""

from .filters import RecursiveFilter, FilterBank
from .features import BandPowerEstimator
from .metrics import MetricComputer, raw_metrics

__all__ = ['RecursiveFilter', 'FilterBank', 'BandPowerEstimator', 'MetricComputer', 'raw_metrics']
