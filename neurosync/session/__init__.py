"""
Session orchestration

This module exposes the session object that owns a pipeline instance and its
lifecycle.
"""

from .orchestrator import NeuroSyncSession

__all__ = ['NeuroSyncSession']
