"""
EEG data acquisition

This module holds the collaborators that sit in front of a session: the
device connector and the sample sources.
"""

from .devices import connect_device, device_info_from_preset, DeviceConnector
from .sources import SyntheticSignalSource, BrainFlowSource

__all__ = ['connect_device', 'device_info_from_preset', 'DeviceConnector', 'SyntheticSignalSource', 'BrainFlowSource']
