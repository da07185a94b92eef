"""
Windowed band power estimation

This module turns the per-sample output of the filter bank into band powers,
using a sliding window of recent filtered values per band.
"""

from collections import deque
from typing import Deque, Dict, Iterable

import numpy as np

from ..core.config import FREQ_BANDS, POWER_WINDOW
from ..core.data_types import BandPowers, finite_or_zero


class BandPowerEstimator:
    """
    Estimate band power from a stream of filtered samples

    Power is the RMS deviation of the last `window` filtered values from
    their mean. Until a band's window is full its power is reported as 0.
    """

    def __init__(self, bands: Iterable[str] = FREQ_BANDS, window: int = POWER_WINDOW):
        self.window = window
        self.buffers: Dict[str, Deque[float]] = {band: deque(maxlen=window) for band in bands}

    def estimate_power(self, filtered_value: float, band: str) -> float:
        """
        Push one filtered value and return the band's current power

        Args:
            filtered_value: Output of the band's filter for this sample
            band: Band name

        Returns:
            float: RMS power (>= 0), or 0.0 while the window is warming up
        """
        buffer = self.buffers.setdefault(band, deque(maxlen=self.window))
        buffer.append(finite_or_zero(filtered_value))

        if len(buffer) < self.window:
            return 0.0

        power = float(np.std(np.fromiter(buffer, dtype=float, count=len(buffer))))
        return power if np.isfinite(power) else 0.0

    def estimate(self, filtered: Dict[str, float]) -> BandPowers:
        """
        Estimate the power of every band for one filtered sample

        Args:
            filtered: Band name -> filtered value, as returned by FilterBank

        Returns:
            BandPowers: Current band powers
        """
        powers = BandPowers()
        for band, value in filtered.items():
            power = self.estimate_power(value, band)
            if hasattr(powers, band):
                setattr(powers, band, power)
        return powers

    def is_warm(self) -> bool:
        """True once every band has a full window"""
        return all(len(buffer) >= self.window for buffer in self.buffers.values())

    def reset(self):
        for buffer in self.buffers.values():
            buffer.clear()
