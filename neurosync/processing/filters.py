"""
Recursive band filters for streaming EEG

This module holds the per-sample IIR filters that split the raw signal into
brainwave bands. Unlike offline preprocessing, the filters run one sample at a
time and carry their recursive state from call to call.
"""

import logging
import math
from typing import Dict, Tuple

from scipy import signal as sp_signal

from ..core.config import FREQ_BANDS, SAMPLE_RATE

FILTER_KINDS = ("lowpass", "highpass", "bandpass")


class RecursiveFilter:
    """
    Second-order Butterworth IIR filter evaluated sample by sample

    Coefficients come from the bilinear (tangent pre-warped) Butterworth
    design. The filter keeps its three most recent inputs and outputs, so two
    instances with the same design fed the same inputs produce identical
    outputs.
    """

    def __init__(self, low_freq: float, high_freq: float, sample_rate: float = SAMPLE_RATE,
                 kind: str = "bandpass"):
        if kind not in FILTER_KINDS:
            raise ValueError(f"Unknown filter kind '{kind}', expected one of {FILTER_KINDS}")

        self.kind = kind
        self.sample_rate = sample_rate
        self.low_freq, self.high_freq = self._clamp_edges(low_freq, high_freq)
        self.b, self.a = self._design()

        self.x = [0.0, 0.0, 0.0]
        self.y = [0.0, 0.0, 0.0]

    def _clamp_edges(self, low: float, high: float) -> Tuple[float, float]:
        """Keep the band edges strictly inside (0, Nyquist)"""
        nyquist = self.sample_rate / 2
        if high >= nyquist:
            clamped = 0.99 * nyquist
            logging.warning(f"{self.kind} edge {high}Hz at or above Nyquist ({nyquist}Hz), using {clamped:.2f}Hz")
            high = clamped
        if low <= 0 or low >= high:
            raise ValueError(f"Invalid filter range ({low}, {high})Hz at {self.sample_rate}Hz")
        return low, high

    def _design(self) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
        """
        Design the filter coefficients

        A first-order Butterworth prototype becomes second order after the
        band-pass transform; the low/high-pass designs are second order
        directly. Low-pass cuts at the upper edge, high-pass at the lower one.
        """
        if self.kind == "bandpass":
            b, a = sp_signal.butter(1, [self.low_freq, self.high_freq], btype='bandpass', fs=self.sample_rate)
        elif self.kind == "lowpass":
            b, a = sp_signal.butter(2, self.high_freq, btype='lowpass', fs=self.sample_rate)
        else:
            b, a = sp_signal.butter(2, self.low_freq, btype='highpass', fs=self.sample_rate)

        return tuple(float(v) for v in b), tuple(float(v) for v in a)

    def process(self, value: float) -> float:
        """
        Filter one input sample

        Args:
            value: New raw input

        Returns:
            float: Filtered output for this sample
        """
        b, a = self.b, self.a

        self.x[2] = self.x[1]
        self.x[1] = self.x[0]
        self.x[0] = value

        output = (b[0] * self.x[0] + b[1] * self.x[1] + b[2] * self.x[2]
                  - a[1] * self.y[0] - a[2] * self.y[1])

        if not math.isfinite(output):
            # Non-finite state never decays out of the recursion
            logging.warning(f"Non-finite {self.kind} output ({self.low_freq}-{self.high_freq}Hz), resetting filter")
            self.reset()
            return 0.0

        self.y[2] = self.y[1]
        self.y[1] = self.y[0]
        self.y[0] = output

        return output

    def reset(self):
        self.x = [0.0, 0.0, 0.0]
        self.y = [0.0, 0.0, 0.0]


class FilterBank:
    """
    Independent band-pass filters, one per brainwave band

    Each band owns its own RecursiveFilter; nothing is shared between bands
    or between banks.
    """

    def __init__(self, sample_rate: float = SAMPLE_RATE,
                 freq_bands: Dict[str, Tuple[float, float]] = FREQ_BANDS):
        self.sample_rate = sample_rate
        self.freq_bands = dict(freq_bands)
        self.filters = {
            band: RecursiveFilter(low, high, sample_rate, 'bandpass')
            for band, (low, high) in self.freq_bands.items()
        }
        logging.debug(f"Filter bank designed: {list(self.filters)} @ {sample_rate}Hz")

    def process_sample(self, value: float) -> Dict[str, float]:
        """
        Run one scalar through every band filter

        Args:
            value: Raw signal value

        Returns:
            Dict[str, float]: Band name -> filtered value
        """
        return {band: f.process(value) for band, f in self.filters.items()}

    def reset(self):
        for f in self.filters.values():
            f.reset()
