"""
Configuration constants for NeuroSync

This module contains the tunable parameters of the neuro-adaptive pipeline:
sampling, frequency bands, metric smoothing, adaptation scoring and learning.
Module constants are the defaults; a session can override them through
PipelineConfig without touching the module.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

# ============================================================================
# SIGNAL CONFIGURATION
# ============================================================================

SAMPLE_RATE = 256                 # Nominal EEG sampling rate (Hz)
POWER_WINDOW = 128                # Filtered samples per band power estimate (~0.5 s)

# Fixed channel layout of an incoming sample (10-20 positions)
CHANNEL_NAMES = (
    "fp1", "fp2",   # Frontal pole
    "f3", "f4",     # Frontal
    "c3", "c4",     # Central
    "p3", "p4",     # Parietal
    "o1", "o2",     # Occipital
)

# Frequency Bands (Hz)
FREQ_BANDS = {
    "delta": (0.5, 4.0),    # Deep sleep, drowsiness
    "theta": (4.0, 8.0),    # Meditation, creativity
    "alpha": (8.0, 13.0),   # Relaxed awareness
    "beta": (13.0, 30.0),   # Active thinking
    "gamma": (30.0, 100.0), # High-level cognitive processing
}

# ============================================================================
# METRIC CONFIGURATION
# ============================================================================

METRIC_EPSILON = 0.001            # Guards the ratio metrics against division by zero
SMOOTHING_DECAY = 0.8             # Weight decay per step back in the smoothing history
SMOOTHING_HISTORY = 10            # Raw values kept per metric for smoothing
DEFAULT_METRIC_VALUE = 0.5        # Neutral value of every metric

# ============================================================================
# ADAPTATION CONFIGURATION
# ============================================================================

# Relative importance of each metric when matching a profile trigger
METRIC_WEIGHTS = {
    "attention": 1.2,
    "relaxation": 1.0,
    "meditation": 0.8,
    "engagement": 1.1,
    "cognitive_load": 1.3,
    "fatigue": 1.1,
    "stress": 1.2,
    "flow": 1.4,
}

ACTIVATION_THRESHOLD = 0.6        # Minimum similarity score for a profile to fire
LEARNING_RATE = 0.1               # Confidence step per unit of feedback
CONFIDENCE_MIN = 0.1
CONFIDENCE_MAX = 0.95
HISTORY_LIMIT = 100               # Adaptation events kept per session

# ============================================================================
# SESSION CONFIGURATION
# ============================================================================

CALIBRATION_MS = 30000            # Default baseline calibration window (ms)
CALIBRATION_INTERVAL_MS = 100     # Metric polling interval during calibration (ms)

# Known device kinds: display name, native sampling rate (Hz), electrode
# labels and the headset's recommended front-end filter settings (Hz)
DEVICE_PROFILES = {
    "simulator": {
        "name": "NeuroSync Simulator",
        "sample_rate": 256,
        "channels": ("FP1", "FP2", "F3", "F4", "C3", "C4", "P3", "P4", "O1", "O2"),
        "filters": {"highpass": 0.5, "lowpass": 50.0, "notch": 60.0},
    },
    "muse": {
        "name": "muse Headset",
        "sample_rate": 256,
        "channels": ("TP9", "AF7", "AF8", "TP10"),
        "filters": {"highpass": 1.0, "lowpass": 50.0, "notch": 60.0},
    },
    "emotiv": {
        "name": "emotiv Headset",
        "sample_rate": 256,
        "channels": ("AF3", "F7", "F3", "FC5", "T7", "P7", "O1",
                     "O2", "P8", "T8", "FC6", "F4", "F8", "AF4"),
        "filters": {"highpass": 0.5, "lowpass": 45.0, "notch": 60.0},
    },
    "neurosky": {
        "name": "neurosky Headset",
        "sample_rate": 512,
        "channels": ("FP1",),
        "filters": {"highpass": 3.0, "lowpass": 100.0, "notch": 60.0},
    },
}

# Mental-state flags for adaptive widgets
HIGH_LOAD_LEVEL = 0.7             # cognitive_load above this: high cognitive load
FLOW_LEVEL = 0.7                  # flow above this: in flow state
LOW_ATTENTION_LEVEL = 0.4         # attention below this: needs attention support
FATIGUE_LEVEL = 0.6               # fatigue above this: fatigued

# Communication Configuration
UDP_HOST = "127.0.0.1"            # Dashboard UDP host
UDP_PORT = 5006                   # Dashboard UDP port
STATUS_INTERVAL_SEC = 2.0         # CLI status line period


@dataclass
class PipelineConfig:
    """
    Per-session pipeline parameters

    Every field defaults to the module constant of the same purpose, so
    PipelineConfig() reproduces the standard pipeline. Values are validated
    once at construction; the pipeline assumes them sane afterwards.
    """

    sample_rate: float = SAMPLE_RATE
    freq_bands: Dict[str, Tuple[float, float]] = field(default_factory=lambda: dict(FREQ_BANDS))
    power_window: int = POWER_WINDOW
    smoothing_decay: float = SMOOTHING_DECAY
    smoothing_history: int = SMOOTHING_HISTORY
    metric_weights: Dict[str, float] = field(default_factory=lambda: dict(METRIC_WEIGHTS))
    activation_threshold: float = ACTIVATION_THRESHOLD
    learning_rate: float = LEARNING_RATE
    history_limit: int = HISTORY_LIMIT
    calibration_interval_ms: float = CALIBRATION_INTERVAL_MS

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")

        for band, (low, high) in self.freq_bands.items():
            if low <= 0 or high <= low:
                raise ValueError(f"Invalid frequency range for band '{band}': {(low, high)}")

        if self.power_window < 2:
            raise ValueError(f"power_window must be at least 2, got {self.power_window}")
        if not 0.0 < self.smoothing_decay <= 1.0:
            raise ValueError(f"smoothing_decay must be in (0, 1], got {self.smoothing_decay}")
        if self.smoothing_history < 1:
            raise ValueError(f"smoothing_history must be at least 1, got {self.smoothing_history}")

        missing = set(METRIC_WEIGHTS) - set(self.metric_weights)
        if missing:
            raise ValueError(f"metric_weights missing metrics: {sorted(missing)}")
        if any(weight <= 0 for weight in self.metric_weights.values()):
            raise ValueError("metric_weights must all be positive")

        if not 0.0 <= self.activation_threshold <= 1.0:
            raise ValueError(f"activation_threshold must be in [0, 1], got {self.activation_threshold}")
        if self.history_limit < 1:
            raise ValueError(f"history_limit must be at least 1, got {self.history_limit}")
        if self.calibration_interval_ms <= 0:
            raise ValueError("calibration_interval_ms must be positive")
