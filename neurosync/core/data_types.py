"""
Core data types for NeuroSync

This module defines the records exchanged between the pipeline stages and the
collaborators around a session: raw samples, band powers, the normalized
metric vector, adaptation profiles and the events recorded when one fires.
"""

import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from .config import CHANNEL_NAMES, CONFIDENCE_MAX, CONFIDENCE_MIN, DEFAULT_METRIC_VALUE


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """
    Clamp a value into [low, high]

    NaN maps to low and infinities to the nearest bound, so the result is
    always a finite number inside the range.
    """
    value = float(value)
    if math.isnan(value):
        return low
    return min(high, max(low, value))


def finite_or_zero(value) -> float:
    """Return value as float, or 0.0 when it is missing, non-numeric or non-finite"""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


@dataclass(frozen=True)
class Sample:
    """A single multi-channel EEG reading"""
    timestamp: float                      # Unix timestamp
    channels: Mapping[str, float]         # Channel name -> reading
    quality: float = 1.0                  # Signal quality 0-1

    def channel_value(self, name: str) -> float:
        if not self.channels:
            return 0.0
        return finite_or_zero(self.channels.get(name))

    def channel_mean(self) -> float:
        """
        Average of the fixed channel set

        Missing or non-finite channels count as 0.0 so a malformed reading
        still yields a usable scalar.
        """
        return sum(self.channel_value(name) for name in CHANNEL_NAMES) / len(CHANNEL_NAMES)

    @property
    def signal_quality(self) -> float:
        return clamp(finite_or_zero(self.quality))


@dataclass
class BandPowers:
    """Container for frequency band powers"""
    delta: float = 0.0
    theta: float = 0.0
    alpha: float = 0.0
    beta: float = 0.0
    gamma: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class MetricVector:
    """
    Normalized cognitive/affective state

    Every component is clamped to [0, 1] on construction, so no instance can
    carry an out-of-range value.
    """
    attention: float = DEFAULT_METRIC_VALUE
    relaxation: float = DEFAULT_METRIC_VALUE
    meditation: float = DEFAULT_METRIC_VALUE
    engagement: float = DEFAULT_METRIC_VALUE
    cognitive_load: float = DEFAULT_METRIC_VALUE
    fatigue: float = DEFAULT_METRIC_VALUE
    stress: float = DEFAULT_METRIC_VALUE
    flow: float = DEFAULT_METRIC_VALUE

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, clamp(getattr(self, f.name)))

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in METRIC_NAMES}

    @classmethod
    def from_dict(cls, values: Mapping[str, float]) -> "MetricVector":
        """Build a vector from a mapping; absent metrics take the neutral value"""
        return cls(**{name: values.get(name, DEFAULT_METRIC_VALUE) for name in METRIC_NAMES})


METRIC_NAMES = tuple(f.name for f in fields(MetricVector))


class UIComplexity(str, Enum):
    MINIMAL = "minimal"
    STANDARD = "standard"
    DETAILED = "detailed"


class ColorScheme(str, Enum):
    HIGH_CONTRAST = "high-contrast"
    NORMAL = "normal"
    LOW_CONTRAST = "low-contrast"


class AnimationIntensity(str, Enum):
    NONE = "none"
    SUBTLE = "subtle"
    NORMAL = "normal"
    ENHANCED = "enhanced"


class InteractionStyle(str, Enum):
    PASSIVE = "passive"
    STANDARD = "standard"
    PROACTIVE = "proactive"


class ContentDensity(str, Enum):
    SPARSE = "sparse"
    NORMAL = "normal"
    DENSE = "dense"


class CognitiveSupport(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class AdaptationDescriptor:
    """UI-adaptation policy applied when a profile fires"""
    ui_complexity: UIComplexity
    color_scheme: ColorScheme
    animation_intensity: AnimationIntensity
    interaction_style: InteractionStyle
    content_density: ContentDensity
    cognitive_support: CognitiveSupport

    def as_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name).value for f in fields(self)}


@dataclass
class AdaptationProfile:
    """Rule mapping a target mental state to an adaptation policy"""
    profile_id: str
    trigger: MetricVector
    descriptor: AdaptationDescriptor
    confidence: float = 0.8

    def __post_init__(self):
        self.confidence = clamp(self.confidence, CONFIDENCE_MIN, CONFIDENCE_MAX)

    def snapshot(self) -> "AdaptationProfile":
        # trigger and descriptor are frozen, a shallow copy is independent
        return replace(self)


@dataclass(frozen=True)
class AdaptationEvent:
    """Record of a profile selection"""
    profile: AdaptationProfile
    metrics: MetricVector
    timestamp: float
    score: float


@dataclass(frozen=True)
class FilterSettings:
    """Front-end filter settings recommended for a headset (Hz)"""
    highpass: float
    lowpass: float
    notch: float


@dataclass(frozen=True)
class DeviceInfo:
    """Description of the connected acquisition device"""
    name: str
    kind: str
    channels: int
    sample_rate: Optional[float] = None          # None: use the session's configured rate
    channel_names: Tuple[str, ...] = ()
    filter_settings: Optional[FilterSettings] = None


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


@dataclass(frozen=True)
class TargetStatus:
    """Position of a metric relative to a neuro-feedback target"""
    metric: str
    value: float
    target: float
    difference: float
    on_target: bool
    direction: str  # "on-target", "above", "below"
