"""
Shared fixtures for the NeuroSync test suite
"""

import asyncio
import math

import pytest

from neurosync.core.config import CHANNEL_NAMES
from neurosync.core.data_types import Sample
from neurosync.acquisition.sources import SyntheticSignalSource
from neurosync.session.orchestrator import NeuroSyncSession


def make_sample(value: float = 0.0, timestamp: float = 0.0, quality: float = 1.0) -> Sample:
    """Sample with every channel set to the same value"""
    return Sample(timestamp=timestamp, channels={name: value for name in CHANNEL_NAMES}, quality=quality)


def sine_samples(freq: float, n_samples: int, sample_rate: float = 256, amplitude: float = 0.5):
    """Samples carrying a pure sine on every channel"""
    return [
        make_sample(amplitude * math.sin(2 * math.pi * freq * i / sample_rate), timestamp=i / sample_rate)
        for i in range(n_samples)
    ]


@pytest.fixture
def synthetic_samples():
    """Two seconds of seeded synthetic EEG at 256 Hz."""
    return list(SyntheticSignalSource(seed=42).stream(512))


@pytest.fixture
def session():
    """A fresh, disconnected session."""
    return NeuroSyncSession()


@pytest.fixture
def connected_session():
    """A session connected to the simulator device."""
    s = NeuroSyncSession()
    assert asyncio.run(s.connect("simulator"))
    return s


@pytest.fixture(name="make_sample")
def make_sample_fixture():
    """Factory for uniform-channel samples."""
    return make_sample


@pytest.fixture(name="sine_samples")
def sine_samples_fixture():
    """Factory for pure-sine sample sequences."""
    return sine_samples
