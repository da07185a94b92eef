"""
NeuroSync session orchestration

This module ties the pipeline together. A session owns one filter bank, power
estimator, metric computer and adaptation selector for its lifetime, drives
every incoming sample through them, and exposes the resulting state to UI
collaborators.

Lifecycle:
    DISCONNECTED -> CONNECTING -> CONNECTED -> DISCONNECTED
Calibration runs only while CONNECTED and settles as soon as the session
disconnects.

A session is single-writer: process_signal must be called in sequence from
one task. Independent sessions share nothing and may run in parallel.
"""

import asyncio
import logging
import math
from typing import Callable, Dict, List, Optional

import numpy as np

from ..core.config import CALIBRATION_MS, PipelineConfig
from ..core.data_types import (
    METRIC_NAMES, AdaptationEvent, AdaptationProfile, ConnectionState,
    DeviceInfo, MetricVector, Sample,
)
from ..processing.filters import FilterBank
from ..processing.features import BandPowerEstimator
from ..processing.metrics import MetricComputer
from ..adaptation.catalog import AdaptationCatalog
from ..adaptation.selector import AdaptationSelector
from ..adaptation.learner import FeedbackLearner
from ..adaptation.targets import state_flags
from ..acquisition.devices import DeviceConnector, connect_device

MetricsListener = Callable[[MetricVector], None]
AdaptationListener = Callable[[Optional[AdaptationProfile]], None]


class NeuroSyncSession:
    """
    Neuro-adaptive session

    Consumes samples through process_signal and maintains the current
    metrics, the current adaptation and a bounded adaptation history.
    Feedback on applied adaptations flows back through provide_feedback.
    """

    def __init__(self, config: Optional[PipelineConfig] = None,
                 connector: Optional[DeviceConnector] = None,
                 catalog: Optional[AdaptationCatalog] = None):
        self.config = config if config is not None else PipelineConfig()
        self.connector = connector if connector is not None else connect_device
        self.catalog = catalog if catalog is not None else AdaptationCatalog()

        self.selector = AdaptationSelector(
            self.catalog,
            weights=self.config.metric_weights,
            threshold=self.config.activation_threshold,
            history_limit=self.config.history_limit,
        )
        self.learner = FeedbackLearner(self.catalog, self.config.learning_rate)

        self.state = ConnectionState.DISCONNECTED
        self.device_info: Optional[DeviceInfo] = None
        self.last_error: Optional[str] = None
        self.current_metrics = MetricVector()
        self.current_adaptation: Optional[AdaptationProfile] = None
        self._baseline: Dict[str, float] = {}

        self._metrics_listeners: List[MetricsListener] = []
        self._adaptation_listeners: List[AdaptationListener] = []
        self._calibration_stop: Optional[asyncio.Event] = None
        self._connect_attempt = 0

        self.sample_rate = self.config.sample_rate
        self._reset_pipeline()

    def _reset_pipeline(self):
        """Replace every stateful pipeline stage with a fresh instance"""
        self.filter_bank = FilterBank(self.sample_rate, self.config.freq_bands)
        self.power_estimator = BandPowerEstimator(self.config.freq_bands, self.config.power_window)
        self.metric_computer = MetricComputer(self.config.smoothing_decay, self.config.smoothing_history)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    @property
    def is_calibrating(self) -> bool:
        return self._calibration_stop is not None

    async def connect(self, device_kind: str = "simulator") -> bool:
        """
        Connect to an acquisition device

        Failures are reported, not raised: the session returns to
        DISCONNECTED, keeps the error message in last_error and stays usable
        for a retry.

        Args:
            device_kind: Kind passed to the connector

        Returns:
            bool: True if the session is now connected
        """
        if self.state is ConnectionState.CONNECTED:
            logging.warning(f"Already connected to {self.device_info.name}")
            return True
        if self.state is ConnectionState.CONNECTING:
            logging.warning("Connection already in progress")
            return False

        self._connect_attempt += 1
        attempt = self._connect_attempt
        self.state = ConnectionState.CONNECTING
        self.last_error = None

        try:
            device_info = await self.connector(device_kind)
        except Exception as e:
            if attempt != self._connect_attempt:
                logging.debug(f"Stale connection attempt to {device_kind} failed: {e}")
                return False
            self.last_error = str(e)
            self.state = ConnectionState.DISCONNECTED
            logging.error(f"Failed to connect to {device_kind} device: {e}")
            return False

        if attempt != self._connect_attempt:
            # disconnect() ran while the connector was pending; a newer
            # attempt may own the session by now
            if self.state is ConnectionState.DISCONNECTED:
                self.last_error = "Connection cancelled"
            logging.warning(f"Connection to {device_kind} device cancelled")
            return False

        sample_rate = self._device_sample_rate(device_info)
        try:
            self.sample_rate = sample_rate
            self._reset_pipeline()
        except ValueError as e:
            self.last_error = f"Cannot process {sample_rate}Hz stream: {e}"
            self.state = ConnectionState.DISCONNECTED
            self.sample_rate = self.config.sample_rate
            self._reset_pipeline()
            logging.error(f"Failed to connect to {device_kind} device: {self.last_error}")
            return False

        self.device_info = device_info
        self.state = ConnectionState.CONNECTED
        logging.info(f"Connected to {device_info.name} ({device_info.channels} channels @ {sample_rate}Hz)")
        return True

    def _device_sample_rate(self, device_info: DeviceInfo) -> float:
        """The device's native rate, or the configured rate if it reports none usable"""
        rate = device_info.sample_rate
        if rate is None:
            return self.config.sample_rate
        try:
            rate = float(rate)
        except (TypeError, ValueError):
            rate = float('nan')
        if not math.isfinite(rate) or rate <= 0:
            logging.warning(f"Ignoring invalid device sample rate {device_info.sample_rate!r}, "
                            f"using {self.config.sample_rate}Hz")
            return self.config.sample_rate
        return rate

    def disconnect(self):
        """
        Disconnect and reset the pipeline

        Filters, power windows and metric history are rebuilt so a later
        connect() starts clean, at the configured sample rate until a device
        reports its own. Any calibration in flight settles with the data
        gathered so far and no longer blocks a new one. Adaptation history is
        kept.
        """
        if self._calibration_stop is not None:
            self._calibration_stop.set()
            self._calibration_stop = None

        # Invalidates any connect() still awaiting its connector
        self._connect_attempt += 1

        was_connected = self.is_connected
        self.state = ConnectionState.DISCONNECTED
        self.device_info = None
        self.current_metrics = MetricVector()
        self.sample_rate = self.config.sample_rate
        self._reset_pipeline()

        if was_connected:
            logging.info("Session disconnected")

    def get_device_info(self) -> Optional[DeviceInfo]:
        return self.device_info

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def process_signal(self, sample: Sample) -> MetricVector:
        """
        Run one sample through the full pipeline

        Ignored unless connected. Malformed channels count as zero rather
        than interrupting the stream.

        Args:
            sample: Incoming EEG reading

        Returns:
            MetricVector: Updated current metrics
        """
        if self.state is not ConnectionState.CONNECTED:
            return self.current_metrics

        filtered = self.filter_bank.process_sample(sample.channel_mean())
        powers = self.power_estimator.estimate(filtered)
        metrics = self.metric_computer.compute(powers)
        self.current_metrics = metrics
        self._notify(self._metrics_listeners, metrics)

        profile = self.selector.select(metrics)
        if profile is not None:
            previous = self.current_adaptation
            self.current_adaptation = profile
            if previous is None or previous.profile_id != profile.profile_id:
                logging.info(f"Adaptation changed: {previous.profile_id if previous else None} -> {profile.profile_id}")
                self._notify(self._adaptation_listeners, profile.snapshot())

        return metrics

    def get_current_metrics(self) -> MetricVector:
        return self.current_metrics

    def get_current_adaptation(self) -> Optional[AdaptationProfile]:
        if self.current_adaptation is None:
            return None
        return self.current_adaptation.snapshot()

    def get_state_flags(self) -> Dict[str, bool]:
        """Mental-state flags for the current metrics"""
        return state_flags(self.current_metrics)

    def get_adaptation_history(self) -> List[AdaptationEvent]:
        return self.selector.get_history()

    def provide_feedback(self, profile_id: str, effectiveness: float) -> None:
        """Report how well an applied adaptation worked (0 = not at all, 1 = fully)"""
        self.learner.apply_feedback(profile_id, effectiveness)

    # ------------------------------------------------------------------
    # Calibration
    # ------------------------------------------------------------------

    @property
    def baseline(self) -> Dict[str, float]:
        return dict(self._baseline)

    async def calibrate_baseline(self, duration_ms: float = CALIBRATION_MS) -> Dict[str, float]:
        """
        Average the current metrics over a time window

        The metrics are polled every calibration_interval_ms; samples must
        keep arriving through process_signal meanwhile. A completed run
        replaces the stored baseline. If the session disconnects mid-run the
        call returns the partial averages and leaves the stored baseline
        untouched.

        Args:
            duration_ms: Calibration window length

        Returns:
            Dict[str, float]: Metric name -> mean value, empty if not connected
        """
        if not self.is_connected:
            logging.error("Cannot calibrate: session not connected")
            return {}
        if self._calibration_stop is not None:
            logging.warning("Calibration already in progress")
            return {}

        loop = asyncio.get_running_loop()
        stop = asyncio.Event()
        self._calibration_stop = stop
        interval = self.config.calibration_interval_ms / 1000.0
        deadline = loop.time() + max(0.0, duration_ms) / 1000.0
        collected: List[MetricVector] = []

        logging.info(f"Starting baseline calibration ({duration_ms:.0f} ms)")
        try:
            while True:
                collected.append(self.current_metrics)
                remaining = deadline - loop.time()
                if remaining <= 0:
                    break
                try:
                    await asyncio.wait_for(stop.wait(), timeout=min(interval, remaining))
                    break
                except asyncio.TimeoutError:
                    continue
        finally:
            if self._calibration_stop is stop:
                self._calibration_stop = None

        averages = {
            name: float(np.mean([getattr(m, name) for m in collected]))
            for name in METRIC_NAMES
        }

        if stop.is_set():
            logging.warning(f"Calibration interrupted after {len(collected)} readings; baseline unchanged")
            return dict(averages)

        self._baseline = averages
        logging.info(f"Calibration complete ({len(collected)} readings)")
        return dict(averages)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_metrics_listener(self, callback: MetricsListener):
        self._metrics_listeners.append(callback)

    def remove_metrics_listener(self, callback: MetricsListener):
        if callback in self._metrics_listeners:
            self._metrics_listeners.remove(callback)

    def add_adaptation_listener(self, callback: AdaptationListener):
        self._adaptation_listeners.append(callback)

    def remove_adaptation_listener(self, callback: AdaptationListener):
        if callback in self._adaptation_listeners:
            self._adaptation_listeners.remove(callback)

    def _notify(self, listeners: list, payload):
        for callback in list(listeners):
            try:
                callback(payload)
            except Exception as e:
                logging.error(f"Listener {getattr(callback, '__name__', callback)} failed: {e}")
