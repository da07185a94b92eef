"""
EEG sample sources

This module provides sample producers that feed a session: a synthetic
generator for development and testing, and a BrainFlow board reader. Both
only produce Sample records; the session consumes them through
process_signal.
"""

import logging
import math
import time
from typing import Iterator, List, Optional

import numpy as np

from ..core.config import CHANNEL_NAMES, SAMPLE_RATE
from ..core.data_types import Sample

BRAINFLOW_BOARDS = ("synthetic", "cyton", "cyton-daisy", "ganglion")


class SyntheticSignalSource:
    """
    Generate synthetic EEG samples

    Alpha (10 Hz), beta (20 Hz) and theta (6 Hz) rhythms are mixed per
    channel the way they dominate over the scalp: alpha occipitally, beta
    frontally, theta parietally. Alpha and beta amplitudes drift slowly in
    opposite phase so the mental state, and hence the adaptation, changes
    over time. Time advances by sample index, so a given seed always produces
    the same sequence.
    """

    def __init__(self, sample_rate: float = SAMPLE_RATE, seed: Optional[int] = None,
                 noise: float = 0.05, state_cycle_sec: float = 20.0):
        self.sample_rate = sample_rate
        self.noise = noise
        self.state_cycle_sec = state_cycle_sec
        self.rng = np.random.default_rng(seed)
        self.n_samples = 0

    def next_sample(self, timestamp: Optional[float] = None) -> Sample:
        """
        Generate the next sample

        Args:
            timestamp: Sample timestamp; defaults to the source's own clock

        Returns:
            Sample: Ten-channel reading
        """
        t = self.n_samples / self.sample_rate
        self.n_samples += 1

        phase = 2 * math.pi * t / self.state_cycle_sec
        alpha = (0.3 + 0.15 * math.sin(phase)) * math.sin(2 * math.pi * 10 * t)
        beta = (0.2 + 0.1 * math.cos(phase)) * math.sin(2 * math.pi * 20 * t)
        theta = 0.4 * math.sin(2 * math.pi * 6 * t)

        noise = self.rng.normal(0.0, self.noise, size=len(CHANNEL_NAMES))
        mix = {
            "fp1": alpha + beta * 0.5,
            "fp2": alpha + beta * 0.5,
            "f3": beta + theta * 0.3,
            "f4": beta + theta * 0.3,
            "c3": alpha,
            "c4": alpha,
            "p3": theta + alpha * 0.2,
            "p4": theta + alpha * 0.2,
            "o1": alpha * 0.8,
            "o2": alpha * 0.8,
        }
        channels = {name: float(mix[name] + n) for name, n in zip(CHANNEL_NAMES, noise)}

        return Sample(
            timestamp=t if timestamp is None else timestamp,
            channels=channels,
            quality=float(0.8 + 0.2 * self.rng.random()),
        )

    def stream(self, n_samples: int) -> Iterator[Sample]:
        for _ in range(n_samples):
            yield self.next_sample()


class BrainFlowSource:
    """
    Read EEG samples from a BrainFlow board

    The board's EEG channels are mapped onto the fixed channel names in
    order; boards with fewer channels leave the rest missing, which the
    pipeline treats as zero.
    """

    def __init__(self, board: str = "synthetic", serial_port: str = "", scale: float = 0.01):
        self.board_name = board
        self.serial_port = serial_port
        self.scale = scale  # BrainFlow reports microvolts
        self.board = None
        self.eeg_channels: List[int] = []
        self.sample_rate = SAMPLE_RATE
        self.is_connected = False

    def connect(self) -> bool:
        """
        Prepare the board session and start streaming

        Returns:
            bool: True if connection successful, False otherwise
        """
        if self.board_name not in BRAINFLOW_BOARDS:
            logging.error(f"Unknown BrainFlow board '{self.board_name}', available: {BRAINFLOW_BOARDS}")
            return False

        try:
            from brainflow.board_shim import BoardShim, BrainFlowInputParams, BoardIds

            board_ids = {
                "synthetic": BoardIds.SYNTHETIC_BOARD,
                "cyton": BoardIds.CYTON_BOARD,
                "cyton-daisy": BoardIds.CYTON_DAISY_BOARD,
                "ganglion": BoardIds.GANGLION_BOARD,
            }
            board_id = board_ids[self.board_name]

            params = BrainFlowInputParams()
            params.serial_port = self.serial_port
            self.board = BoardShim(board_id, params)

            self.eeg_channels = BoardShim.get_eeg_channels(board_id)
            self.sample_rate = BoardShim.get_sampling_rate(board_id)
            logging.info(f"BrainFlow EEG channels: {self.eeg_channels}")
            logging.info(f"Sampling rate: {self.sample_rate} Hz")

            self.board.prepare_session()
            self.board.start_stream()

            self.is_connected = True
            logging.info(f"Connected to BrainFlow board '{self.board_name}'")
            return True

        except Exception as e:
            logging.error(f"BrainFlow connection failed: {e}")
            logging.error("Hint: Check the serial port, ensure the board is on, and no other software is using it")
            return False

    def read_samples(self) -> List[Sample]:
        """
        Drain the samples buffered on the board since the last call

        Returns:
            List[Sample]: Samples in arrival order, empty on failure
        """
        if not self.is_connected:
            return []

        try:
            data = self.board.get_board_data()
        except Exception as e:
            logging.error(f"Failed to get data: {e}")
            return []

        now = time.time()
        n = data.shape[1]
        samples = []
        for i in range(n):
            channels = {
                name: float(data[ch, i]) * self.scale
                for name, ch in zip(CHANNEL_NAMES, self.eeg_channels)
            }
            samples.append(Sample(timestamp=now - (n - 1 - i) / self.sample_rate, channels=channels))
        return samples

    def disconnect(self):
        """Clean disconnect from the board"""
        try:
            if self.board is not None:
                self.board.stop_stream()
                self.board.release_session()
                logging.info("BrainFlow disconnected")
        except Exception as e:
            logging.error(f"Disconnect error: {e}")
        finally:
            self.board = None
            self.is_connected = False
