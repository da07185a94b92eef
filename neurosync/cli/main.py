"""
Main CLI entry point for NeuroSync

This module provides the command-line interface and the processing loop that
drives a session from a sample source.
"""

import argparse
import asyncio
import logging
import sys
import time
from dataclasses import replace
from typing import List, Optional

from ..core.config import (
    CALIBRATION_INTERVAL_MS, DEVICE_PROFILES, STATUS_INTERVAL_SEC,
    UDP_HOST, UDP_PORT, PipelineConfig,
)
from ..adaptation.catalog import AdaptationCatalog
from ..acquisition.devices import connect_device
from ..acquisition.sources import BRAINFLOW_BOARDS, BrainFlowSource, SyntheticSignalSource
from ..communication.dashboard_sender import DashboardSender
from ..session.orchestrator import NeuroSyncSession


def print_status(session: NeuroSyncSession):
    metrics = session.get_current_metrics()
    adaptation = session.get_current_adaptation()
    label = adaptation.profile_id if adaptation else "none"
    print(f"Att: {metrics.attention:.2f} | Relax: {metrics.relaxation:.2f} | "
          f"Load: {metrics.cognitive_load:.2f} | Fatigue: {metrics.fatigue:.2f} | "
          f"Flow: {metrics.flow:.2f} | Adaptation: {label}")
    active = [name for name, on in session.get_state_flags().items() if on]
    if active:
        print(f"  States: {', '.join(active)}")


def print_profiles(catalog: AdaptationCatalog):
    print("Adaptation profiles:")
    print("-" * 60)
    for profile in catalog:
        trigger = ", ".join(
            f"{name}={value:.2f}" for name, value in profile.trigger.as_dict().items() if value != 0.5
        )
        print(f"{profile.profile_id:20} confidence {profile.confidence:.2f}  trigger: {trigger}")
        print(f"{'':20} {profile.descriptor.as_dict()}")


async def feed_samples(session: NeuroSyncSession, source, n_samples: int, realtime: bool,
                       sample_rate: float, sender: Optional[DashboardSender] = None) -> int:
    """
    Drive the session from a sample source

    Args:
        session: Connected session
        source: SyntheticSignalSource or connected BrainFlowSource
        n_samples: Samples to process, 0 to run until disconnected
        realtime: Pace synthetic samples at the sampling rate
        sample_rate: Samples per second, for status pacing
        sender: Optional dashboard publisher

    Returns:
        int: Number of samples processed
    """
    status_every = max(1, int(STATUS_INTERVAL_SEC * sample_rate))
    batch = max(1, int(sample_rate / 20))  # ~50 ms of data per loop
    processed = 0

    while session.is_connected and (n_samples == 0 or processed < n_samples):
        if isinstance(source, BrainFlowSource):
            samples = source.read_samples()
        else:
            samples = [source.next_sample(time.time() if realtime else None) for _ in range(batch)]

        for sample in samples:
            if n_samples and processed >= n_samples:
                break
            session.process_signal(sample)
            processed += 1
            if processed % status_every == 0:
                print_status(session)

        if sender is not None:
            sender.send_update(time.time(), session.get_current_metrics(),
                               session.get_current_adaptation(), session.get_device_info())

        # Yield to a concurrent calibration; pace real streams
        await asyncio.sleep(batch / sample_rate if realtime or isinstance(source, BrainFlowSource) else 0)

    return processed


async def run_session(args: argparse.Namespace) -> int:
    """
    Connect a session, optionally calibrate, and process samples

    Returns:
        int: Process exit code
    """
    if args.source == "brainflow":
        source = BrainFlowSource(board=args.board, serial_port=args.serial_port)
        if not source.connect():
            logging.error("Failed to connect to BrainFlow board")
            return 1
        sample_rate = source.sample_rate
    else:
        sample_rate = args.fs if args.fs else DEVICE_PROFILES[args.device]["sample_rate"]
        source = SyntheticSignalSource(sample_rate=sample_rate, seed=args.seed)

    async def stream_connector(kind: str):
        # The pipeline runs at the rate of the stream actually fed to it
        info = await connect_device(kind)
        return replace(info, sample_rate=sample_rate)

    session = NeuroSyncSession(PipelineConfig(
        sample_rate=sample_rate,
        calibration_interval_ms=args.calibration_interval,
    ), connector=stream_connector)
    sender = None if args.no_udp else DashboardSender(args.udp_host, args.udp_port)

    try:
        if not await session.connect(args.device):
            logging.error(f"Failed to connect session: {session.last_error}")
            return 1

        feeder = asyncio.create_task(
            feed_samples(session, source, args.samples, args.realtime, sample_rate, sender)
        )
        if args.calibrate_ms > 0:
            baseline = await session.calibrate_baseline(args.calibrate_ms)
            print("Baseline: " + ", ".join(f"{k}={v:.3f}" for k, v in baseline.items()))

        processed = await feeder
        logging.info(f"Processed {processed} samples, {len(session.get_adaptation_history())} adaptation events kept")
        print_status(session)
        return 0

    finally:
        session.disconnect()
        if isinstance(source, BrainFlowSource):
            source.disconnect()
        if sender is not None:
            sender.close()


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        description="NeuroSync - Neuro-adaptive UI pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Process 10 seconds of synthetic EEG as fast as possible
  python -m neurosync --run --samples 2560 --no-udp

  # Real-time synthetic stream with a 5 second baseline calibration
  python -m neurosync --run --realtime --calibrate-ms 5000

  # Stream from a BrainFlow board
  python -m neurosync --run --source brainflow --board cyton --serial-port /dev/ttyUSB0

  # Show the adaptation catalog
  python -m neurosync --list-profiles
        """
    )

    # Mode selection (mutually exclusive)
    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument("--run", action="store_true",
                            help="Run the processing loop")
    mode_group.add_argument("--list-profiles", action="store_true",
                            help="Print the adaptation catalog")

    # Data source options
    parser.add_argument("--device", choices=sorted(DEVICE_PROFILES), default="simulator",
                        help="Device kind reported to the session (default: simulator)")
    parser.add_argument("--source", choices=["synthetic", "brainflow"], default="synthetic",
                        help="Sample source (default: synthetic)")
    parser.add_argument("--board", choices=BRAINFLOW_BOARDS, default="synthetic",
                        help="BrainFlow board (default: synthetic)")
    parser.add_argument("--serial-port", default="",
                        help="Serial port for BrainFlow boards")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the synthetic source")

    # Processing parameters
    parser.add_argument("--fs", type=float, default=None,
                        help="Synthetic sampling frequency (default: the device's native rate)")
    parser.add_argument("--samples", type=int, default=0,
                        help="Samples to process, 0 = until interrupted (default: 0)")
    parser.add_argument("--realtime", action="store_true",
                        help="Pace synthetic samples at the sampling rate")
    parser.add_argument("--calibrate-ms", type=float, default=0,
                        help="Run a baseline calibration of this length (ms)")
    parser.add_argument("--calibration-interval", type=float, default=CALIBRATION_INTERVAL_MS,
                        help=f"Calibration polling interval in ms (default: {CALIBRATION_INTERVAL_MS})")

    # Communication options
    parser.add_argument("--udp-host", default=UDP_HOST,
                        help=f"Dashboard UDP host (default: {UDP_HOST})")
    parser.add_argument("--udp-port", type=int, default=UDP_PORT,
                        help=f"Dashboard UDP port (default: {UDP_PORT})")
    parser.add_argument("--no-udp", action="store_true",
                        help="Do not publish updates over UDP")

    # Logging
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose logging")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.list_profiles:
        print_profiles(AdaptationCatalog())
        return 0

    print("=" * 60)
    print("NeuroSync - Neuro-adaptive UI pipeline")
    print("=" * 60)

    try:
        return asyncio.run(run_session(args))
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 0
    except Exception as e:
        logging.error(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
