"""
Dashboard communication interface

This module handles UDP communication with an external metrics dashboard,
formatting session state into JSON messages.
"""

import json
import logging
import socket
from dataclasses import asdict
from typing import Any, Dict, Optional

from ..core.data_types import AdaptationProfile, DeviceInfo, MetricVector
from ..core.config import UDP_HOST, UDP_PORT


def build_message(timestamp: float, metrics: MetricVector,
                  adaptation: Optional[AdaptationProfile] = None,
                  device: Optional[DeviceInfo] = None) -> Dict[str, Any]:
    """
    Build the JSON-serialisable dashboard message

    Args:
        timestamp: Message time
        metrics: Current metrics
        adaptation: Current adaptation, if any
        device: Connected device, if any

    Returns:
        Dict[str, Any]: Message payload
    """
    message = {
        "t": timestamp,
        "metrics": {name: float(value) for name, value in metrics.as_dict().items()},
        "adaptation": None,
        "device": None,
    }
    if adaptation is not None:
        message["adaptation"] = {
            "id": adaptation.profile_id,
            "confidence": float(adaptation.confidence),
            **adaptation.descriptor.as_dict(),
        }
    if device is not None:
        message["device"] = {
            "name": device.name,
            "kind": device.kind,
            "channels": device.channels,
            "sample_rate": device.sample_rate,
            "channel_names": list(device.channel_names),
            "filters": asdict(device.filter_settings) if device.filter_settings else None,
        }
    return message


class DashboardSender:
    """
    Send session updates to a dashboard via UDP JSON messages

    Sending is fire-and-forget; a failed send is logged and reported through
    the return value, never raised.
    """

    def __init__(self, host: str = UDP_HOST, port: int = UDP_PORT):
        self.host = host
        self.port = port
        self.socket = None
        self._setup_socket()

    def _setup_socket(self):
        """Setup UDP socket for communication"""
        try:
            self.socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            logging.info(f"UDP sender initialized: {self.host}:{self.port}")
        except Exception as e:
            logging.error(f"Failed to setup UDP socket: {e}")

    def send_update(self, timestamp: float, metrics: MetricVector,
                    adaptation: Optional[AdaptationProfile] = None,
                    device: Optional[DeviceInfo] = None) -> bool:
        """
        Send the current session state

        Returns:
            bool: True if sent successfully
        """
        if self.socket is None:
            return False

        try:
            json_str = json.dumps(build_message(timestamp, metrics, adaptation, device))
            self.socket.sendto(json_str.encode('utf-8'), (self.host, self.port))
            return True
        except Exception as e:
            logging.error(f"Failed to send UDP message: {e}")
            return False

    def close(self):
        """Close UDP socket"""
        if self.socket:
            self.socket.close()
            self.socket = None
