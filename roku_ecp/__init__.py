"""Control Roku devices over the External Control Protocol (ECP)."""

import logging

from .client import ECP_PORT
from .device import Device
from .discovery import discover_devices
from .exceptions import DiscoveryError, ECPParseError, ECPStatusError, RokuECPError, WakeOnLanError
from .models import App, NetworkType, PowerCommand, PowerState, format_mac, split_mac
from .remote import Button

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "App",
    "Button",
    "Device",
    "DiscoveryError",
    "ECPParseError",
    "ECPStatusError",
    "ECP_PORT",
    "NetworkType",
    "PowerCommand",
    "PowerState",
    "RokuECPError",
    "WakeOnLanError",
    "discover_devices",
    "format_mac",
    "split_mac",
]
