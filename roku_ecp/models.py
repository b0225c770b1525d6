from __future__ import annotations

import dataclasses
import enum
import string
import typing as t

EMPTY_MAC = bytes(6)


class NetworkType(enum.Enum):
    WIRELESS = "WIRELESS"
    ETHERNET = "ETHERNET"

    @classmethod
    def parse(cls, s: t.Optional[str]) -> "NetworkType":
        if (s or "").strip().upper() == "ETHERNET":
            return cls.ETHERNET
        return cls.WIRELESS

    def __str__(self) -> str:
        return self.value


class PowerState(enum.Enum):
    OFF = "Off"  # powered down, only reachable via Wake-on-LAN
    DISPLAYOFF = "DisplayOff"  # screen off, ECP still answers
    ON = "On"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, s: t.Optional[str]) -> "PowerState":
        key = (s or "").strip().upper()
        if key in ("OFF", "POWEROFF"):
            return cls.OFF
        if key == "DISPLAYOFF":
            return cls.DISPLAYOFF
        if key in ("ON", "POWERON"):
            return cls.ON
        return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


class PowerCommand(enum.Enum):
    TURNOFF = "OFF"
    TURNON = "ON"
    TOGGLE = "TOGGLE"

    @classmethod
    def parse(cls, s: t.Optional[str]) -> "PowerCommand":
        key = (s or "").strip().upper()
        if key == "OFF":
            return cls.TURNOFF
        if key == "TOGGLE":
            return cls.TOGGLE
        return cls.TURNON

    def __str__(self) -> str:
        return self.value


@dataclasses.dataclass
class App:
    id: int
    apptype: str = ""
    version: str = ""
    name: str = ""
    icon: t.Optional[bytes] = None


def split_mac(mac: str) -> bytes:
    """Parse ``aa:bb:cc:dd:ee:ff`` (one or two hex digits per octet) into 6 bytes."""
    chunks = mac.strip().split(":")
    if len(chunks) != 6:
        raise ValueError(f"Invalid MAC address: {mac!r}")
    octets = []
    for chunk in chunks:
        if not 1 <= len(chunk) <= 2 or any(c not in string.hexdigits for c in chunk):
            raise ValueError(f"Invalid MAC address: {mac!r}")
        octets.append(int(chunk, 16))
    return bytes(octets)


def format_mac(mac: bytes) -> str:
    return ":".join(f"{b:02x}" for b in mac)
