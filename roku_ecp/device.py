from __future__ import annotations

import dataclasses
import ipaddress
import logging
import typing as t

from . import client, wol
from .exceptions import ECPStatusError, RokuECPError
from .models import EMPTY_MAC, App, NetworkType, PowerCommand, PowerState, split_mac
from .remote import Button, RemoteControl
from .scrape import parse_active_app, parse_apps, parse_device_info, parse_power_mode

logger = logging.getLogger(__name__)

INFO_TIMEOUT = 3.0
LAUNCH_TIMEOUT = 3.0


@dataclasses.dataclass
class Device(RemoteControl):
    ipv4: str
    port: int = client.ECP_PORT
    name: str = ""
    network: NetworkType = NetworkType.WIRELESS
    mac_wlan: bytes = EMPTY_MAC
    mac_eth: bytes = EMPTY_MAC

    def __post_init__(self):
        # the address is interpolated straight into request URLs
        try:
            self.ipv4 = str(ipaddress.IPv4Address(self.ipv4))
        except ValueError as exc:
            raise ValueError(f"Invalid IP address: {self.ipv4}") from exc

    @classmethod
    def from_ipv4(cls, ipv4: str, port: int = client.ECP_PORT) -> "Device":
        return cls(ipv4=ipv4, port=port)

    @property
    def wake_mac(self) -> bytes:
        return self.mac_eth if self.network is NetworkType.ETHERNET else self.mac_wlan

    async def _get(self, endpoint: str, timeout: float = INFO_TIMEOUT) -> str:
        return await client.get(self.ipv4, endpoint, timeout, port=self.port)

    async def get_info(self) -> dict[str, str]:
        return parse_device_info(await self._get("query/device-info"))

    async def get_installed_apps(self) -> list[App]:
        return parse_apps(await self._get("query/apps"))

    async def get_active_app(self) -> t.Optional[App]:
        return parse_active_app(await self._get("query/active-app"))

    async def fetch_icon(self, app: App) -> bytes:
        content, _content_type = await client.get_bytes(self.ipv4, f"query/icon/{app.id}", INFO_TIMEOUT, port=self.port)
        app.icon = content
        return content

    async def update_self(self) -> None:
        """Refresh name, network and MACs from ``query/device-info``.

        Leaves the device untouched when the device can't be queried, and stops
        early (keeping what was already assigned) when a required field is
        missing or malformed.
        """
        try:
            info = await self.get_info()
        except RokuECPError as exc:
            logger.debug("Could not enrich %s: %s", self.ipv4, exc)
            return

        try:
            self.name = info["friendly-device-name"]
            self.network = NetworkType.parse(info["network-type"])
            self.mac_wlan = split_mac(info["wifi-mac"])
            if info.get("supports-ethernet", "").strip().upper() == "TRUE":
                self.mac_eth = split_mac(info.get("ethernet-mac") or "0:0:0:0:0:0")
        except (KeyError, ValueError) as exc:
            logger.debug("Incomplete device-info from %s: %r", self.ipv4, exc)

    async def get_power_state(self) -> PowerState:
        try:
            xml_text = await self._get("query/device-info")
            return PowerState.parse(parse_power_mode(xml_text))
        except ECPStatusError as exc:
            # an unreachable device is assumed to be fully powered down
            if exc.is_timeout:
                return PowerState.OFF
            return PowerState.UNKNOWN
        except RokuECPError:
            return PowerState.UNKNOWN

    async def _power_key(self, button: Button) -> bool:
        return await self._keypress(button.value)

    async def _wake(self) -> bool:
        await wol.send_wake_on_lan(self.wake_mac)
        return True

    async def send_power_command(self, command: t.Union[PowerCommand, str]) -> bool:
        """Move the device toward the requested power state.

        The current state is read first; a device that is off (or can't be
        read) is woken with a magic packet.
        """
        if not isinstance(command, PowerCommand):
            command = PowerCommand.parse(command)
        current = await self.get_power_state()
        logger.debug("%s power %s, command %s", self.ipv4, current, command)

        if command is PowerCommand.TURNOFF:
            if current is PowerState.ON:
                return await self._power_key(Button.POWER_OFF)
            return True

        if command is PowerCommand.TOGGLE and current is PowerState.ON:
            return await self._power_key(Button.POWER_OFF)
        if current is PowerState.DISPLAYOFF:
            return await self._power_key(Button.POWER_ON)
        if current in (PowerState.OFF, PowerState.UNKNOWN):
            return await self._wake()
        return True

    async def launch_app_by_id(self, app_id: int) -> bool:
        await client.waking_post(self.ipv4, self.wake_mac, f"launch/{int(app_id)}", LAUNCH_TIMEOUT, port=self.port)
        return True
