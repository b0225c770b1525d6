"""SSDP discovery of ECP devices on the local network."""

from __future__ import annotations

import asyncio
import dataclasses
import ipaddress
import logging
import math
import typing as t
import urllib.parse

from .client import ECP_PORT
from .device import Device
from .exceptions import DiscoveryError

logger = logging.getLogger(__name__)

SSDP_ADDR = "239.255.255.250"
SSDP_PORT = 1900
SEARCH_TARGET = "roku:ecp"
DISCOVERY_TIMEOUT = 5.0


@dataclasses.dataclass(frozen=True)
class SSDPResponse:
    ipv4: str
    port: int
    usn: t.Optional[str] = None

    @property
    def key(self) -> str:
        return self.usn or f"{self.ipv4}:{self.port}"


def _ssdp_msearch_payload(mx: int) -> bytes:
    lines = [
        "M-SEARCH * HTTP/1.1",
        f"HOST: {SSDP_ADDR}:{SSDP_PORT}",
        'MAN: "ssdp:discover"',
        f"ST: {SEARCH_TARGET}",
        f"MX: {mx}",
        "",
        "",
    ]
    return "\r\n".join(lines).encode("utf-8")


def _parse_headers(msg: bytes) -> dict[str, str]:
    text = msg.decode("utf-8", errors="ignore")
    headers: dict[str, str] = {}
    for line in text.splitlines()[1:]:
        if not line or ":" not in line:
            continue
        k, v = line.split(":", 1)
        headers[k.strip().lower()] = v.strip()
    return headers


def parse_ssdp_response(msg: bytes) -> t.Optional[SSDPResponse]:
    """Pull the ECP address and USN out of an M-SEARCH reply.

    Returns None for replies without a usable IPv4 LOCATION and for replies
    advertising a search target other than ``roku:ecp``.
    """
    headers = _parse_headers(msg)
    st = headers.get("st")
    if st is not None and st.lower() != SEARCH_TARGET:
        return None
    location = headers.get("location")
    if not location:
        return None
    try:
        parts = urllib.parse.urlsplit(location)
        port = parts.port or ECP_PORT
    except ValueError:
        return None
    if not parts.hostname:
        return None
    try:
        ipaddress.IPv4Address(parts.hostname)
    except ValueError:
        return None
    return SSDPResponse(ipv4=parts.hostname, port=port, usn=headers.get("usn") or None)


class _SSDPProtocol(asyncio.DatagramProtocol):
    def __init__(self):
        self.responses: list[SSDPResponse] = []
        self._seen: set[str] = set()
        self.error: t.Optional[Exception] = None
        self.transport: t.Optional[asyncio.DatagramTransport] = None

    def connection_made(self, transport: asyncio.DatagramTransport) -> None:
        self.transport = transport

    def datagram_received(self, data: bytes, addr: tuple) -> None:
        response = parse_ssdp_response(data)
        if response is None:
            logger.debug("Ignoring non-ECP SSDP reply from %s", addr[0])
            return
        if response.key in self._seen:
            return
        self._seen.add(response.key)
        self.responses.append(response)
        logger.debug("SSDP responder %s:%d (%s)", response.ipv4, response.port, response.usn)

    def error_received(self, exc: Exception) -> None:
        # asyncio reports sendto failures here instead of raising them
        logger.debug("SSDP socket error: %s", exc)
        if self.error is None:
            self.error = exc


def _raise_send_error(protocol: _SSDPProtocol) -> None:
    if protocol.error is not None and not protocol.responses:
        exc = protocol.error
        raise DiscoveryError(f"Unable to send M-SEARCH: {exc}") from exc


async def _search(timeout: float) -> list[SSDPResponse]:
    loop = asyncio.get_running_loop()
    mx = max(1, math.ceil(timeout))
    try:
        transport, protocol = await loop.create_datagram_endpoint(_SSDPProtocol, local_addr=("0.0.0.0", 0))
    except OSError as exc:
        raise DiscoveryError(f"Unable to bind SSDP socket: {exc}") from exc

    try:
        try:
            transport.sendto(_ssdp_msearch_payload(mx), (SSDP_ADDR, SSDP_PORT))
        except OSError as exc:
            raise DiscoveryError(f"Unable to send M-SEARCH: {exc}") from exc
        _raise_send_error(protocol)
        await asyncio.sleep(timeout)
        _raise_send_error(protocol)
    finally:
        transport.close()
    return list(protocol.responses)


async def discover_devices(timeout: float = DISCOVERY_TIMEOUT) -> list[Device]:
    """Find ECP devices on the local network and enrich each from its device-info.

    Devices are returned in the order they first answered. A device whose
    device-info can't be read is still returned with its address filled in.
    """
    responses = await _search(timeout)
    logger.debug("SSDP search found %d responder(s)", len(responses))
    devices = [Device.from_ipv4(r.ipv4, r.port) for r in responses]
    await asyncio.gather(*(d.update_self() for d in devices))
    return devices
