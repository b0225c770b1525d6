from __future__ import annotations

import asyncio
import functools
import logging

from wakeonlan import create_magic_packet, send_magic_packet

from .exceptions import WakeOnLanError
from .models import format_mac

logger = logging.getLogger(__name__)

WOL_BROADCAST = "255.255.255.255"
WOL_PORT = 9


def magic_packet(mac: bytes) -> bytes:
    # 6 x 0xFF followed by the MAC repeated 16 times
    return create_magic_packet(format_mac(mac))


async def send_wake_on_lan(mac: bytes, *, ip_address: str = WOL_BROADCAST, port: int = WOL_PORT) -> None:
    """Broadcast a magic packet for ``mac``. Success only means the packet left this host."""
    target = format_mac(mac)
    loop = asyncio.get_running_loop()
    logger.debug("Sending Wake-on-LAN to %s via %s:%d", target, ip_address, port)
    try:
        await loop.run_in_executor(
            None, functools.partial(send_magic_packet, target, ip_address=ip_address, port=port)
        )
    except (OSError, ValueError) as exc:
        logger.warning("Wake-on-LAN to %s failed: %s", target, exc)
        raise WakeOnLanError() from exc
