"""HTTP transport for the ECP API served on port 8060 of each device."""

from __future__ import annotations

import asyncio
import functools
import logging
import typing as t
from http import HTTPStatus

import requests

from . import wol
from .exceptions import ECPStatusError, WakeOnLanError

logger = logging.getLogger(__name__)

ECP_PORT = 8060


def ecp_url(ipv4: str, endpoint: str, port: int = ECP_PORT) -> str:
    return f"http://{ipv4}:{port}/{endpoint}"


def _request(
    method: str, url: str, data: t.Optional[str], timeout: float, timeout_status: int
) -> requests.Response:
    try:
        resp = requests.request(method, url, data=data, timeout=timeout)
        resp.raise_for_status()
        return resp
    except requests.Timeout as exc:
        raise ECPStatusError(timeout_status, url) from exc
    except requests.RequestException as exc:
        response = getattr(exc, "response", None)
        status = response.status_code if response is not None else HTTPStatus.BAD_REQUEST
        raise ECPStatusError(status, url) from exc


async def _send(
    method: str,
    url: str,
    data: t.Optional[str],
    timeout: float,
    timeout_status: int = HTTPStatus.REQUEST_TIMEOUT,
) -> requests.Response:
    loop = asyncio.get_running_loop()
    logger.debug("ECP %s %s (timeout=%.1fs)", method, url, timeout)
    return await loop.run_in_executor(None, functools.partial(_request, method, url, data, timeout, timeout_status))


async def get(ipv4: str, endpoint: str, timeout: float, *, port: int = ECP_PORT) -> str:
    resp = await _send("GET", ecp_url(ipv4, endpoint, port), None, timeout)
    return resp.text or ""


async def get_bytes(ipv4: str, endpoint: str, timeout: float, *, port: int = ECP_PORT) -> tuple[bytes, str]:
    resp = await _send("GET", ecp_url(ipv4, endpoint, port), None, timeout)
    content_type = resp.headers.get("Content-Type") or "image/png"
    return resp.content, content_type


async def post(
    ipv4: str,
    endpoint: str,
    body: t.Optional[str] = None,
    timeout: float = 5.0,
    *,
    port: int = ECP_PORT,
) -> str:
    # outside of waking_post a POST timeout is not distinguished from other transport failures
    resp = await _send("POST", ecp_url(ipv4, endpoint, port), body or "", timeout, HTTPStatus.BAD_REQUEST)
    return resp.text or ""


async def waking_post(
    ipv4: str,
    mac: bytes,
    endpoint: str,
    timeout: float,
    *,
    port: int = ECP_PORT,
) -> str:
    """POST without a body, waking the device and retrying once if the first attempt times out.

    Useful for cold-launching apps since it skips the power-state round trip.
    """
    url = ecp_url(ipv4, endpoint, port)
    try:
        resp = await _send("POST", url, "", timeout, HTTPStatus.REQUEST_TIMEOUT)
        return resp.text or ""
    except ECPStatusError as exc:
        if not exc.is_timeout:
            raise
        logger.debug("POST %s timed out, sending Wake-on-LAN before retrying", exc.url)

    try:
        await wol.send_wake_on_lan(mac)
    except WakeOnLanError as exc:
        raise ECPStatusError(HTTPStatus.IM_A_TEAPOT, url) from exc
    return await post(ipv4, endpoint, None, timeout, port=port)
