from __future__ import annotations

from http import HTTPStatus


class RokuECPError(RuntimeError):
    pass


def status_text(status: int) -> str:
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return str(status)


class ECPStatusError(RokuECPError):
    """A failed ECP request, carrying the HTTP status that describes it.

    Timeouts are reported as 408 and failures without a server response as 400.
    """

    def __init__(self, status: int, url: str | None = None):
        self.status = int(status)
        self.url = url
        super().__init__(status_text(self.status))

    @property
    def is_timeout(self) -> bool:
        return self.status == HTTPStatus.REQUEST_TIMEOUT


class ECPParseError(RokuECPError):
    pass


class WakeOnLanError(RokuECPError):
    def __init__(self, message: str = "Unable to send Wake-on-LAN"):
        super().__init__(message)


class DiscoveryError(RokuECPError):
    pass
