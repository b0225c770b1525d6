"""Remote-control emulation. Every call here needs the device to be powered on."""

from __future__ import annotations

import enum
import logging
import typing as t
import urllib.parse

from . import client
from .exceptions import ECPStatusError

logger = logging.getLogger(__name__)

KEYPRESS_TIMEOUT = 5.0


class Button(enum.Enum):
    BACK = "Back"
    BACKSPACE = "Backspace"
    CHANNEL_UP = "ChannelUp"  # requires device support
    CHANNEL_DOWN = "ChannelDown"  # requires device support
    DOWN = "Down"
    ENTER = "Enter"
    FIND_REMOTE = "FindRemote"  # requires device support
    FWD = "Fwd"
    HOME = "Home"
    INFO = "Info"
    INPUT_TUNER = "InputTuner"
    INPUT_HDMI1 = "InputHDMI1"
    INPUT_HDMI2 = "InputHDMI2"
    INPUT_HDMI3 = "InputHDMI3"
    INPUT_HDMI4 = "InputHDMI4"
    INPUT_AV1 = "InputAV1"
    INSTANT_REPLAY = "InstantReplay"
    LEFT = "Left"
    PLAY = "Play"
    REV = "Rev"
    RIGHT = "Right"
    SEARCH = "Search"
    SELECT = "Select"
    UP = "Up"
    VOLUME_DOWN = "VolumeDown"
    VOLUME_MUTE = "VolumeMute"
    VOLUME_UP = "VolumeUp"
    POWER_OFF = "PowerOff"
    POWER_ON = "PowerOn"  # undocumented, but answered by most devices

    @classmethod
    def parse(cls, s: t.Optional[str]) -> "Button":
        key = (s or "").strip().lower()
        for button in cls:
            if button.value.lower() == key:
                return button
        return cls.POWER_ON

    def __str__(self) -> str:
        return self.value


def literal_keycode(char: str) -> str:
    return "Lit_" + urllib.parse.quote(char, safe="")


class RemoteControl:
    """Button and text entry over ``keypress/``.

    For power, prefer ``send_power_command(PowerCommand.TOGGLE)`` over pressing
    PowerOn/PowerOff directly.
    """

    ipv4: str
    port: int

    async def _keypress(self, keycode: str) -> bool:
        await client.post(self.ipv4, f"keypress/{keycode}", None, KEYPRESS_TIMEOUT, port=self.port)
        return True

    async def press_button(self, button: t.Union[Button, str]) -> bool:
        if not isinstance(button, Button):
            button = Button.parse(button)
        return await self._keypress(button.value)

    async def press_buttons(self, buttons: t.Iterable[t.Union[Button, str]]) -> bool:
        for index, button in enumerate(buttons):
            try:
                await self.press_button(button)
            except ECPStatusError:
                logger.debug("Button %d (%s) failed, stopping", index, button)
                raise
        return True

    async def press_key(self, char: str) -> bool:
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        return await self._keypress(literal_keycode(char))

    async def press_keys(self, text: str) -> bool:
        for char in text:
            await self.press_key(char)
        return True

    async def find_remote(self) -> bool:
        return await self.press_button(Button.FIND_REMOTE)
