"""Streaming readers for the XML documents served under ``query/``."""

from __future__ import annotations

import typing as t
import xml.etree.ElementTree as ET

from .exceptions import ECPParseError
from .models import App

NBSP = "\u00a0"


def _iter_events(xml_text: str, events: tuple[str, ...] = ("start", "end")) -> t.Iterator[tuple[str, ET.Element]]:
    parser = ET.XMLPullParser(events=events)
    try:
        parser.feed(xml_text)
        yield from parser.read_events()
        parser.close()
        yield from parser.read_events()
    except ET.ParseError as exc:
        raise ECPParseError("Failed to parse Roku XML response") from exc


def _text(elem: ET.Element) -> str:
    return (elem.text or "").strip()


def parse_device_info(xml_text: str) -> dict[str, str]:
    info: dict[str, str] = {}
    for event, elem in _iter_events(xml_text, ("end",)):
        if elem.tag == "device-info" or len(elem):
            continue
        # later duplicates win
        info[elem.tag] = _text(elem)
    return info


def parse_power_mode(xml_text: str) -> t.Optional[str]:
    for event, elem in _iter_events(xml_text, ("end",)):
        if elem.tag == "power-mode":
            return _text(elem)
    return None


def _app_from_element(elem: ET.Element) -> t.Optional[App]:
    try:
        app_id = int(elem.attrib.get("id", "").strip())
    except ValueError:
        return None
    return App(
        id=app_id,
        apptype=elem.attrib.get("type", ""),
        version=elem.attrib.get("version", ""),
        name=_text(elem).replace(NBSP, ""),
    )


def parse_apps(xml_text: str) -> list[App]:
    apps: list[App] = []
    for event, elem in _iter_events(xml_text, ("end",)):
        if elem.tag != "app":
            continue
        app = _app_from_element(elem)
        if app is not None:
            apps.append(app)
    return apps


def parse_active_app(xml_text: str) -> t.Optional[App]:
    """Return the foreground app from ``query/active-app``, or None on the home screen."""
    for app in parse_apps(xml_text):
        return app
    return None
