from __future__ import annotations

import logging
import time
import typing as t

from flask import Flask, Response, jsonify, request

from roku_ecp import App, Device, RokuECPError, discover_devices, format_mac

from .device_badge import render_device_badge_svg

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "DISCOVERY_TIMEOUT": 3.0,
    "DEVICE_CACHE_TTL": 60.0,
}


def device_to_dict(d: Device) -> dict[str, t.Any]:
    return {
        "ip": d.ipv4,
        "port": d.port,
        "name": d.name or "Roku",
        "network": str(d.network),
        "mac_wlan": format_mac(d.mac_wlan),
        "mac_eth": format_mac(d.mac_eth),
    }


def create_app(config: t.Optional[dict[str, t.Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    if config:
        app.config.update(config)
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

    # ip -> (enriched_at, device); lives only as long as the process
    devices: dict[str, tuple[float, Device]] = {}

    def _remember(d: Device) -> None:
        now = time.monotonic()
        ttl = float(app.config["DEVICE_CACHE_TTL"])
        for ip in [ip for ip, (seen, _) in devices.items() if now - seen >= ttl]:
            del devices[ip]
        devices[d.ipv4] = (now, d)

    async def _device(ip: str) -> Device:
        if not ip:
            raise ValueError("Missing ip")
        cached = devices.get(ip)
        if cached and time.monotonic() - cached[0] < float(app.config["DEVICE_CACHE_TTL"]):
            return cached[1]
        d = Device.from_ipv4(ip)
        await d.update_self()
        # devices that could not be enriched are looked up again next time
        if d.name:
            _remember(d)
        return d

    def _args() -> dict[str, t.Any]:
        if request.method == "GET":
            return request.args.to_dict()
        return request.get_json(silent=True) or {}

    def _fail(exc: Exception):
        logger.info("%s %s failed: %s", request.method, request.path, exc)
        return jsonify({"ok": False, "error": str(exc)}), 400

    @app.get("/api/devices")
    async def api_devices():
        try:
            timeout_s = float(request.args.get("timeout", app.config["DISCOVERY_TIMEOUT"]))
            found = await discover_devices(timeout_s)
        except (ValueError, RokuECPError) as exc:
            return _fail(exc)
        for d in found:
            _remember(d)
        return jsonify({"ok": True, "devices": [device_to_dict(d) for d in found]})

    @app.get("/api/device-info")
    async def api_device_info():
        try:
            d = await _device(request.args.get("ip", ""))
            info = await d.get_info()
        except (ValueError, RokuECPError) as exc:
            return _fail(exc)
        return jsonify({"ok": True, "device": device_to_dict(d), "info": info})

    @app.get("/api/apps")
    async def api_apps():
        try:
            d = await _device(request.args.get("ip", ""))
            apps = await d.get_installed_apps()
        except (ValueError, RokuECPError) as exc:
            return _fail(exc)
        apps.sort(key=lambda a: a.name.lower())
        return jsonify(
            {
                "ok": True,
                "apps": [{"id": a.id, "type": a.apptype, "version": a.version, "name": a.name} for a in apps],
            }
        )

    @app.get("/api/active-app")
    async def api_active_app():
        try:
            d = await _device(request.args.get("ip", ""))
            active = await d.get_active_app()
        except (ValueError, RokuECPError) as exc:
            return _fail(exc)
        return jsonify({"ok": True, "active": {"id": active.id, "name": active.name} if active else None})

    @app.route("/api/power", methods=["GET", "POST"])
    async def api_power():
        data = _args()
        try:
            d = await _device(data.get("ip", ""))
            if request.method == "GET":
                state = await d.get_power_state()
                return jsonify({"ok": True, "power": str(state)})
            await d.send_power_command(str(data.get("command", "")))
        except (ValueError, RokuECPError) as exc:
            return _fail(exc)
        return jsonify({"ok": True})

    @app.post("/api/keypress")
    async def api_keypress():
        data = _args()
        try:
            d = await _device(data.get("ip", ""))
            await d.press_button(str(data.get("key", "")))
        except (ValueError, RokuECPError) as exc:
            return _fail(exc)
        return jsonify({"ok": True})

    @app.post("/api/text")
    async def api_text():
        data = _args()
        try:
            d = await _device(data.get("ip", ""))
            await d.press_keys(str(data.get("text", "")))
        except (ValueError, RokuECPError) as exc:
            return _fail(exc)
        return jsonify({"ok": True})

    @app.post("/api/launch")
    async def api_launch():
        data = _args()
        try:
            d = await _device(data.get("ip", ""))
            await d.launch_app_by_id(int(data.get("app_id", "")))
        except (ValueError, RokuECPError) as exc:
            return _fail(exc)
        return jsonify({"ok": True})

    @app.get("/api/icon/<int:app_id>")
    async def api_icon(app_id: int):
        try:
            d = await _device(request.args.get("ip", ""))
            content = await d.fetch_icon(App(id=app_id))
        except (ValueError, RokuECPError):
            return Response(status=404)
        return Response(content, content_type="image/png")

    @app.get("/api/device-badge")
    def api_device_badge():
        ip = request.args.get("ip", "")
        cached = devices.get(ip)
        try:
            d = cached[1] if cached else Device.from_ipv4(ip)
        except ValueError as exc:
            return _fail(exc)
        svg = render_device_badge_svg(ip=ip, device_name=d.name, network=str(d.network))
        return Response(svg, content_type="image/svg+xml", headers={"Cache-Control": "public, max-age=3600"})

    return app
