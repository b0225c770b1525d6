from __future__ import annotations

import html
import re
import typing as t

# `32" TCL Roku TV`, `55 TCL Roku TV`, `65-inch Hisense Roku TV`
_SIZE_BRAND = re.compile(r"(?P<size>\d{2,3})\s*(?:[\"”]|-inch|in\b)?\s+(?P<brand>[A-Za-z0-9]+)")


def parse_tv_brand_and_size(device_name: t.Optional[str]) -> tuple[t.Optional[str], t.Optional[str]]:
    m = _SIZE_BRAND.search((device_name or "").strip())
    if not m:
        return None, None
    return m.group("brand"), m.group("size")


def render_device_badge_svg(*, ip: str, device_name: t.Optional[str], network: t.Optional[str] = None) -> str:
    brand, size = parse_tv_brand_and_size(device_name)
    title = (device_name or "").strip() or "Roku"
    if size and brand:
        big, small = f'{size}" {brand}', "Roku TV"
    else:
        big, small = title, "Roku"
    link = (network or "").strip().lower()

    lines = [
        f"<text x='24' y='76' font-size='40' font-weight='800' fill='#F4F2FF'>{html.escape(big)}</text>",
        f"<text x='24' y='116' font-size='20' font-weight='700' fill='rgba(244,242,255,0.72)'>{html.escape(small)}</text>",
    ]
    if link:
        lines.append(
            f"<text x='24' y='150' font-size='16' font-weight='600' fill='rgba(244,242,255,0.55)'>{html.escape(link)}</text>"
        )
    lines.append(
        "<text x='24' y='232' font-size='14' font-family='ui-monospace, Menlo, Consolas, monospace' "
        f"fill='rgba(244,242,255,0.55)'>{html.escape(ip)}</text>"
    )

    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="256" height="256" viewBox="0 0 256 256">
  <defs>
    <linearGradient id="g" x1="0" y1="0" x2="1" y2="1">
      <stop offset="0" stop-color="#6f1ab1"/>
      <stop offset="1" stop-color="#1b0b2e"/>
    </linearGradient>
  </defs>
  <rect x="12" y="12" width="232" height="232" rx="44" fill="url(#g)"/>
  <rect x="12" y="12" width="232" height="232" rx="44" fill="none" stroke="rgba(255,255,255,0.10)"/>
  {''.join(lines)}
</svg>"""
