"""
Stable color assignment for campaigns, developers and statuses.
"""

from core.config import (
    CAMPAIGN_PALETTE,
    DEVELOPER_PALETTE,
    NEUTRAL_COLOR,
    STATUS_COLORS,
)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value >= 0x8000_0000 else value


def name_hash(name: str) -> int:
    """31-multiplier rolling hash with signed 32-bit wraparound."""
    h = 0
    # Hash UTF-16 code units so astral characters hash like in the browser
    encoded = name.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32(code_unit + ((h << 5) - h))
    return h


def color_for(name: str | None, palette: list[str]) -> str:
    """Pick a palette color for a name. Empty names get the neutral color."""
    if not name or not palette:
        return NEUTRAL_COLOR
    return palette[abs(name_hash(name)) % len(palette)]


def campaign_color(campaign: str | None) -> str:
    return color_for(campaign, CAMPAIGN_PALETTE)


def developer_color(developer: str | None) -> str:
    return color_for(developer, DEVELOPER_PALETTE)


def status_color(status: str | None) -> str:
    """Badge color for a status, by exact (case-insensitive) name."""
    if not status:
        return NEUTRAL_COLOR
    return STATUS_COLORS.get(status.lower(), NEUTRAL_COLOR)
