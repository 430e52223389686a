from __future__ import annotations

import math
from dataclasses import dataclass

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def to_svg(self) -> str:
        return f"{self.x:.2f},{self.y:.2f}"

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


def polar(center: Vec2, angle: float, radius: float) -> Vec2:
    return Vec2(center.x + math.cos(angle) * radius, center.y + math.sin(angle) * radius)


def rgb_to_hex(color: RGB) -> str:
    r, g, b = color
    return f"#{r:02x}{g:02x}{b:02x}"


def color_channel(channel, value) -> int:
    if isinstance(channel, bool) or not isinstance(channel, (int, float)):
        raise ValueError(f"Color channel must be a number: {value!r}")
    if isinstance(channel, float) and not channel.is_integer():
        raise ValueError(f"Color channel must be a whole number: {value!r}")
    channel = int(channel)
    if channel < 0 or channel > 255:
        raise ValueError(f"Color channel out of range: {value!r}")
    return channel


def parse_color(value) -> RGB:
    """Normalize an int (0xRRGGBB), a "#rrggbb" string or an RGB triple."""
    if isinstance(value, bool):
        raise ValueError(f"Unsupported color value: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFF:
            raise ValueError(f"Color out of range: {value:#x}")
        return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
    if isinstance(value, str):
        text = value.strip().lstrip("#")
        if text.lower().startswith("0x"):
            text = text[2:]
        if len(text) != 6:
            raise ValueError(f"Unsupported color string: {value!r}")
        try:
            return parse_color(int(text, 16))
        except ValueError as exc:
            raise ValueError(f"Unsupported color string: {value!r}") from exc
    if isinstance(value, (tuple, list)) and len(value) == 3:
        channels = tuple(color_channel(c, value) for c in value)
        return channels  # type: ignore[return-value]
    raise ValueError(f"Unsupported color value: {value!r}")
