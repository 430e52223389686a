"""
Procedural sigils from text.

Each character of the (uppercased) word becomes one point on a wheel: the
character's position in the word sets the angle, its offset from "A" picks
one of ten radius rings. Points are joined in order and the path is closed
once there are more than two of them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from aura_shield.geometry import Vec2, polar

CANVAS_SIZE = 200
MARGIN = 10
STROKE_COLOR = "#00ffff"
STROKE_WIDTH = 2
GLOW_BLUR = 10


@dataclass(frozen=True)
class Glyph:
    points: tuple[Vec2, ...] = ()
    closed: bool = False
    source_text: str = ""
    canvas_size: int = CANVAS_SIZE

    @property
    def is_empty(self) -> bool:
        return not self.points

    def segments(self) -> Iterator[tuple[Vec2, Vec2]]:
        for a, b in zip(self.points, self.points[1:]):
            yield a, b
        if self.closed:
            yield self.points[-1], self.points[0]


@dataclass(frozen=True)
class SigilStyle:
    stroke: str = STROKE_COLOR
    width: int = STROKE_WIDTH
    glow: int = GLOW_BLUR
    background: str | None = None


def char_value(ch: str) -> int:
    # Non-letters keep the raw offset; may be negative or large.
    return ord(ch) - ord("A")


def ring_fraction(value: int) -> float:
    # Truncated remainder: the sign follows the offset.
    return math.fmod(value, 10) / 10


def generate(text: str, canvas_size: int = CANVAS_SIZE, margin: int = MARGIN) -> Glyph:
    if not text or not text.strip():
        return Glyph(source_text=text or "", canvas_size=canvas_size)

    chars = list(text.upper())
    n = len(chars)
    center = Vec2(canvas_size / 2, canvas_size / 2)
    max_radius = canvas_size / 2 - margin

    points = []
    for index, ch in enumerate(chars):
        angle = (index / n) * math.tau
        radius = max_radius * (0.5 + 0.5 * ring_fraction(char_value(ch)))
        points.append(polar(center, angle, radius))

    return Glyph(
        points=tuple(points),
        closed=len(points) > 2,
        source_text=text,
        canvas_size=canvas_size,
    )


def glyph_to_svg(glyph: Glyph, style: SigilStyle | None = None) -> str:
    style = style or SigilStyle()
    size = glyph.canvas_size
    body = ""
    if len(glyph.points) >= 2:
        coords = " ".join(p.to_svg() for p in glyph.points)
        tag = "polygon" if glyph.closed else "polyline"
        body = (
            f'<{tag} points="{coords}" fill="none" stroke="{style.stroke}" '
            f'stroke-width="{style.width:.2f}" filter="url(#glow)" />'
        )
    background = ""
    if style.background:
        background = f'<rect width="100%" height="100%" fill="{style.background}" />'
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 {size} {size}">
  {background}
  <defs><filter id="glow"><feGaussianBlur stdDeviation="{style.glow / 2:.1f}" result="b" /><feMerge><feMergeNode in="b" /><feMergeNode in="SourceGraphic" /></feMerge></filter></defs>
  {body}
</svg>
"""


def write_glyph_svg(glyph: Glyph, out_path: Path, style: SigilStyle | None = None) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(glyph_to_svg(glyph, style), encoding="utf-8")
    return out_path


def render_glyph_image(glyph: Glyph, style: SigilStyle | None = None):
    """Rasterize the glyph onto a transparent RGBA Pillow image."""
    from PIL import Image, ImageDraw, ImageFilter

    style = style or SigilStyle()
    size = glyph.canvas_size
    image = Image.new("RGBA", (size, size), style.background or (0, 0, 0, 0))
    if len(glyph.points) < 2:
        return image

    coords = [p.as_tuple() for p in glyph.points]
    if glyph.closed:
        coords.append(coords[0])

    glow = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    ImageDraw.Draw(glow).line(coords, fill=style.stroke, width=style.width * 3, joint="curve")
    glow = glow.filter(ImageFilter.GaussianBlur(style.glow / 2))
    image.alpha_composite(glow)
    ImageDraw.Draw(image).line(coords, fill=style.stroke, width=style.width, joint="curve")
    return image


def save_glyph_png(glyph: Glyph, out_path: Path, style: SigilStyle | None = None) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    render_glyph_image(glyph, style).save(out_path)
    return out_path
