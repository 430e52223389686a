"""
Projection from the current choices to the three shield layers.

`project` recomputes everything from the whole ChoiceSet on every call:
- base sphere: tint, glow and opacity from the color choice
- markers: the full replacement set of orbiting symbol sprites
- overlay: the sigil glyph tiled across the sphere

The stage only adds the aura glow and the activation flare on top.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace

from aura_shield.choices import ChoiceSet
from aura_shield.geometry import RGB
from aura_shield.session import Stage
from aura_shield.sigil import Glyph

NEUTRAL_TINT: RGB = (255, 255, 255)
AURA_EMISSIVE: RGB = (0x8A, 0x2B, 0xE2)


@dataclass(frozen=True)
class ShieldStyle:
    glow_intensity: float = 0.5
    base_opacity: float = 0.2
    sigil_opacity_floor: float = 0.3
    marker_count: int = 3
    marker_radius: float = 2.2
    marker_scale: float = 0.5
    marker_opacity: float = 0.8
    tiling: tuple[int, int] = (3, 2)
    sphere_radius: float = 1.7
    aura_radius: float = 1.5
    aura_guided: float = 0.5
    aura_activated: float = 1.0
    activation_opacity: float = 0.7

    @classmethod
    def from_config(cls, config: dict | None) -> "ShieldStyle":
        if not config:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ValueError(f"Unknown style keys: {', '.join(unknown)}")
        values = dict(config)
        if "tiling" in values:
            values["tiling"] = tuple(int(v) for v in values["tiling"])
        return cls(**values)


DEFAULT_STYLE = ShieldStyle()


@dataclass(frozen=True)
class BaseLayer:
    tint: RGB = NEUTRAL_TINT
    emissive: RGB = (0, 0, 0)
    glow_intensity: float = 0.0
    opacity: float = 0.0
    radius: float = 1.7


@dataclass(frozen=True)
class Marker:
    symbol: str
    angle: float
    position: tuple[float, float, float]
    scale: float
    opacity: float


@dataclass(frozen=True)
class SigilOverlay:
    glyph: Glyph | None = None
    repeat: tuple[int, int] = (1, 1)
    wrap: str = "repeat"

    @property
    def visible(self) -> bool:
        return self.glyph is not None and not self.glyph.is_empty


@dataclass(frozen=True)
class AuraLayer:
    emissive: RGB = AURA_EMISSIVE
    intensity: float = 0.0
    radius: float = 1.5


@dataclass(frozen=True)
class LayerParameters:
    base: BaseLayer
    markers: tuple[Marker, ...]
    overlay: SigilOverlay
    aura: AuraLayer


def orbit_markers(symbol: str, style: ShieldStyle) -> tuple[Marker, ...]:
    markers = []
    for i in range(style.marker_count):
        angle = (i / style.marker_count) * math.tau
        position = (
            math.cos(angle) * style.marker_radius,
            math.sin(angle) * style.marker_radius,
            0.0,
        )
        markers.append(
            Marker(
                symbol=symbol,
                angle=angle,
                position=position,
                scale=style.marker_scale,
                opacity=style.marker_opacity,
            )
        )
    return tuple(markers)


def aura_intensity(stage: Stage, style: ShieldStyle) -> float:
    if stage is Stage.INTRO:
        return 0.0
    if stage is Stage.ACTIVATION:
        return style.aura_activated
    return style.aura_guided


def project(
    choices: ChoiceSet,
    stage: Stage = Stage.CONSTRUCTION,
    style: ShieldStyle = DEFAULT_STYLE,
) -> LayerParameters:
    base = BaseLayer(radius=style.sphere_radius)
    if choices.color is not None:
        base = BaseLayer(
            tint=choices.color,
            emissive=choices.color,
            glow_intensity=style.glow_intensity,
            opacity=style.base_opacity,
            radius=style.sphere_radius,
        )

    markers: tuple[Marker, ...] = ()
    if choices.symbol is not None:
        markers = orbit_markers(choices.symbol, style)

    overlay = SigilOverlay()
    if choices.has_sigil:
        overlay = SigilOverlay(glyph=choices.sigil, repeat=style.tiling)
        base = replace(base, opacity=max(base.opacity, style.sigil_opacity_floor))

    if stage is Stage.ACTIVATION:
        base = replace(base, opacity=max(base.opacity, style.activation_opacity))

    return LayerParameters(
        base=base,
        markers=markers,
        overlay=overlay,
        aura=AuraLayer(intensity=aura_intensity(stage, style), radius=style.aura_radius),
    )
