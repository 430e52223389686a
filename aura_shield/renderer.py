"""
pygame collaborator for the shield session.

The renderer never reads session state. It only receives LayerParameters
through `apply_layer_parameters`, which overwrites everything it drew before,
and cue names through `CuePlayer.play`.
"""

from __future__ import annotations

import math
import os
import random
import sys

import pygame

from aura_shield.controller import CueSignal, LayerUpdate
from aura_shield.layers import LayerParameters, Marker, SigilOverlay
from aura_shield.session import Cue
from aura_shield.sigil import Glyph, STROKE_WIDTH

BG_COLOR = (6, 8, 16)
STAR_COLOR = (0x88, 0x88, 0x88)
SIGIL_COLOR = (0, 255, 255)
CAMERA_Z = 5.0
FOV_DEGREES = 75.0

CUE_FILES = {
    Cue.TRANSITION: "transition_sound.mp3",
    Cue.ACTIVATION: "activation_sound.mp3",
}


def focal_length(height: int) -> float:
    return (height / 2) / math.tan(math.radians(FOV_DEGREES) / 2)


def world_to_screen(x: float, y: float, z: float, size: tuple[int, int]) -> tuple[float, float, float] | None:
    depth = CAMERA_Z - z
    if depth <= 0.1:
        return None
    f = focal_length(size[1])
    return size[0] / 2 + f * x / depth, size[1] / 2 - f * y / depth, f / depth


class Starfield:
    def __init__(self, count: int, spread: float = 200.0, seed: int = 1) -> None:
        rand = random.Random(seed)
        half = spread / 2
        self.stars = [
            (rand.uniform(-half, half), rand.uniform(-half, half), rand.uniform(-half, half))
            for _ in range(count)
        ]
        self.rot_x = 0.0
        self.rot_y = 0.0

    def step(self) -> None:
        self.rot_x += 0.0001
        self.rot_y += 0.0002

    def draw(self, surface: pygame.Surface) -> None:
        size = surface.get_size()
        cx, sx = math.cos(self.rot_x), math.sin(self.rot_x)
        cy, sy = math.cos(self.rot_y), math.sin(self.rot_y)
        for x, y, z in self.stars:
            y, z = y * cx - z * sx, y * sx + z * cx
            x, z = x * cy + z * sy, -x * sy + z * cy
            projected = world_to_screen(x, y, z, size)
            if projected is None:
                continue
            px, py, _ = projected
            if 0 <= px < size[0] and 0 <= py < size[1]:
                surface.set_at((int(px), int(py)), STAR_COLOR)


def draw_glyph_surface(glyph: Glyph, color=SIGIL_COLOR) -> pygame.Surface:
    size = glyph.canvas_size
    surface = pygame.Surface((size, size), pygame.SRCALPHA)
    if len(glyph.points) >= 2:
        coords = [p.as_tuple() for p in glyph.points]
        # Soft glow pass under the main stroke.
        pygame.draw.lines(surface, (*color, 60), glyph.closed, coords, STROKE_WIDTH * 4)
        pygame.draw.lines(surface, (*color, 255), glyph.closed, coords, STROKE_WIDTH)
    return surface


def tile_surface(tile: pygame.Surface, repeat: tuple[int, int]) -> pygame.Surface:
    cols, rows = repeat
    w, h = tile.get_size()
    out = pygame.Surface((w * cols, h * rows), pygame.SRCALPHA)
    for row in range(rows):
        for col in range(cols):
            out.blit(tile, (col * w, row * h))
    return out


def disc_texture(texture: pygame.Surface, diameter: int) -> pygame.Surface:
    scaled = pygame.transform.smoothscale(texture, (diameter, diameter))
    mask = pygame.Surface((diameter, diameter), pygame.SRCALPHA)
    pygame.draw.circle(mask, (255, 255, 255, 255), (diameter // 2, diameter // 2), diameter // 2)
    scaled.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MIN)
    return scaled


class PygameShieldRenderer:
    def __init__(self, size: tuple[int, int], assets_dir: str, star_count: int = 1500, seed: int = 1) -> None:
        self.size = size
        self.assets_dir = assets_dir
        self.starfield = Starfield(star_count, seed=seed)
        self.params: LayerParameters | None = None
        self.marker_sprites: list[tuple[Marker, pygame.Surface]] = []
        self.overlay_texture: pygame.Surface | None = None
        self.marker_spin = 0.0
        self._symbol_cache: dict[str, pygame.Surface] = {}

    def pixels_per_unit(self) -> float:
        return focal_length(self.size[1]) / CAMERA_Z

    def apply_layer_parameters(self, params: LayerParameters) -> None:
        self.params = params
        self.marker_sprites = [(m, self._marker_sprite(m)) for m in params.markers]
        self.overlay_texture = self._overlay_texture(params.overlay)

    def _symbol_image(self, symbol: str) -> pygame.Surface:
        if symbol in self._symbol_cache:
            return self._symbol_cache[symbol]
        path = os.path.join(self.assets_dir, f"{symbol}.png")
        image = None
        if os.path.exists(path):
            try:
                image = pygame.image.load(path).convert_alpha()
            except pygame.error as exc:
                print(f"Could not load symbol image {path}: {exc}", file=sys.stderr)
        if image is None:
            image = self._placeholder_symbol(symbol)
        self._symbol_cache[symbol] = image
        return image

    def _placeholder_symbol(self, symbol: str) -> pygame.Surface:
        surface = pygame.Surface((64, 64), pygame.SRCALPHA)
        pygame.draw.circle(surface, (255, 255, 255, 220), (32, 32), 28, 3)
        if pygame.font.get_init():
            label = pygame.font.Font(None, 40).render(symbol[:1].upper(), True, (255, 255, 255))
            surface.blit(label, label.get_rect(center=(32, 32)))
        return surface

    def _marker_sprite(self, marker: Marker) -> pygame.Surface:
        side = max(4, int(marker.scale * self.pixels_per_unit()))
        sprite = pygame.transform.smoothscale(self._symbol_image(marker.symbol), (side, side))
        sprite.set_alpha(int(marker.opacity * 255))
        return sprite

    def _overlay_texture(self, overlay: SigilOverlay) -> pygame.Surface | None:
        if not overlay.visible:
            return None
        tiled = tile_surface(draw_glyph_surface(overlay.glyph), overlay.repeat)
        return disc_texture(tiled, self._sphere_diameter())

    def _sphere_diameter(self) -> int:
        return max(2, int(2 * self.params.base.radius * self.pixels_per_unit()))

    def step(self) -> None:
        self.starfield.step()
        self.marker_spin += 0.01

    def draw(self, screen: pygame.Surface, millis: int) -> None:
        screen.fill(BG_COLOR)
        self.starfield.draw(screen)
        if self.params is None:
            return

        center = (self.size[0] // 2, self.size[1] // 2)
        unit = self.pixels_per_unit()
        layer = pygame.Surface(self.size, pygame.SRCALPHA)

        aura = self.params.aura
        if aura.intensity > 0:
            time = millis * 0.002
            alpha = (math.sin(time) * 0.1 + 0.3) * aura.intensity
            pygame.draw.circle(layer, (*aura.emissive, int(255 * alpha)), center, int(aura.radius * unit))

        base = self.params.base
        if base.opacity > 0:
            glow_alpha = int(255 * base.opacity * base.glow_intensity * 0.5)
            if glow_alpha > 0:
                pygame.draw.circle(layer, (*base.emissive, glow_alpha), center, int(base.radius * 1.1 * unit))
            pygame.draw.circle(layer, (*base.tint, int(255 * base.opacity)), center, int(base.radius * unit))
        screen.blit(layer, (0, 0))

        if self.overlay_texture is not None:
            texture = self.overlay_texture.copy()
            texture.set_alpha(int(255 * max(base.opacity, 0.0)))
            screen.blit(texture, texture.get_rect(center=center))

        for marker, sprite in self.marker_sprites:
            projected = world_to_screen(*marker.position, self.size)
            if projected is None:
                continue
            px, py, _ = projected
            spun = pygame.transform.rotate(sprite, math.degrees(self.marker_spin))
            screen.blit(spun, spun.get_rect(center=(int(px), int(py))))


class CuePlayer:
    def __init__(self, assets_dir: str) -> None:
        self.sounds: dict[Cue, pygame.mixer.Sound] = {}
        if not pygame.mixer.get_init():
            try:
                pygame.mixer.init()
            except pygame.error as exc:
                print(f"Audio unavailable, cues disabled: {exc}", file=sys.stderr)
                return
        for cue, filename in CUE_FILES.items():
            path = os.path.join(assets_dir, filename)
            try:
                self.sounds[cue] = pygame.mixer.Sound(path)
            except (pygame.error, FileNotFoundError) as exc:
                print(f"Could not load sound {path}: {exc}", file=sys.stderr)

    def play(self, cue: Cue) -> None:
        sound = self.sounds.get(cue)
        if sound is not None:
            sound.play()


def dispatch(messages, renderer: PygameShieldRenderer, cues: CuePlayer | None) -> None:
    for message in messages:
        if isinstance(message, LayerUpdate):
            renderer.apply_layer_parameters(message.params)
        elif isinstance(message, CueSignal) and cues is not None:
            cues.play(message.cue)
