#!/usr/bin/env python3
"""Guided shield session in a pygame window, or headless sigil export.

Usage:
    python -m aura_shield.app
    python -m aura_shield.app --sigil SHIELD --out output/shield.svg
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from aura_shield.config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_ENERGY_TYPES,
    DEFAULT_PALETTE,
    DEFAULT_SYMBOLS,
    load_config,
)
from aura_shield.controller import Outcome, ShieldController
from aura_shield.geometry import parse_color, rgb_to_hex
from aura_shield.layers import ShieldStyle
from aura_shield.session import Stage
from aura_shield.sigil import CANVAS_SIZE, MARGIN, SigilStyle, generate, save_glyph_png, write_glyph_svg

HUD_COLOR = (157, 180, 222)
DISABLED_COLOR = (80, 88, 104)


def build_parser(config: dict, config_path: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Guided aura shield construction")
    parser.add_argument("--config", type=str, default=config_path, help="Config file")
    parser.add_argument("--width", type=int, default=config.get("width", 960), help="Window width")
    parser.add_argument("--height", type=int, default=config.get("height", 720), help="Window height")
    parser.add_argument("--fps", type=int, default=config.get("fps", 60), help="Frame rate")
    parser.add_argument(
        "--star-count",
        type=int,
        default=config.get("star_count", 1500),
        help="Number of background stars",
    )
    parser.add_argument(
        "--assets-dir",
        type=str,
        default=config.get("assets_dir", "assets"),
        help="Directory with symbol images and cue sounds",
    )
    parser.add_argument(
        "--canvas-size",
        type=int,
        default=config.get("canvas_size", CANVAS_SIZE),
        help="Sigil canvas size in pixels",
    )
    parser.add_argument(
        "--margin",
        type=int,
        default=config.get("margin", MARGIN),
        help="Sigil canvas margin in pixels",
    )
    parser.add_argument("--seed", type=int, default=config.get("seed", 1), help="Starfield seed")
    parser.add_argument(
        "--sigil",
        type=str,
        default=None,
        help="Export the sigil for this word instead of opening the window",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("output/sigil.svg"),
        help="Sigil export path (.svg or .png)",
    )
    parser.add_argument(
        "--background",
        type=str,
        default=None,
        help="Background fill for exported sigils (transparent by default)",
    )
    return parser


def export_sigil(text: str, out: Path, canvas_size: int, margin: int, background: str | None) -> Path:
    glyph = generate(text, canvas_size, margin)
    style = SigilStyle(background=background)
    suffix = out.suffix.lower()
    if suffix == ".svg":
        return write_glyph_svg(glyph, out, style)
    if suffix == ".png":
        return save_glyph_png(glyph, out, style)
    raise ValueError(f"Unsupported sigil format: {out.suffix or '(none)'}")


class SigilTextBuffer:
    """Typed sigil word.

    A key that triggers a command can also arrive as a TEXTINPUT event in
    the same frame; that one echo is dropped, every other character is kept.
    """

    def __init__(self) -> None:
        self.text = ""
        self._echo = ""

    def command_key(self, char: str) -> None:
        self._echo = char

    def feed(self, typed: str) -> None:
        if self._echo and typed == self._echo:
            self._echo = ""
            return
        self._echo = ""
        self.text += typed

    def backspace(self) -> None:
        self.text = self.text[:-1]

    def clear(self) -> None:
        self.text = ""
        self._echo = ""

    def end_frame(self) -> None:
        self._echo = ""


def hud_lines(controller: ShieldController, energy_types, palette, symbols, text: str, status: str) -> list[tuple[str, bool]]:
    stage = controller.stage
    choices = controller.choices
    if stage is Stage.INTRO:
        return [("Your energy shapes your shield.", True), ("[ENTER] Begin diagnostic", True)]
    if stage is Stage.DIAGNOSTIC:
        lines = [("When you are drained, what restores you?", True)]
        lines += [(f"[{i + 1}] {tag}", True) for i, tag in enumerate(energy_types)]
        return lines
    if stage is Stage.CONSTRUCTION:
        colors = "  ".join(f"[Ctrl+{i + 1}] {rgb_to_hex(c)}" for i, c in enumerate(palette))
        syms = "  ".join(f"[F{i + 1}] {s}" for i, s in enumerate(symbols))
        lines = [
            (f"Color: {colors}", True),
            (f"Symbol: {syms}", True),
            (f"Sigil word: {text}_   [ENTER] Generate", True),
            ("[TAB] Activate shield", choices.is_complete()),
        ]
        if status:
            lines.append((status, True))
        return lines
    return [
        (f"Shield active. Energy type: {controller.session.energy_type}", True),
        ("[R] Begin again", True),
    ]


def run_window(args, config: dict, controller: ShieldController) -> int:
    import pygame

    from aura_shield.renderer import CuePlayer, PygameShieldRenderer, dispatch

    energy_types = list(config.get("energy_types", DEFAULT_ENERGY_TYPES))
    palette = [parse_color(c) for c in config.get("palette", DEFAULT_PALETTE)]
    symbols = list(config.get("symbols", DEFAULT_SYMBOLS))

    pygame.init()
    size = (args.width, args.height)
    screen = pygame.display.set_mode(size)
    pygame.display.set_caption("Aura Shield")
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 26)

    renderer = PygameShieldRenderer(size, args.assets_dir, star_count=args.star_count, seed=args.seed)
    cues = CuePlayer(args.assets_dir)
    renderer.apply_layer_parameters(controller.current_parameters())

    function_keys = [pygame.K_F1, pygame.K_F2, pygame.K_F3, pygame.K_F4, pygame.K_F5, pygame.K_F6]
    buffer = SigilTextBuffer()
    status = ""
    running = True
    while running:
        outcome: Outcome | None = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                stage = controller.stage
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif stage is Stage.INTRO and event.key in (pygame.K_RETURN, pygame.K_SPACE):
                    outcome = controller.on_start_pressed()
                elif stage is Stage.DIAGNOSTIC and pygame.K_1 <= event.key <= pygame.K_9:
                    index = event.key - pygame.K_1
                    if index < len(energy_types):
                        buffer.command_key(str(index + 1))
                        outcome = controller.on_energy_answer(energy_types[index])
                elif stage is Stage.CONSTRUCTION:
                    if event.mod & pygame.KMOD_CTRL and pygame.K_1 <= event.key <= pygame.K_9:
                        index = event.key - pygame.K_1
                        buffer.command_key(str(index + 1))
                        if index < len(palette):
                            outcome = controller.on_color_picked(palette[index])
                    elif event.key in function_keys:
                        index = function_keys.index(event.key)
                        if index < len(symbols):
                            outcome = controller.on_symbol_picked(symbols[index])
                    elif event.key == pygame.K_BACKSPACE:
                        buffer.backspace()
                    elif event.key == pygame.K_RETURN:
                        outcome = controller.on_sigil_text_submitted(buffer.text)
                    elif event.key == pygame.K_TAB:
                        outcome = controller.on_activate_pressed()
                elif stage is Stage.ACTIVATION and event.key == pygame.K_r:
                    outcome = controller.on_restart_pressed()
                    if outcome:
                        buffer.clear()
            elif event.type == pygame.TEXTINPUT and controller.stage is Stage.CONSTRUCTION:
                buffer.feed(event.text)
        buffer.end_frame()

        if outcome is not None:
            status = "" if outcome else outcome.reason

        dispatch(controller.drain(), renderer, cues)
        renderer.step()
        renderer.draw(screen, pygame.time.get_ticks())

        y = 16
        for line, enabled in hud_lines(controller, energy_types, palette, symbols, buffer.text, status):
            label = font.render(line, True, HUD_COLOR if enabled else DISABLED_COLOR)
            screen.blit(label, (16, y))
            y += 24

        pygame.display.flip()
        clock.tick(args.fps)

    pygame.quit()
    return 0


def main(argv: list[str] | None = None) -> int:
    config_parser = argparse.ArgumentParser(add_help=False)
    config_parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help="Path to JSON config file",
    )
    config_args, remaining = config_parser.parse_known_args(argv)
    config = load_config(config_args.config)

    parser = build_parser(config, config_args.config)
    args = parser.parse_args(remaining)

    if args.sigil is not None:
        try:
            path = export_sigil(args.sigil, args.out, args.canvas_size, args.margin, args.background)
        except ValueError as exc:
            print(str(exc), file=sys.stderr)
            return 2
        print(f"Wrote: {path}")
        return 0

    try:
        style = ShieldStyle.from_config(config.get("style"))
    except (TypeError, ValueError) as exc:
        print(f"Invalid style in {args.config}: {exc}", file=sys.stderr)
        return 2
    controller = ShieldController(style=style, canvas_size=args.canvas_size, margin=args.margin)
    return run_window(args, config, controller)


if __name__ == "__main__":
    raise SystemExit(main())
