"""Construction choices (color, symbol, sigil) and their completion flags."""

from __future__ import annotations

from dataclasses import dataclass, replace

from aura_shield.errors import InvalidChoice
from aura_shield.geometry import RGB, parse_color
from aura_shield.sigil import Glyph

CHOICE_NAMES = ("color", "symbol", "sigil")


@dataclass(frozen=True)
class ChoiceSet:
    color: RGB | None = None
    symbol: str | None = None
    sigil: Glyph | None = None
    color_done: bool = False
    symbol_done: bool = False
    sigil_done: bool = False

    @property
    def sigil_text(self) -> str | None:
        return self.sigil.source_text if self.sigil is not None else None

    @property
    def has_sigil(self) -> bool:
        return self.sigil is not None and not self.sigil.is_empty

    def flags(self) -> dict[str, bool]:
        return {
            "color": self.color_done,
            "symbol": self.symbol_done,
            "sigil": self.sigil_done,
        }

    def missing(self) -> tuple[str, ...]:
        flags = self.flags()
        return tuple(name for name in CHOICE_NAMES if not flags[name])

    def is_complete(self) -> bool:
        return self.color_done and self.symbol_done and self.sigil_done

    def is_empty(self) -> bool:
        return self == EMPTY_CHOICES


EMPTY_CHOICES = ChoiceSet()


class ChoiceTracker:
    """Owns the current ChoiceSet. Every mutation swaps in a new snapshot."""

    def __init__(self, choices: ChoiceSet = EMPTY_CHOICES) -> None:
        self._choices = choices

    @property
    def choices(self) -> ChoiceSet:
        return self._choices

    def set_color(self, color) -> ChoiceSet:
        try:
            rgb = parse_color(color)
        except (TypeError, ValueError) as exc:
            raise InvalidChoice(str(exc)) from exc
        self._choices = replace(self._choices, color=rgb, color_done=True)
        return self._choices

    def set_symbol(self, symbol: str) -> ChoiceSet:
        if not isinstance(symbol, str) or not symbol.strip():
            raise InvalidChoice(f"Symbol identifier must be a non-empty string: {symbol!r}")
        self._choices = replace(self._choices, symbol=symbol, symbol_done=True)
        return self._choices

    def set_sigil(self, glyph: Glyph, source_text: str | None = None) -> ChoiceSet:
        if source_text is not None and source_text != glyph.source_text:
            glyph = replace(glyph, source_text=source_text)
        if glyph.is_empty:
            # Blank submission clears the overlay but never completes the choice.
            self._choices = replace(self._choices, sigil=glyph)
        else:
            self._choices = replace(self._choices, sigil=glyph, sigil_done=True)
        return self._choices

    def missing(self) -> tuple[str, ...]:
        return self._choices.missing()

    def is_complete(self) -> bool:
        return self._choices.is_complete()

    def reset(self) -> ChoiceSet:
        self._choices = EMPTY_CHOICES
        return self._choices
