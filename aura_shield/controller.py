"""
Input-facing side of the session.

Each `on_*` handler maps one user action to a Session / ChoiceTracker
operation. Accepted actions queue one-way messages in `outbox` for the
rendering and audio collaborators; rejected actions change nothing and
queue nothing.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterator, Union

from aura_shield.choices import ChoiceSet
from aura_shield.errors import NotReady, PreconditionViolation, ShieldError
from aura_shield.layers import DEFAULT_STYLE, LayerParameters, ShieldStyle, project
from aura_shield.session import Cue, Session, Stage
from aura_shield.sigil import CANVAS_SIZE, MARGIN, generate


@dataclass(frozen=True)
class LayerUpdate:
    params: LayerParameters


@dataclass(frozen=True)
class CueSignal:
    cue: Cue
    stage: Stage


Message = Union[LayerUpdate, CueSignal]


@dataclass(frozen=True)
class Outcome:
    accepted: bool
    stage: Stage
    reason: str = ""
    missing: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.accepted


class ShieldController:
    def __init__(
        self,
        session: Session | None = None,
        style: ShieldStyle = DEFAULT_STYLE,
        canvas_size: int = CANVAS_SIZE,
        margin: int = MARGIN,
    ) -> None:
        self.session = session if session is not None else Session()
        self.style = style
        self.canvas_size = canvas_size
        self.margin = margin
        self.outbox: deque[Message] = deque()

    @property
    def stage(self) -> Stage:
        return self.session.stage

    @property
    def choices(self) -> ChoiceSet:
        return self.session.choices

    def current_parameters(self) -> LayerParameters:
        return project(self.session.choices, self.session.stage, self.style)

    def drain(self) -> Iterator[Message]:
        while self.outbox:
            yield self.outbox.popleft()

    def on_start_pressed(self) -> Outcome:
        return self._run(self._start)

    def on_energy_answer(self, tag: str) -> Outcome:
        return self._run(lambda: self._answer(tag))

    def on_color_picked(self, color) -> Outcome:
        return self._run(lambda: self._choose(lambda: self.session.tracker.set_color(color)))

    def on_symbol_picked(self, symbol: str) -> Outcome:
        return self._run(lambda: self._choose(lambda: self.session.tracker.set_symbol(symbol)))

    def on_sigil_text_submitted(self, text: str) -> Outcome:
        def submit() -> None:
            if not isinstance(text, str):
                raise PreconditionViolation(f"Sigil text must be a string: {text!r}")
            glyph = generate(text, self.canvas_size, self.margin)
            self.session.tracker.set_sigil(glyph, text)

        return self._run(lambda: self._choose(submit))

    def on_activate_pressed(self) -> Outcome:
        def activate() -> None:
            self.session.activate()
            self._emit_transition()
            self.outbox.append(CueSignal(Cue.ACTIVATION, self.session.stage))

        return self._run(activate)

    def on_restart_pressed(self) -> Outcome:
        def restart() -> None:
            self.session.reset()
            self._emit_transition()

        return self._run(restart)

    def _start(self) -> None:
        if self.session.stage is not Stage.INTRO:
            raise PreconditionViolation(f"start is only available in {Stage.INTRO.value}")
        self.session.advance()
        self._emit_transition()

    def _answer(self, tag: str) -> None:
        self.session.select_energy_type(tag)
        self.session.advance()
        self._emit_transition()

    def _choose(self, mutate: Callable[[], object]) -> None:
        if self.session.stage is not Stage.CONSTRUCTION:
            raise PreconditionViolation(
                f"shield choices are only accepted in {Stage.CONSTRUCTION.value}"
            )
        mutate()
        self.outbox.append(LayerUpdate(self.current_parameters()))

    def _emit_transition(self) -> None:
        self.outbox.append(CueSignal(Cue.TRANSITION, self.session.stage))
        self.outbox.append(LayerUpdate(self.current_parameters()))

    def _run(self, action: Callable[[], None]) -> Outcome:
        try:
            action()
        except ShieldError as exc:
            missing = exc.missing if isinstance(exc, NotReady) else ()
            return Outcome(False, self.session.stage, reason=str(exc), missing=missing)
        return Outcome(True, self.session.stage)

