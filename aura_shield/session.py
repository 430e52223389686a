"""Stage flow for a single shield session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from aura_shield.choices import ChoiceSet, ChoiceTracker
from aura_shield.errors import InvalidTransition, NotReady, PreconditionViolation


class Stage(Enum):
    INTRO = "intro"
    DIAGNOSTIC = "diagnostic"
    CONSTRUCTION = "construction"
    ACTIVATION = "activation"


STAGE_ORDER = (Stage.INTRO, Stage.DIAGNOSTIC, Stage.CONSTRUCTION, Stage.ACTIVATION)


class Cue(Enum):
    TRANSITION = "transition"
    ACTIVATION = "activation"


@dataclass(frozen=True)
class SessionSnapshot:
    stage: Stage
    energy_type: str | None
    choices: ChoiceSet


class Session:
    def __init__(self, tracker: ChoiceTracker | None = None) -> None:
        self.tracker = tracker if tracker is not None else ChoiceTracker()
        self._stage = Stage.INTRO
        self._energy_type: str | None = None

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def energy_type(self) -> str | None:
        return self._energy_type

    @property
    def choices(self) -> ChoiceSet:
        return self.tracker.choices

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(self._stage, self._energy_type, self.tracker.choices)

    def advance(self) -> Stage:
        if self._stage is Stage.CONSTRUCTION:
            # Leaving construction is activation and needs every choice.
            return self.activate()
        index = STAGE_ORDER.index(self._stage)
        if index + 1 >= len(STAGE_ORDER):
            raise InvalidTransition(self._stage, "advance")
        self._stage = STAGE_ORDER[index + 1]
        return self._stage

    def select_energy_type(self, tag: str) -> str:
        if self._stage is not Stage.DIAGNOSTIC:
            raise PreconditionViolation(
                f"energy type can only be chosen in {Stage.DIAGNOSTIC.value}, "
                f"current stage is {self._stage.value}"
            )
        if not tag:
            raise PreconditionViolation("energy type must not be empty")
        self._energy_type = tag
        return tag

    def activate(self) -> Stage:
        if self._stage is not Stage.CONSTRUCTION:
            raise InvalidTransition(self._stage, "activate")
        missing = self.tracker.missing()
        if missing:
            raise NotReady(missing)
        self._stage = Stage.ACTIVATION
        return self._stage

    def reset(self) -> SessionSnapshot:
        if self._stage is not Stage.ACTIVATION:
            raise InvalidTransition(self._stage, "reset")
        # Single event at a time: nothing can read between these assignments.
        self.tracker.reset()
        self._energy_type = None
        self._stage = Stage.INTRO
        return self.snapshot()
