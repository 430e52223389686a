"""Aura Shield: guided shield construction with procedural sigils."""

from aura_shield.choices import ChoiceSet, ChoiceTracker
from aura_shield.controller import CueSignal, LayerUpdate, Outcome, ShieldController
from aura_shield.errors import InvalidTransition, NotReady, PreconditionViolation, ShieldError
from aura_shield.layers import LayerParameters, ShieldStyle, project
from aura_shield.session import Cue, Session, SessionSnapshot, Stage
from aura_shield.sigil import Glyph, generate

__all__ = [
    "ChoiceSet",
    "ChoiceTracker",
    "Cue",
    "CueSignal",
    "Glyph",
    "InvalidTransition",
    "LayerParameters",
    "LayerUpdate",
    "NotReady",
    "Outcome",
    "PreconditionViolation",
    "Session",
    "SessionSnapshot",
    "ShieldController",
    "ShieldError",
    "ShieldStyle",
    "Stage",
    "generate",
    "project",
]
