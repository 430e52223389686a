"""Rejection taxonomy for session and choice operations.

None of these are fatal. The controller turns them into rejected outcomes and
leaves the session untouched.
"""

from __future__ import annotations


class ShieldError(Exception):
    """Base class for rejected shield operations."""


class InvalidTransition(ShieldError):
    """Stage change not permitted from the current stage."""

    def __init__(self, stage, action: str) -> None:
        self.stage = stage
        self.action = action
        super().__init__(f"cannot {action} from stage {stage.value}")


class PreconditionViolation(ShieldError):
    """Operation called while its preconditions do not hold."""


class NotReady(PreconditionViolation):
    """Activation requested before every construction choice is made."""

    def __init__(self, missing: tuple[str, ...]) -> None:
        self.missing = missing
        super().__init__(f"shield not ready, missing: {', '.join(missing)}")


class InvalidChoice(PreconditionViolation, ValueError):
    """Color or symbol value that cannot be used for the shield."""
