"""Tests for the input handlers and their outbox messages."""

from aura_shield.controller import CueSignal, LayerUpdate, ShieldController
from aura_shield.session import Cue, Stage


def drain(controller: ShieldController) -> list:
    return list(controller.drain())


def at_construction() -> ShieldController:
    controller = ShieldController()
    controller.on_start_pressed()
    controller.on_energy_answer("Guardian")
    drain(controller)
    return controller


class TestHandlers:

    def test_start_emits_transition(self):
        controller = ShieldController()
        outcome = controller.on_start_pressed()
        assert outcome.accepted
        assert outcome.stage is Stage.DIAGNOSTIC
        messages = drain(controller)
        assert messages[0] == CueSignal(Cue.TRANSITION, Stage.DIAGNOSTIC)
        assert isinstance(messages[1], LayerUpdate)
        assert messages[1].params.aura.intensity == 0.5

    def test_energy_answer_moves_to_construction(self):
        controller = ShieldController()
        controller.on_start_pressed()
        outcome = controller.on_energy_answer("Empath")
        assert outcome.accepted
        assert controller.stage is Stage.CONSTRUCTION
        assert controller.session.energy_type == "Empath"

    def test_energy_answer_rejected_in_intro(self):
        controller = ShieldController()
        outcome = controller.on_energy_answer("Empath")
        assert not outcome
        assert controller.stage is Stage.INTRO
        assert controller.session.energy_type is None
        assert drain(controller) == []

    def test_choice_emits_layer_update(self):
        controller = at_construction()
        assert controller.on_color_picked(0x0000FF)
        (message,) = drain(controller)
        assert isinstance(message, LayerUpdate)
        assert message.params.base.tint == (0, 0, 255)

    def test_choices_rejected_outside_construction(self):
        controller = ShieldController()
        assert not controller.on_color_picked(0x0000FF)
        assert not controller.on_symbol_picked("flame")
        assert not controller.on_sigil_text_submitted("SHIELD")
        assert controller.choices.is_empty()
        assert drain(controller) == []

    def test_invalid_color_rejected(self):
        controller = at_construction()
        outcome = controller.on_color_picked("not a color")
        assert not outcome
        assert outcome.reason
        assert controller.choices.color is None
        assert drain(controller) == []

    def test_malformed_color_triple_rejected(self):
        controller = at_construction()
        outcome = controller.on_color_picked((None, 0, 0))
        assert not outcome
        assert outcome.stage is Stage.CONSTRUCTION
        assert controller.choices.color is None
        assert not controller.choices.color_done
        assert drain(controller) == []

    def test_non_text_sigil_rejected(self):
        controller = at_construction()
        for value in (None, 42, ["A", "B"]):
            outcome = controller.on_sigil_text_submitted(value)
            assert not outcome
        assert controller.choices.sigil is None
        assert drain(controller) == []

    def test_digit_word_sigil(self):
        controller = at_construction()
        assert controller.on_sigil_text_submitted("R2D2")
        assert controller.choices.sigil_done
        assert len(controller.choices.sigil.points) == 4

    def test_activate_not_ready_reports_missing(self):
        controller = at_construction()
        controller.on_color_picked(0x0000FF)
        drain(controller)
        outcome = controller.on_activate_pressed()
        assert not outcome
        assert outcome.missing == ("symbol", "sigil")
        assert outcome.stage is Stage.CONSTRUCTION
        assert drain(controller) == []


class TestScenarios:

    def test_full_session(self):
        controller = at_construction()
        assert controller.on_color_picked("#0000ff")
        assert controller.on_symbol_picked("flame")
        assert controller.on_sigil_text_submitted("SHIELD")
        assert controller.choices.is_complete()
        drain(controller)

        outcome = controller.on_activate_pressed()
        assert outcome.accepted
        assert controller.stage is Stage.ACTIVATION
        messages = drain(controller)
        cues = [m.cue for m in messages if isinstance(m, CueSignal)]
        assert cues == [Cue.TRANSITION, Cue.ACTIVATION]
        update = next(m for m in messages if isinstance(m, LayerUpdate))
        assert update.params.aura.intensity == 1.0
        assert len(update.params.markers) == 3
        assert update.params.overlay.visible

    def test_choices_frozen_after_activation(self):
        controller = at_construction()
        controller.on_color_picked(0x0000FF)
        controller.on_symbol_picked("flame")
        controller.on_sigil_text_submitted("SHIELD")
        controller.on_activate_pressed()
        before = controller.session.snapshot()
        assert not controller.on_color_picked(0xFF0000)
        assert controller.session.snapshot() == before

    def test_blank_sigil_blocks_activation(self):
        controller = at_construction()
        controller.on_color_picked(0x0000FF)
        controller.on_symbol_picked("flame")
        assert controller.on_sigil_text_submitted("")
        assert not controller.choices.sigil_done
        assert not controller.on_activate_pressed()
        assert controller.stage is Stage.CONSTRUCTION

    def test_restart(self):
        controller = at_construction()
        controller.on_color_picked(0x0000FF)
        controller.on_symbol_picked("flame")
        controller.on_sigil_text_submitted("SHIELD")
        controller.on_activate_pressed()
        drain(controller)

        assert controller.on_restart_pressed()
        snapshot = controller.session.snapshot()
        assert snapshot.stage is Stage.INTRO
        assert snapshot.energy_type is None
        assert snapshot.choices.is_empty()
        messages = drain(controller)
        assert messages[0] == CueSignal(Cue.TRANSITION, Stage.INTRO)
        params = messages[1].params
        assert params.markers == ()
        assert params.base.opacity == 0.0
        assert params.aura.intensity == 0.0

    def test_restart_rejected_before_activation(self):
        controller = at_construction()
        assert not controller.on_restart_pressed()
        assert controller.stage is Stage.CONSTRUCTION
