"""Tests for the command line entry point (headless export only)."""

import json

import pytest

from aura_shield.app import SigilTextBuffer, export_sigil, main
from aura_shield.config import load_config


class TestExport:

    def test_svg_export(self, tmp_path, capsys):
        out = tmp_path / "shield.svg"
        code = main(["--config", str(tmp_path / "missing.json"), "--sigil", "SHIELD", "--out", str(out)])
        assert code == 0
        assert out.exists()
        assert "<polygon" in out.read_text(encoding="utf-8")
        assert f"Wrote: {out}" in capsys.readouterr().out

    def test_png_export(self, tmp_path):
        pytest.importorskip("PIL")
        out = export_sigil("WARD", tmp_path / "ward.png", 160, 10, "#000000")
        assert out.exists()

    def test_unknown_format(self, tmp_path, capsys):
        code = main(["--config", str(tmp_path / "missing.json"), "--sigil", "WARD", "--out", str(tmp_path / "ward.gif")])
        assert code == 2
        assert "Unsupported sigil format" in capsys.readouterr().err

    def test_config_sets_canvas(self, tmp_path):
        config_path = tmp_path / "shield_config.json"
        config_path.write_text(json.dumps({"canvas_size": 64}), encoding="utf-8")
        out = tmp_path / "small.svg"
        assert main(["--config", str(config_path), "--sigil", "AB", "--out", str(out)]) == 0
        assert 'width="64"' in out.read_text(encoding="utf-8")


class TestConfig:

    def test_missing_config_is_empty(self, tmp_path):
        assert load_config(str(tmp_path / "nope.json")) == {}

    def test_load_config(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text('{"fps": 30}', encoding="utf-8")
        assert load_config(str(path)) == {"fps": 30}


class TestSigilTextBuffer:
    """Typed words keep every character, digits included."""

    def test_digits_kept(self):
        buffer = SigilTextBuffer()
        for ch in "R2D2":
            buffer.feed(ch)
            buffer.end_frame()
        assert buffer.text == "R2D2"

    def test_command_key_echo_dropped(self):
        """The text event from a color shortcut is not typed into the word."""
        buffer = SigilTextBuffer()
        buffer.feed("A")
        buffer.command_key("2")
        buffer.feed("2")
        buffer.end_frame()
        buffer.feed("2")
        assert buffer.text == "A2"

    def test_echo_only_cleared_for_that_frame(self):
        buffer = SigilTextBuffer()
        buffer.command_key("3")
        buffer.end_frame()
        buffer.feed("3")
        assert buffer.text == "3"

    def test_other_text_after_command_kept(self):
        buffer = SigilTextBuffer()
        buffer.command_key("1")
        buffer.feed("X")
        buffer.feed("1")
        assert buffer.text == "X1"

    def test_backspace_and_clear(self):
        buffer = SigilTextBuffer()
        buffer.feed("AB")
        buffer.backspace()
        assert buffer.text == "A"
        buffer.clear()
        assert buffer.text == ""
