"""Tests for LineBuffer and line formatting helpers."""

from __future__ import annotations

import pytest
from pyrsistent import PVector

from pypic.core.buffer import LineBuffer
from pypic.core.format import binary_literal, hex_literal, instruction, label


class TestLineBuffer:
    def test_append_preserves_order(self):
        buf = LineBuffer()
        buf.append("b")
        buf.append("a")
        buf.append("b")

        assert list(buf) == ["b", "a", "b"]
        assert len(buf) == 3

    def test_lines_snapshot_is_immutable(self):
        buf = LineBuffer(["one"])
        snapshot = buf.lines
        buf.append("two")

        assert isinstance(snapshot, PVector)
        assert snapshot.tolist() == ["one"]
        assert buf.lines.tolist() == ["one", "two"]

    def test_closed_buffer_rejects_lines(self):
        buf = LineBuffer()
        buf.close()

        assert buf.closed
        with pytest.raises(RuntimeError):
            buf.append("late")

    def test_text(self):
        buf = LineBuffer()
        buf.extend(["\tend", ""])

        assert buf.text() == "\tend\n"


class TestFormat:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("main", "Main"),
            ("four_microsecond_delay", "Four_microsecond_delay"),
            ("readADC", "ReadADC"),
            ("Main", "Main"),
            ("", ""),
        ],
    )
    def test_label(self, name, expected):
        assert label(name) == expected

    def test_label_is_deterministic(self):
        assert label("blink_led") == label("blink_led")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "0x0"), (5, "0x5"), (0x23, "0x23"), (255, "0xff")],
    )
    def test_hex_literal(self, value, expected):
        assert hex_literal(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "b'00000000'"), (0b1111, "b'00001111'"), (0b10011000, "b'10011000'")],
    )
    def test_binary_literal(self, value, expected):
        assert binary_literal(value) == expected

    def test_instruction(self):
        assert instruction("movwf", "foo") == "\tmovwf\tfoo"
        assert instruction("bsf", "GPIO", 0) == "\tbsf\tGPIO, 0"
        assert instruction("option") == "\toption"
