"""Tests for the @program decorator."""

from __future__ import annotations

from pypic.core.program import Program, program
from tests.conftest import body


def test_program_decorator_builds_finalized_program():
    @program
    def blinker(p):
        p.config_io(gp0="out")
        with p.loop("main"):
            p.set_io(gp0="hi")
            p.set_io(gp0="lo")

    assert isinstance(blinker, Program)
    assert blinker.finalized
    assert body(blinker)[-2:] == ["\tend", ""]
    assert "\tgoto\tMain" in blinker.code


def test_program_decorator_respects_explicit_end_code():
    @program
    def finished(p):
        p.increment("foo")
        p.end_code()

    assert list(finished.code).count("\tend") == 1
