"""Tests for the pulse counter example."""

from __future__ import annotations

import importlib
import sys
from types import ModuleType

import pytest

from tests.conftest import contains_run


@pytest.fixture
def pulse_counter() -> ModuleType:
    module_name = "examples.pulse_counter"
    if module_name in sys.modules:
        return importlib.reload(sys.modules[module_name])
    return importlib.import_module(module_name)


def test_register_is_reserved(pulse_counter: ModuleType) -> None:
    assert contains_run(
        pulse_counter.logic.code,
        ["\tcblock 0x08", "\t\tpresses", "\tendc"],
    )


def test_countdown_branches_back(pulse_counter: ModuleType) -> None:
    assert contains_run(
        pulse_counter.logic.code,
        ["\tdecfsz\tpresses, f", "\tgoto\tWait_press", "", ""],
    )


def test_program_is_finalized(pulse_counter: ModuleType) -> None:
    assert pulse_counter.logic.finalized
    assert pulse_counter.logic.code[-2:].tolist() == ["\tend", ""]
