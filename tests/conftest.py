"""Pytest configuration and test helpers."""

from __future__ import annotations

from collections.abc import Sequence

from pypic.core.program import Program

HEADER = (
    '\t#include "p10f202.inc"',
    "\t__config _WDT_OFF & _CP_OFF & _MCLRE_OFF",
    "",
    "\torg\t0x00",
    "\tgoto\t$+2",
    "",
    "Four_microsecond_delay",
    "\tretlw\t0x0",
    "",
    "",
    "",
)


def body(prog: Program) -> list[str]:
    """Return the lines a program emitted after its fixed header.

    Args:
        prog: The program to inspect.

    Returns:
        Lines following the device header and built-in delay routine.
    """
    return list(prog.code[len(HEADER) :])


def contains_run(lines: Sequence[str], expected: Sequence[str]) -> bool:
    """Check that ``expected`` appears in ``lines`` as a contiguous run.

    Args:
        lines: Emitted lines.
        expected: Lines that must appear consecutively, in order.

    Returns:
        True if the run is present.
    """
    n = len(expected)
    return any(list(lines[i : i + n]) == list(expected) for i in range(len(lines) - n + 1))
