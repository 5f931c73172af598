"""Replay a recorded sequence of builder commands against a Program.

A command is a tuple ``(name, *args)``. Scoped operations (``subr``,
``block``, ``loop``, ``constants``) take their body as a nested command
sequence in the last position:

    replay(prog, [
        ("constants", [("counter",), ("flags",)]),
        ("loop", "main", [
            ("set", "counter", 0x23),
            ("blink",),
        ]),
    ])

Names that are not operations become subroutine calls, the same rule
``Program`` applies to attribute calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from .constants import ConstantBlock
from .context import Program

Command = Sequence[Any]


def _split(command: Command) -> tuple[str, tuple[Any, ...]]:
    if isinstance(command, str):
        return command, ()
    if not command:
        raise ValueError("Empty command")
    name, *args = command
    if not isinstance(name, str):
        raise TypeError(f"Command name must be str, got {type(name).__name__}")
    return name, tuple(args)


def _replay_constants(block: ConstantBlock, commands: Iterable[Command]) -> None:
    for command in commands:
        name, args = _split(command)
        if args:
            raise TypeError(f"Constant {name!r} takes no arguments, got {len(args)}")
        block.declare(name)


def replay(program: Program, commands: Iterable[Command]) -> None:
    """Apply ``commands`` to ``program`` in order."""
    for command in commands:
        name, args = _split(command)
        if name not in Program.SCOPED_OPERATIONS:
            program.dispatch(name, *args)
            continue

        if not args:
            raise TypeError(f"{name}() requires a body command sequence")
        *scope_args, body = args
        scope = program.dispatch(name, *scope_args)
        if isinstance(scope, ConstantBlock):
            with scope as block:
                _replay_constants(block, body)
        else:
            with scope:
                replay(program, body)
