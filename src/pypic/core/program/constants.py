"""Constant-block scope: reserve named registers with ``cblock``/``endc``."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pypic.core._constants import _CBLOCK_BASE
from pypic.core.format import directive

if TYPE_CHECKING:
    from .context import Program


class ConstantBlock:
    """Scoped builder active inside ``Program.constants()``.

    Every call made on the block, whatever its name, reserves a register of
    that name. Registers are allocated by the assembler in declaration order
    starting at the block base (0x08); there is no explicit address or value.

    Example:
        with prog.constants() as c:
            c.counter()
            c.flags()
    """

    def __init__(self, program: Program) -> None:
        self._program = program
        self._buffer = program.buffer
        self._open = False

    def __enter__(self) -> ConstantBlock:
        self._program._start_constants(self)
        self._buffer.append(directive(f"cblock 0x{_CBLOCK_BASE:02x}"))
        self._open = True
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._open = False
        self._program._end_constants()
        if exc_type is None:
            self._buffer.append(directive("endc"))
            self._buffer.append("")

    def __call__(self, body: Callable[[ConstantBlock], None]) -> Callable[[ConstantBlock], None]:
        """Run ``body`` inside the block. Also usable as a decorator."""
        with self as block:
            body(block)
        return body

    def declare(self, name: Any) -> None:
        """Reserve ``name``. Use this form for names that are not identifiers."""
        if not self._open:
            raise RuntimeError("declare() must be called inside a constants() block")
        self._buffer.append(f"\t\t{name}")

    def __getattr__(self, name: str) -> Callable[[], None]:
        if name.startswith("_"):
            raise AttributeError(name)

        def _declare() -> None:
            self.declare(name)

        return _declare
