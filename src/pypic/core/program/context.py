from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from typing import Any, ClassVar

from pyrsistent import PVector

from pypic.core._constants import (
    _CONFIG_FUSES,
    _DELAY_SECONDS,
    _DELAY_SUBROUTINE,
    _DEVICE_INCLUDE,
    _GPIO_BITS,
    _HIGH,
    _OPTION_VALUE,
    _OUT,
    _TRIS_BITS,
    _TRIS_DEFAULT,
)
from pypic.core.buffer import LineBuffer
from pypic.core.format import binary_literal, directive, hex_literal, instruction, label

from .constants import ConstantBlock


class InvalidPinError(ValueError):
    """Raised when set_io() is given a pin that cannot be driven."""


def _pin_mapping(pins: Mapping[str, str] | None, extra: Mapping[str, str]) -> dict[str, str]:
    merged = dict(pins or {})
    merged.update(extra)
    return merged


class Block:
    """Labelled block of instructions, used by subr(), block() and loop().

    Works as a context manager or called with a body function:
        with prog.loop("main"):
            prog.jump("main")

        @prog.subr("blink")
        def blink(p):
            p.set_io(gp0="hi")
    """

    def __init__(self, program: Program, name: Any, *, repeat: bool = False) -> None:
        self._program = program
        self._name = name
        self._repeat = repeat

    @property
    def label(self) -> str:
        return label(self._name)

    def __enter__(self) -> Program:
        self._program._emit(self.label)
        return self._program

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is not None:
            return
        self._program._emit("")
        if self._repeat:
            self._program.jump(self._name)

    def __call__(self, body: Callable[[Program], None]) -> Callable[[Program], None]:
        with self as prog:
            body(prog)
        return body


class Program:
    """PIC10F202 assembly generator.

    Each operation appends lines to the program's LineBuffer in call order.
    Construction seeds the device header, reset vector and the built-in
    4 microsecond delay subroutine. Any public name that is not an operation
    is treated as a call to the subroutine of that name:

        with Program() as prog:
            with prog.subr("blink"):
                prog.set_io(gp0="hi")
                prog.done(0)
            with prog.loop("main"):
                prog.blink()  # call Blink

        asm = prog.text()
    """

    OPERATIONS: ClassVar[frozenset[str]] = frozenset(
        {
            "subr",
            "done",
            "constants",
            "init_clock",
            "config_io",
            "set",
            "loop",
            "block",
            "set_io",
            "set_bit",
            "clear_bit",
            "test",
            "decrement_by",
            "increment_by",
            "copy",
            "test_carry",
            "add",
            "subtract",
            "subtract_and_set",
            "delay",
            "decrement_and_test",
            "jump",
            "increment",
            "decrement",
            "end_code",
        }
    )

    SCOPED_OPERATIONS: ClassVar[frozenset[str]] = frozenset(
        {"subr", "block", "loop", "constants"}
    )

    def __init__(self) -> None:
        self._buffer = LineBuffer()
        self._constant_block: ConstantBlock | None = None

        self._emit(directive(_DEVICE_INCLUDE))
        self._emit(directive(f"__config {_CONFIG_FUSES}"))
        self._emit("")
        self._emit(instruction("org", "0x00"))
        # Skip over the delay routine
        self._emit(instruction("goto", "$+2"))
        self._emit("")
        with self.subr(_DELAY_SUBROUTINE):
            self.done(0)
        self._emit("")

    def __enter__(self) -> Program:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is None and not self.finalized:
            self.end_code()

    # -- buffer access -----------------------------------------------------

    @property
    def buffer(self) -> LineBuffer:
        return self._buffer

    @property
    def code(self) -> PVector:
        """Snapshot of the generated lines."""
        return self._buffer.lines

    @property
    def finalized(self) -> bool:
        return self._buffer.closed

    def text(self) -> str:
        return self._buffer.text()

    def _emit(self, line: str) -> None:
        self._buffer.append(line)

    # -- scopes ------------------------------------------------------------

    def subr(self, name: Any) -> Block:
        """Define a subroutine: label, body, blank line."""
        return Block(self, name)

    def block(self, name: Any) -> Block:
        """Labelled block with no implicit jump."""
        return Block(self, name)

    def loop(self, name: Any) -> Block:
        """Labelled block followed by ``goto`` back to its own label."""
        return Block(self, name, repeat=True)

    def constants(self) -> ConstantBlock:
        """Open a ``cblock 0x08`` ... ``endc`` register declaration block."""
        return ConstantBlock(self)

    def _start_constants(self, block: ConstantBlock) -> None:
        if self._constant_block is not None:
            raise RuntimeError("Nested constants() block is not permitted")
        self._constant_block = block

    def _end_constants(self) -> None:
        self._constant_block = None

    # -- operations --------------------------------------------------------

    def done(self, w: int) -> None:
        """Return from subroutine with ``w`` in the working register."""
        self._emit(instruction("retlw", hex_literal(w)))
        self._emit("")

    def init_clock(self) -> None:
        """Load OSCCAL from W (the factory calibration value at reset) and set OPTION."""
        self._emit(instruction("movwf", "OSCCAL"))
        self._emit(instruction("movlw", binary_literal(_OPTION_VALUE)))
        self._emit(instruction("option"))
        self._emit("")

    def config_io(self, pins: Mapping[str, str] | None = None, **kwargs: str) -> None:
        """Set pin directions. ``"out"`` clears the TRIS bit; anything else sets it.

        Pins left out of the mapping stay inputs. Unknown pin names are ignored.
        """
        tris = _TRIS_DEFAULT
        for pin, direction in _pin_mapping(pins, kwargs).items():
            bit = _TRIS_BITS.get(pin)
            if bit is None:
                continue
            if direction == _OUT:
                tris &= ~(1 << bit)
            else:
                tris |= 1 << bit

        self._emit(instruction("movlw", binary_literal(tris)))
        self._emit(instruction("tris", "GPIO"))
        self._emit("")

    def set(self, sym: Any, val: int) -> None:
        self._emit(instruction("movlw", hex_literal(val)))
        self._emit(instruction("movwf", sym))
        self._emit("")

    def set_io(self, pins: Mapping[str, str] | None = None, **kwargs: str) -> None:
        """Drive output pins ``"hi"`` (bsf) or low (bcf).

        Raises:
            InvalidPinError: For any pin other than gp0, gp1 or gp2.
        """
        for pin, level in _pin_mapping(pins, kwargs).items():
            bit = _GPIO_BITS.get(pin)
            if bit is None:
                raise InvalidPinError(f"Invalid port {pin} specified")
            mnemonic = "bsf" if level == _HIGH else "bcf"
            self._emit(instruction(mnemonic, "GPIO", bit))
        self._emit("")

    def set_bit(self, var: Any, bit: int) -> None:
        self._emit(instruction("bsf", var, hex_literal(bit)))
        self._emit("")

    def clear_bit(self, var: Any, bit: int) -> None:
        self._emit(instruction("bcf", var, hex_literal(bit)))
        self._emit("")

    def test(self, var: Any, bit: int, target: Any) -> None:
        """Jump to ``target`` if ``bit`` of ``var`` is clear."""
        self._emit(instruction("btfss", var, hex_literal(bit)))
        self._emit(instruction("goto", label(target)))
        self._emit("")

    def decrement_by(self, val: int, sym: Any) -> None:
        self._emit(instruction("movlw", hex_literal(val)))
        self._emit(instruction("subwf", sym, "f"))
        self._emit("")

    def increment_by(self, val: int, sym: Any) -> None:
        self._emit(instruction("movlw", hex_literal(val)))
        self._emit(instruction("addwf", sym, "f"))
        self._emit("")

    def copy(self, src: Any, dst: Any) -> None:
        self._emit(instruction("movf", src, "w"))
        self._emit(instruction("movwf", dst))
        self._emit("")

    def test_carry(self, target: Any) -> None:
        """Jump to ``target`` if the carry flag is clear."""
        self._emit(instruction("btfss", "STATUS", 0))
        self._emit(instruction("goto", label(target)))
        self._emit("")

    def add(self, val: int, to: Any) -> None:
        """W = to + val. ``to`` itself is left unchanged."""
        self._emit(instruction("movlw", hex_literal(val)))
        self._emit(instruction("addwf", to, "w"))
        self._emit("")

    def subtract(self, val: int, frm: Any) -> None:
        """W = frm - val. ``frm`` itself is left unchanged."""
        self._emit(instruction("movlw", hex_literal(val)))
        self._emit(instruction("subwf", frm, "w"))
        self._emit("")

    def subtract_and_set(self, sym: Any, frm: Any) -> None:
        """frm = frm - sym. Emits no trailing blank line."""
        self._emit(instruction("movf", sym, "w"))
        self._emit(instruction("subwf", frm, "f"))

    def delay(self, secs: float) -> None:
        """Busy-wait by calling the 4 us delay routine ceil(secs / 4us) times."""
        count = math.ceil(secs / _DELAY_SECONDS)
        target = label(_DELAY_SUBROUTINE)
        for _ in range(count):
            self._emit(instruction("call", target))
        self._emit("")

    def decrement_and_test(self, var: Any, op: str, *operands: Any) -> None:
        """Decrement ``var``; unless it reached zero, run ``op(*operands)``.

        Example:
            prog.decrement_and_test("count", "jump", "again")
        """
        if op in self.SCOPED_OPERATIONS:
            raise TypeError(f"decrement_and_test() cannot run scoped operation {op!r}")
        self._emit(instruction("decfsz", var, "f"))
        self.dispatch(op, *operands)
        self._emit("")

    def jump(self, target: Any) -> None:
        self._emit(instruction("goto", label(target)))
        self._emit("")

    def increment(self, var: Any) -> None:
        self._emit(instruction("incf", var, "f"))
        self._emit("")

    def decrement(self, var: Any) -> None:
        self._emit(instruction("decf", var, "f"))
        self._emit("")

    def end_code(self) -> None:
        """Append the end-of-program marker and close the program."""
        if self.finalized:
            raise RuntimeError("end_code() already called for this program")
        self._emit(directive("end"))
        self._emit("")
        self._buffer.close()

    # -- dispatch ----------------------------------------------------------

    def call(self, name: Any) -> None:
        """Call the subroutine ``name``. Same as invoking ``prog.<name>()``."""
        self._emit(instruction("call", label(name)))

    def resolve(self, name: str) -> Callable[..., Any]:
        """Return the operation bound to ``name``, or a call to subroutine ``name``."""
        if name in self.OPERATIONS:
            return getattr(self, name)

        def _call() -> None:
            self.call(name)

        return _call

    def dispatch(self, name: str, *args: Any) -> Any:
        return self.resolve(name)(*args)

    def replay(self, commands: Iterable[tuple[Any, ...]]) -> None:
        """Replay ``(name, *args)`` commands against this program."""
        from .replay import replay

        replay(self, commands)

    def __getattr__(self, name: str) -> Callable[[], None]:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.resolve(name)

    @classmethod
    def load(cls, fn: Callable[[Program], None]) -> PVector:
        """Run ``fn`` against a new program, finalize it and return its lines."""
        prog = cls()
        with prog:
            fn(prog)
        return prog.code
