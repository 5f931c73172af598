from __future__ import annotations

from collections.abc import Callable

from .context import Program


def program(fn: Callable[[Program], None], /) -> Program:
    """Decorator to build a finalized Program from a function.

    Example:
        @program
        def blinker(p):
            p.config_io(gp0="out")
            with p.loop("main"):
                p.set_io(gp0="hi")
                p.delay(0.5)
                p.set_io(gp0="lo")
                p.delay(0.5)

        asm = blinker.text()
    """
    prog = Program()
    with prog:
        fn(prog)
    return prog
