"""Program generator and scoped builders for the PIC assembly DSL.

Provides the builder API:

    with Program() as prog:
        with prog.constants() as c:
            c.counter()
        with prog.loop("main"):
            prog.increment("counter")

    asm = prog.text()
"""

from .constants import ConstantBlock
from .context import (
    Block,
    InvalidPinError,
    Program,
)
from .decorators import program
from .replay import Command, replay

__all__ = [
    # Contexts & Structure
    "Block",
    "ConstantBlock",
    "Program",
    # Decorators & Replay
    "Command",
    "program",
    "replay",
    # Errors
    "InvalidPinError",
]
