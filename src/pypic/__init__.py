"""pypic: generate PIC10F202 assembly from a small Python DSL."""

from pypic.core import (
    Block,
    Command,
    ConstantBlock,
    InvalidPinError,
    LineBuffer,
    Program,
    program,
    replay,
)

__version__ = "1.0.0"

__all__ = [
    "Block",
    "Command",
    "ConstantBlock",
    "InvalidPinError",
    "LineBuffer",
    "Program",
    "program",
    "replay",
]
