"""PIC10F202 assembly generator engine.

Every DSL operation appends lines to one ordered LineBuffer; the buffer,
read back after end_code(), is the generated program.
"""

from pypic.core.buffer import LineBuffer
from pypic.core.format import binary_literal, hex_literal, instruction, label
from pypic.core.program import (
    Block,
    Command,
    ConstantBlock,
    InvalidPinError,
    Program,
    program,
    replay,
)

__all__ = [
    "Block",
    "Command",
    "ConstantBlock",
    "InvalidPinError",
    "LineBuffer",
    "Program",
    "binary_literal",
    "hex_literal",
    "instruction",
    "label",
    "program",
    "replay",
]
