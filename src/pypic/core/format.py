"""Line and literal formatting for PIC assembly output."""

from __future__ import annotations

from typing import Any


def label(name: Any) -> str:
    """Format an identifier as a label: first character upper-cased, rest unchanged.

    The same identifier always yields the same label, so a subroutine heading
    and every ``call``/``goto`` that targets it agree.
    """
    text = str(name)
    return text[:1].upper() + text[1:]


def hex_literal(value: int) -> str:
    """Render a byte value or bit index as ``0x`` hex, lowercase, unpadded."""
    return f"0x{value:x}"


def binary_literal(value: int) -> str:
    """Render an 8-bit mask as an assembler binary literal (``b'00001111'``)."""
    return f"b'{value:08b}'"


def instruction(mnemonic: str, *operands: Any) -> str:
    """Build an instruction line: tab, mnemonic, tab, comma-separated operands."""
    if not operands:
        return f"\t{mnemonic}"
    return f"\t{mnemonic}\t{', '.join(str(op) for op in operands)}"


def directive(text: str) -> str:
    return f"\t{text}"
