"""Device constants for the PIC10F202 target."""

from __future__ import annotations

_DEVICE_INCLUDE = '#include "p10f202.inc"'


_CONFIG_FUSES = "_WDT_OFF & _CP_OFF & _MCLRE_OFF"


_DELAY_SUBROUTINE = "four_microsecond_delay"


_DELAY_SECONDS = 4.0e-6


_CBLOCK_BASE = 0x08


# OPTION register: ~GPWU disabled, ~GPPU enabled, T0CS internal clock,
# T0SE high-to-low, PSA to WDT, PS<2:0> 1:1.
_OPTION_VALUE = 0b10011000


# Pin name -> TRIS bit. GP3 is input-only, so it can be configured but not driven.
_TRIS_BITS: dict[str, int] = {
    "gp0": 0,
    "gp1": 1,
    "gp2": 2,
    "gp3": 3,
}


_GPIO_BITS: dict[str, int] = {
    "gp0": 0,
    "gp1": 1,
    "gp2": 2,
}


_TRIS_DEFAULT = 0b00001111


_OUT = "out"


_HIGH = "hi"
