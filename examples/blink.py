"""Blink an LED on GP0 at 1 Hz.

Demonstrates:
  1. Clock calibration and pin direction setup
  2. A subroutine defined with a body function and called by name
  3. An infinite main loop using the built-in busy-wait delay

Generate the assembly with:
    pypic examples/blink.py -o blink.asm
"""

from pypic import Program

prog = Program()

prog.init_clock()
prog.config_io(gp0="out")


@prog.subr("half_second")
def half_second(p):
    p.delay(0.5)
    p.done(0)


with prog.loop("main"):
    prog.set_io(gp0="hi")
    prog.half_second()
    prog.set_io(gp0="lo")
    prog.half_second()
