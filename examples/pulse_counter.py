"""Count ten button presses on GP3, then pulse GP1.

Demonstrates:
  1. Reserving registers with a constants() block
  2. Polling an input bit and branching with test()
  3. A decrement-and-branch countdown with decrement_and_test()
"""

from pypic import program


@program
def logic(p):
    with p.constants() as c:
        c.presses()

    p.init_clock()
    p.config_io(gp1="out", gp3="in")

    with p.block("reset"):
        p.set("presses", 10)

    with p.loop("wait_press"):
        p.test("GPIO", 3, "wait_press")
        p.decrement_and_test("presses", "jump", "wait_press")
        p.set_io(gp1="hi")
        p.delay(1.0e-3)
        p.set_io(gp1="lo")
        p.jump("reset")
