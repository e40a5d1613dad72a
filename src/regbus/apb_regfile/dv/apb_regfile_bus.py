# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/dv/apb_regfile_bus.py

"""Bus signal set shared by the driver, the slave and the monitor."""

from __future__ import annotations

from regbus.shared.dv import Signal

DATA_WIDTH = 8


class ApbBus:  # pylint: disable=too-many-instance-attributes
    """APB-style wires between the bench and the slave.

    Driver -> slave: paddr, psel, penable, pwdata, pwrite
    Slave -> monitor: prdata, pready, pslverr
    Bench: pclk (toggled by the clock), presetn (active low, reset driver)

    Every wire starts as X until something drives it.
    """

    INPUTS = ("paddr", "psel", "penable", "pwdata", "pwrite")
    OUTPUTS = ("prdata", "pready", "pslverr")

    def __init__(self, addr_width: int = 5) -> None:
        if addr_width < 5:
            raise ValueError(f"addr_width must be >= 5, got {addr_width}")
        self.addr_width = addr_width
        self.pclk = Signal("pclk")
        self.presetn = Signal("presetn")
        self.paddr = Signal("paddr", addr_width)
        self.psel = Signal("psel")
        self.penable = Signal("penable")
        self.pwdata = Signal("pwdata", DATA_WIDTH)
        self.pwrite = Signal("pwrite")
        self.prdata = Signal("prdata", DATA_WIDTH)
        self.pready = Signal("pready")
        self.pslverr = Signal("pslverr")

    def __repr__(self) -> str:
        fields = " ".join(
            f"{n}={getattr(self, n).value}"
            for n in ("presetn", *self.INPUTS, *self.OUTPUTS)
        )
        return f"ApbBus({fields})"
