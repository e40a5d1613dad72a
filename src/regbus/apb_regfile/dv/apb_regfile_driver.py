# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/dv/apb_regfile_driver.py


"""Driver for apb_regfile: two-phase SETUP/ACCESS handshake."""

from __future__ import annotations

import pyuvm

from regbus.shared.dv import BaseDriver

from .apb_regfile_bus import ApbBus
from .apb_regfile_item import ApbRegfileItem, log_transaction


class ApbRegfileDriver(BaseDriver[ApbRegfileItem]):
    """Drives one transfer per item, three drive edges per transfer.

    1. drive edge: SETUP, psel=1, paddr, pwdata (0 for reads), pwrite,
       penable=0
    2. drive edge: ACCESS, penable=1 with the SETUP values held
    3. drive edge: psel=penable=pwrite=0 (bus back to idle levels)

    Then ``item_done`` is notified. The slave has no wait states, so the
    ACCESS phase always completes on the rising edge between steps 2 and 3;
    pready is not sampled here.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None = None) -> None:
        super().__init__(name, parent)
        self.initial_dut_input_values = {
            "paddr": 0,
            "psel": 0,
            "penable": 0,
            "pwdata": 0,
            "pwrite": 0,
        }

    async def drive_item(self, dut: ApbBus, tr: ApbRegfileItem) -> None:
        # SETUP
        await self.clock_drive_edge()
        tr.select = True
        tr.enable = False
        dut.psel.value = 1
        dut.paddr.value = tr.addr
        dut.pwdata.value = tr.write_data if tr.is_write else 0
        dut.pwrite.value = int(tr.is_write)
        dut.penable.value = 0
        log_transaction(self.logger, "DRV", tr, self.clock)

        # ACCESS
        await self.clock_drive_edge()
        tr.enable = True
        dut.penable.value = 1
        self.logger.debug(
            "ACCESS %s addr=%d @ %d ns", tr.kind, tr.addr, self.clock.now_ns
        )

        # back to idle
        await self.clock_drive_edge()
        dut.psel.value = 0
        dut.penable.value = 0
        dut.pwrite.value = 0
        self.logger.debug("idle @ %d ns", self.clock.now_ns)
