# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/dv/apb_regfile_monitor.py


"""Monitor for apb_regfile: rebuilds completed transfers from the bus."""

from __future__ import annotations

from regbus.shared.dv import BaseMonitor

from .apb_regfile_bus import ApbBus
from .apb_regfile_item import ApbRegfileItem, log_transaction


class ApbRegfileMonitor(BaseMonitor[ApbRegfileItem]):
    """Sample the bus after every rising edge; emit one item per pready strobe.

    When pready is high the bus still holds the transfer's SETUP values, so
    paddr, pwdata, pwrite, prdata, pslverr, psel and penable are captured
    into a fresh item. The monitor then waits one more sample edge before
    handing the item on, frozen, through its analysis port.
    """

    async def sample_dut(self, dut: ApbBus) -> ApbRegfileItem:
        while True:
            await self.clock_sample_edge()
            if self._get_val(dut.pready.value) == 1:
                break
        # capture transaction from wires
        item = ApbRegfileItem(f"item{self.item_count}")
        item.addr = self._val_or_zero(dut, "paddr")
        item.write_data = self._val_or_zero(dut, "pwdata")
        item.is_write = self._val_or_zero(dut, "pwrite") == 1
        item.select = self._val_or_zero(dut, "psel") == 1
        item.enable = self._val_or_zero(dut, "penable") == 1
        item.read_data = self._val_or_zero(dut, "prdata")
        item.slave_error = self._val_or_zero(dut, "pslverr") == 1
        item.ready = True
        # outputs settle one cycle after pready
        await self.clock_sample_edge()
        log_transaction(self.logger, "MON", item, self.clock)
        return item

    def _val_or_zero(self, dut: ApbBus, name: str) -> int:
        v = self._get_val(getattr(dut, name).value)
        if v is None:
            self.logger.warning("%s is X/Z at pready, sampled as 0", name)
            return 0
        return v
