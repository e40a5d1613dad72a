# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/dv/apb_regfile_ref_model.py

"""apb_regfile reference model.

The model keeps its own 16-byte memory, zero at construction, and changes
it only for transfers it judges valid (write, no slave error). It never
looks at the slave's register file: correctness is established only through
the observed prdata and pslverr.

Like the slave, the memory survives reset.
"""

from __future__ import annotations

from regbus.apb_regfile import NUM_REGS
from regbus.shared.dv import BaseRefModel

from .apb_regfile_item import ApbRegfileItem


class ApbRegfileRefModel(BaseRefModel[ApbRegfileItem]):
    """Golden register file."""

    def __init__(self, name: str = "apb_regfile_ref_model") -> None:
        super().__init__(name)
        self.mem: bytearray = bytearray(NUM_REGS)

    @staticmethod
    def in_range(addr: int) -> bool:
        """True for an addressable register."""
        return 0 <= addr < NUM_REGS

    def snapshot_state(self) -> dict[str, list[int]]:
        """Return a snapshot of the memory for debug."""
        return {"mem": list(self.mem)}

    def calc_exp(self, tr: ApbRegfileItem) -> ApbRegfileItem:
        """Return the expected result of ``tr``, committing valid writes.

        The returned item is a clone of ``tr`` whose outputs hold the
        expectation: ``read_data`` from memory for in-range reads, and
        ``slave_error`` for out-of-range addresses.
        """
        exp = tr.clone()
        exp.ready = True
        if not self.in_range(tr.addr):
            exp.slave_error = True
            exp.read_data = 0
            return exp
        exp.slave_error = False
        if tr.is_write:
            exp.read_data = 0
            if not tr.slave_error:
                self.mem[tr.addr] = tr.write_data
                self.logger.debug("REF WRITE: mem[%d]=0x%02x", tr.addr, tr.write_data)
        else:
            exp.read_data = self.mem[tr.addr]
        return exp
