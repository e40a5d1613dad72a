# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/dv/apb_regfile_sb.py

"""Scoreboard for apb_regfile."""

from __future__ import annotations

import pyuvm

from regbus.shared.dv import BaseSb, Clock

from .apb_regfile_item import ApbRegfileItem, log_transaction
from .apb_regfile_ref_model import ApbRegfileRefModel


class ApbRegfileSb(BaseSb[ApbRegfileItem]):
    """Check every observed transfer against the reference model.

    - slave_error set: log the fault, count it, no mutation, no comparison
    - write, no error: commit write_data to the reference memory
    - read, no error: compare the observed outputs with the reference
      expectation; a difference is a mismatch (``err_cnt``), logged either
      way

    A transfer to an unaddressable register that completes without
    slave_error is counted apart, in ``unflagged_err_cnt``: it is not a
    data mismatch, but the slave failed to flag it, so the run fails.
    """

    def __init__(
        self,
        name: str = "sb",
        parent: pyuvm.uvm_component | None = None,
        ref_model: ApbRegfileRefModel | None = None,
    ) -> None:
        super().__init__(name, parent, ref_model or ApbRegfileRefModel())
        self.ref: ApbRegfileRefModel = self.ref_model  # type: ignore[assignment]
        self.clock: Clock | None = None
        self.write_cnt: int = 0
        self.read_cnt: int = 0
        self.fault_cnt: int = 0
        self.unflagged_err_cnt: int = 0

    @property
    def mismatches(self) -> int:
        """Valid reads whose data disagreed with the reference."""
        return self.err_cnt

    @property
    def fail_cnt(self) -> int:
        return self.err_cnt + self.unflagged_err_cnt

    def check(self, tr: ApbRegfileItem) -> None:
        log_transaction(self.logger, "SCO", tr, self.clock)
        if tr.slave_error:
            self.fault_cnt += 1
            self.logger.warning(
                "[SCO] slave error on %s addr=%d: no update, no check",
                tr.kind,
                tr.addr,
            )
            return

        exp = self.ref.calc_exp(tr)
        if exp.slave_error:
            self.unflagged_err_cnt += 1
            self.logger.error(
                "[SCO] UNFLAGGED %s addr=%d: expected slave_error, got none",
                tr.kind,
                tr.addr,
            )
            return

        if tr.is_write:
            self.write_cnt += 1
            self.logger.debug(
                "[SCO] write mem[%d]=0x%02x committed", tr.addr, tr.write_data
            )
            return

        self.read_cnt += 1
        if tr.compare_out(exp):
            self.pass_cnt += 1
            self.logger.info(
                "[SCO] read addr=%d data=0x%02x matches", tr.addr, tr.read_data
            )
        else:
            self.err_cnt += 1
            self.logger.error(
                "[SCO] MISMATCH read addr=%d: exp=%s act=%s",
                tr.addr,
                exp.outputs_str(),
                tr.outputs_str(),
            )
            self.logger.error("REF_MODEL_STATE: %s", self.ref.snapshot_state())

    def report_phase(self) -> None:
        self.logger.debug("report_phase begin")
        self.logger.info(
            "ApbRegfileSb summary: transactions=%d writes=%d reads=%d "
            "faults=%d mismatches=%d unflagged=%d",
            self.vect_cnt,
            self.write_cnt,
            self.read_cnt,
            self.fault_cnt,
            self.err_cnt,
            self.unflagged_err_cnt,
        )
        super().report_phase()
        self.logger.debug("report_phase end")
