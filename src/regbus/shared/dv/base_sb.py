# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/base_sb.py

"""Top level scoreboard."""

from __future__ import annotations

import asyncio
from typing import Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_item import BaseItem
from .base_ref_model import BaseRefModel
from .base_sync import CompletionSignal

T = TypeVar("T", bound=BaseItem)


class BaseSb(pyuvm.uvm_scoreboard, Generic[T]):
    """Scoreboard that checks monitored transactions against a reference model.

    Architecture:
        Monitor ap → analysis_export → fifo → check() ↔ ref_model
                                                  ↓
                                              item_done (to sequence)

    The monitor publishes into an unbounded FIFO so the scoreboard may lag
    behind the bus without losing anything. For every transaction the
    scoreboard calls ``check()`` and then notifies ``item_done``.

    Statistics:
        vect_cnt: Total number of transactions processed
        pass_cnt: Number of passing comparisons
        err_cnt: Number of failing comparisons (mismatches)
        fail_cnt: Failures that decide the verdict (err_cnt unless overridden)

    Subclasses must implement:
        check(tr): Update the reference model and/or compare

    Reference:
        C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
        SNUG 2013 (Silicon Valley)

    Example:
        >>> mon.ap.connect(sb.analysis_export)
        >>> seq.completions.append(sb.item_done)
    """

    def __init__(
        self,
        name: str,
        parent: pyuvm.uvm_component | None = None,
        ref_model: BaseRefModel[T] | None = None,
    ) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.ref_model: BaseRefModel[T] | None = ref_model
        # asyncio queue: pyuvm's uvm_tlm_analysis_fifo blocks on cocotb triggers
        self.fifo: asyncio.Queue[T] = asyncio.Queue()
        self.analysis_export = pyuvm.uvm_subscriber.uvm_AnalysisImp(
            "analysis_export", self, self.fifo.put_nowait
        )
        self.item_done: CompletionSignal = CompletionSignal(f"{name}.item_done")
        self.observed: list[T] = []
        self.vect_cnt: int = 0
        self.pass_cnt: int = 0
        self.err_cnt: int = 0

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        while True:
            tr = await self.fifo.get()
            self.vect_cnt += 1
            self.observed.append(tr)
            self.check(tr)
            self.item_done.notify()

    def check(self, tr: T) -> None:
        """Check one transaction."""
        raise NotImplementedError

    @property
    def fail_cnt(self) -> int:
        """Failures counted against the verdict."""
        return self.err_cnt

    @property
    def passed(self) -> bool:
        """True when nothing failed."""
        return self.fail_cnt == 0

    def report_phase(self) -> None:
        self.logger.debug("report_phase begin")
        super().report_phase()
        if self.passed:
            self.logger.info(
                "*** TEST PASSED - %d ran, %d passed ***", self.vect_cnt, self.pass_cnt
            )
        else:
            self.logger.error(
                "*** TEST FAILED - %d ran, %d passed, %d failed ***",
                self.vect_cnt,
                self.pass_cnt,
                self.fail_cnt,
            )
        self.logger.debug("report_phase end")
