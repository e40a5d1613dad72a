# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/base_monitor.py

"""Base monitor with BFM sampling hook."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_clock import ClockMixin
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseMonitor(ClockMixin, pyuvm.uvm_monitor, Generic[T]):
    """Base monitor with clock synchronization and analysis port infrastructure.

    This monitor provides the foundation for observing DUT signals and publishing
    transactions. Monitors are passive: they never write the bus.

    The monitor:
    - Creates its analysis port in build_phase
    - Implements the standard monitor run loop pattern
    - Freezes each transaction before publishing it
    - Tracks the number of items observed

    Subclasses must implement:
        sample_dut(dut): Wait for and sample the next transaction

    Attributes:
        ap: Analysis port for broadcasting observed transactions
        item_count: Number of transactions observed

    Example:
        >>> class MyMonitor(BaseMonitor[MyItem]):
        ...     async def sample_dut(self, dut):
        ...         await self.clock_sample_edge()
        ...         item = MyItem()
        ...         item.data = self._get_val(dut.data.value)
        ...         return item
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None = None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.ap: pyuvm.uvm_analysis_port
        self.item_count: int = 0
        # Bind once to help hot paths
        self._get_val = utils_dv.get_signal_value_int

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        self.ap = pyuvm.uvm_analysis_port("ap", self)
        self.logger.debug("build_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        tr: T
        while True:
            tr = await self.sample_dut(self._dut)
            self.item_count += 1
            self.ap.write(tr.freeze())

    async def sample_dut(self, dut: Any) -> T:
        """Return the next observed transaction."""
        raise NotImplementedError("Implement sample_dut here")
