# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/base_reset_driver.py

"""Base reset driver."""

from __future__ import annotations

import asyncio
from typing import Protocol

import pyuvm

from . import utils_dv
from .base_clock import ClockMixin


class ResetSink(Protocol):  # pylint: disable=too-few-public-methods
    """Anything that reacts to reset level changes."""

    def reset_change(self, value: int, active: bool) -> None:
        """Handle a change in reset."""


class BaseResetDriver(ClockMixin, pyuvm.uvm_component):
    """Reset generation component with configurable pulse timing.

    This driver generates a synchronous reset pulse aligned to the clock's drive
    edge and forwards every level change to its sinks (the DUT's asynchronous
    reset input, the driver, the reference model).

    Reset Sequence:
        1. Assert reset at time 0, before the first clock edge
        2. Hold reset for reset_cycles drive edges
        3. Deassert reset on a drive edge
        4. Wait reset_settle_cycles drive edges for the DUT to stabilize

    Attributes:
        reset_name (str): Name of reset signal (default: "presetn")
        reset_active_low (bool): True for active-low reset (default: True)
        reset_cycles (int): Drive edges to hold reset (default: 5)
        reset_settle_cycles (int): Drive edges after deassertion (default: 0)
        sinks (list): Objects whose reset_change(value, active) is called
        done (asyncio.Event): Set once the pulse and settle time are over

    Reference:
        https://github.com/advanced-uvm/second_edition/blob/master/recipes/3.rst_drv.sv
        C.E. Cummings, "Applying Stimulus & Sampling Outputs," SNUG 2016

    Example:
        >>> rst = BaseResetDriver("reset_driver", env, reset_cycles=5)
        >>> rst.clock_bind_handles(clk, bus)
        >>> rst.sinks += [slave, drv]
    """

    def __init__(
        self,
        name: str,
        parent: pyuvm.uvm_component | None = None,
        *,
        reset_name: str = "presetn",
        reset_active_low: bool = True,
        reset_cycles: int = 5,
        reset_settle_cycles: int = 0,
    ) -> None:
        if reset_cycles < 0:
            raise ValueError("reset_cycles must be >= 0")
        if reset_settle_cycles < 0:
            raise ValueError("reset_settle_cycles must be >= 0")
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.reset_name = reset_name
        self.reset_active_low = reset_active_low
        self.reset_cycles = reset_cycles
        self.reset_settle_cycles = reset_settle_cycles
        self.sinks: list[ResetSink] = []
        self.done: asyncio.Event = asyncio.Event()

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        await self.pulse_reset()
        self.done.set()
        self.logger.debug("run_phase end")

    async def pulse_reset(self) -> None:
        """Assert/deassert reset on the same drive edge as stimuli."""
        self.logger.debug("pulse_reset begin")

        active = 0 if self.reset_active_low else 1
        inactive = 1 - active

        self._set_reset(active, True)

        # Hold reset for exactly N drive edges (synchronous semantics)
        for _ in range(self.reset_cycles):
            await self.clock_drive_edge()

        self._set_reset(inactive, False)

        for _ in range(self.reset_settle_cycles):
            await self.clock_drive_edge()

        self.logger.debug("pulse_reset end")

    def _set_reset(self, value: int, active: bool) -> None:
        utils_dv.get_signal(self._dut, self.reset_name).value = value
        self.logger.debug(
            "%s=%d (%s) @ %d ns",
            self.reset_name,
            value,
            "asserted" if active else "deasserted",
            self.clock.now_ns,
        )
        for sink in self.sinks:
            sink.reset_change(value, active)
