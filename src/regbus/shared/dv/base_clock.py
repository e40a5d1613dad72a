# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/base_clock.py

"""Virtual-time clock and the mixin components use to wait on its edges."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from . import utils_dv
from .base_signal import Signal

DEFAULT_DELTA_CYCLES = 10
# Fewest yields that let a driver or monitor woken by one region reach its
# next wait before the following region fires.
MIN_DELTA_CYCLES = 5


class Clock:
    """Free-running clock that advances virtual time one cycle at a time.

    Each cycle fires three regions, in order:

    1. rising edge: sequential logic samples its inputs and updates outputs
    2. read-only: monitors sample settled values (like SV #1step / cocotb
       ReadOnly)
    3. falling edge: drivers apply stimulus for the next rising edge

    Every region is a one-shot broadcast: all tasks waiting on it are woken,
    and tasks that start waiting afterwards wait for the next cycle. After
    firing a region the clock yields ``delta_cycles`` times so every woken
    task can run to its next suspension point before the next region fires.
    Below ``MIN_DELTA_CYCLES`` a component can miss a region and a transfer
    stretches by a cycle, so smaller values are rejected.

    Time is reported in ns: the rising edge of cycle ``n`` is at
    ``n * period_ns`` and the falling edge half a period later.

    Attributes:
        cycle: Number of rising edges so far
        now_ns: Current simulation time in ns
        signal: Optional clock wire toggled at each edge

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs - UVM Verification
        Testing Techniques," SNUG 2016 (Austin)

    Example:
        >>> clk = Clock("pclk", period_ns=10)
        >>> task = asyncio.create_task(clk.run())
        >>> await clk.cycles(5)
        >>> clk.now_ns
        50
    """

    def __init__(
        self,
        name: str = "clk",
        period_ns: int = 10,
        *,
        delta_cycles: int = DEFAULT_DELTA_CYCLES,
        signal: Signal | None = None,
    ) -> None:
        if period_ns <= 0 or period_ns % 2:
            raise ValueError(
                f"period_ns must be a positive even number, got {period_ns}"
            )
        if delta_cycles < MIN_DELTA_CYCLES:
            raise ValueError(
                f"delta_cycles must be >= {MIN_DELTA_CYCLES}, got {delta_cycles}"
            )
        self.name = name
        self.period_ns = period_ns
        self.delta_cycles = delta_cycles
        self.signal = signal
        self.cycle: int = 0
        self.now_ns: int = 0
        self.logger = logging.getLogger(f"regbus.{name}")
        utils_dv.configure_non_component_logger(self.logger)
        self._rising = asyncio.Event()
        self._read_only = asyncio.Event()
        self._falling = asyncio.Event()

    async def run(self) -> None:
        """Generate edges forever (cancel the task to stop the clock)."""
        self.logger.debug(
            "Started clock %s period=%d ns delta_cycles=%d",
            self.name,
            self.period_ns,
            self.delta_cycles,
        )
        if self.signal is not None:
            self.signal.value = 0
        while True:
            self.cycle += 1
            self.now_ns = self.cycle * self.period_ns
            if self.signal is not None:
                self.signal.value = 1
            await self._fire(self._rising)
            await self._fire(self._read_only)
            self.now_ns += self.period_ns // 2
            if self.signal is not None:
                self.signal.value = 0
            await self._fire(self._falling)

    async def _fire(self, region: asyncio.Event) -> None:
        region.set()
        region.clear()
        for _ in range(self.delta_cycles):
            await asyncio.sleep(0)

    async def rising_edge(self) -> None:
        """Wait for the next rising edge."""
        await self._rising.wait()

    async def read_only(self) -> None:
        """Wait for the next read-only region."""
        await self._read_only.wait()

    async def falling_edge(self) -> None:
        """Wait for the next falling edge."""
        await self._falling.wait()

    async def cycles(self, n: int) -> None:
        """Wait for ``n`` rising edges."""
        for _ in range(max(0, n)):
            await self._rising.wait()


class ClockMixin:
    """Mixin providing clock binding and edge alignment for components.

    Drivers apply stimulus on the falling edge so it is stable at the next
    rising edge; monitors sample in the read-only region after the rising
    edge so sequential logic has already updated.

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs - UVM Verification
        Testing Techniques," SNUG 2016 (Austin)

    Example:
        >>> class MyDriver(ClockMixin, pyuvm.uvm_driver):
        ...     async def run_phase(self):
        ...         await self.clock_drive_edge()
        ...         self._dut.data.value = 1
    """

    _clk: Clock | None
    _dut: Any

    def _clock_init_defaults(self) -> None:
        self._clk = None
        self._dut = None

    def clock_bind_handles(self, clock: Clock, dut: Any) -> None:
        """Bind clock and DUT bus (connect time)."""
        self._clk = clock
        self._dut = dut

    @property
    def clock(self) -> Clock:
        """The bound clock."""
        assert self._clk is not None, "clock used before clock_bind_handles"
        return self._clk

    async def clock_drive_edge(self) -> None:
        """Align to the driving edge (runtime)."""
        await self.clock.falling_edge()

    async def clock_sample_edge(self) -> None:
        """Align to the sampling point after the next rising edge (runtime)."""
        await self.clock.rising_edge()
        await self.clock.read_only()
