# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/base_driver.py

"""Base driver with BFM hooks folded in."""

from __future__ import annotations

import asyncio
from typing import Any, Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_clock import ClockMixin
from .base_item import BaseItem
from .base_sync import CompletionSignal

T = TypeVar("T", bound=BaseItem)


class BaseDriver(ClockMixin, pyuvm.uvm_driver, Generic[T]):
    """Driver with clock synchronization and reset handling.

    This driver provides a complete framework for driving DUT inputs with proper
    timing alignment and reset awareness.

    The driver:
    - Applies initial DUT input values at time 0
    - Waits for reset assertion and deassertion before driving transactions
    - Provides timing alignment via clock_drive_edge() from ClockMixin
    - Notifies item_done after each transaction has been driven

    Subclasses must implement:
        drive_item(dut, tr): Drive DUT signals for one transaction

    Attributes:
        initial_dut_input_values: Dict mapping signal names to initial values
        mailbox: asyncio queue the sequence puts transactions into. pyuvm's
            seq_item_port needs a sequencer on cocotb triggers and stays
            unconnected
        item_done: Completion signal, one token per driven transaction

    Reset Events:
        _rst_seen: Latched once reset has been asserted at least once
        _rst_deasserted: Set while reset is inactive

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs," SNUG 2016

    Example:
        >>> class MyDriver(BaseDriver[MyItem]):
        ...     async def drive_item(self, dut, tr):
        ...         await self.clock_drive_edge()
        ...         dut.data.value = tr.data
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None = None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.initial_dut_input_values: dict[str, int] = {}
        self.mailbox: asyncio.Queue[T] = asyncio.Queue()
        self.item_done: CompletionSignal = CompletionSignal(f"{name}.item_done")
        self.item_count: int = 0
        self._reset_active: bool = False
        self._rst_seen: asyncio.Event = asyncio.Event()
        self._rst_deasserted: asyncio.Event = asyncio.Event()
        self._rst_deasserted.set()  # default: not in reset at t=0

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        tr: T
        self.apply_initial_dut_inputs()
        await self.wait_for_reset_active()
        await self.wait_for_reset_inactive()
        while True:
            tr = await self.mailbox.get()
            await self.drive_item(self._dut, tr)
            self.item_count += 1
            self.item_done.notify()

    def apply_initial_dut_inputs(self) -> None:
        """Apply DUT input values at time 0, before the first clock edge."""
        self.logger.debug("apply_initial_dut_inputs begin")
        for sig_name, val in self.initial_dut_input_values.items():
            utils_dv.get_signal(self._dut, sig_name).value = val
        self.logger.debug("apply_initial_dut_inputs end")

    async def wait_for_reset_active(self) -> None:
        """Block until reset has been asserted at least once (polarity-neutral)."""
        self.logger.debug("wait_for_reset_active begin")
        await self._rst_seen.wait()
        self.logger.debug("wait_for_reset_active end")

    async def wait_for_reset_inactive(self) -> None:
        """Block until reset is deasserted (polarity-neutral)."""
        self.logger.debug("wait_for_reset_inactive begin")
        await self._rst_deasserted.wait()
        self.logger.debug("wait_for_reset_inactive end")

    def reset_change(self, value: int, active: bool) -> None:
        """Called by the reset driver on reset level changes."""
        self.logger.debug("reset_change begin")
        self._reset_active = active
        if active:
            self._rst_seen.set()
            self._rst_deasserted.clear()
        else:
            self._rst_deasserted.set()
        self.logger.debug("reset_change end: value=%d active=%s", value, active)

    async def drive_item(self, dut: Any, tr: T) -> None:
        """Drive DUT signals for one transaction."""
        raise NotImplementedError("Implement DUT signal driving here")
