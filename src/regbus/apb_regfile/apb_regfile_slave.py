# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/apb_regfile_slave.py

"""APB-style slave model: SETUP/ACCESS FSM in front of a 16-byte register file.

The slave is the device under verification. It behaves like a registered
state machine: once per rising edge it looks at the bus inputs that the
driver applied on the previous falling edge, updates its state, and drives
its outputs (pready, pslverr, prdata) for the monitor to sample.

States:
    IDLE   Waiting for a transfer. Outputs low.
    WRITE  SETUP seen with pwrite=1, waiting for ACCESS.
    READ   SETUP seen with pwrite=0, waiting for ACCESS.

Transfer:
    In WRITE/READ, the first edge with psel & penable (ACCESS) completes the
    transfer: pready is high for exactly one cycle and the state returns to
    IDLE. If paddr is in [0, 15] (and resolvable, and no fault is injected)
    the register file is written or read; otherwise nothing is mutated,
    prdata is 0 and pslverr is high for that cycle.

    pslverr also follows the bus alone: a psel & penable cycle seen in IDLE
    with a bad or unknown paddr raises pslverr (pready stays low, nothing is
    mutated, and the FSM moves on as for any psel cycle).

Reset:
    Asynchronous and active low. While presetn is not high the state is IDLE
    and all outputs are low. The register file is not cleared.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any

from regbus.shared.dv import utils_dv

if TYPE_CHECKING:
    from regbus.shared.dv import Clock

NUM_REGS = 16


class SlaveState(enum.Enum):
    """Slave FSM state."""

    IDLE = 0
    WRITE = 1
    READ = 2


def next_state(
    state: SlaveState, psel: bool, penable: bool, pwrite: bool
) -> SlaveState:
    """Pure transition function, evaluated once per rising edge."""
    if state is SlaveState.IDLE:
        if psel and pwrite:
            return SlaveState.WRITE
        if psel:
            return SlaveState.READ
        return SlaveState.IDLE
    # WRITE/READ: exactly one ACCESS completes the transfer
    if psel and penable:
        return SlaveState.IDLE
    return state


class ApbRegfileSlave:
    """Software model of the register-file slave bound to a bus.

    The bus is any object with ``presetn``, ``paddr``, ``psel``, ``penable``,
    ``pwdata``, ``pwrite`` (inputs) and ``prdata``, ``pready``, ``pslverr``
    (outputs) attributes, each with a ``.value``.

    Attributes:
        state: Current FSM state
        regs: The 16-byte register file (owned by the slave)
        fault_inject: When True every ACCESS is faulted (pslverr, no mutation)
        access_cnt: Completed ACCESS phases
        fault_cnt: Faulted ACCESS phases
    """

    def __init__(self, bus: Any, name: str = "apb_regfile") -> None:
        self.name = name
        self.bus = bus
        self.state: SlaveState = SlaveState.IDLE
        self.regs: bytearray = bytearray(NUM_REGS)
        self.fault_inject: bool = False
        self.access_cnt: int = 0
        self.fault_cnt: int = 0
        self._reset_active: bool = False
        self.logger = logging.getLogger(f"regbus.{name}")
        utils_dv.configure_non_component_logger(self.logger)

    async def run(self, clock: Clock) -> None:
        """Evaluate the FSM on every rising edge (cancel the task to stop)."""
        self.logger.debug("run begin")
        while True:
            await clock.rising_edge()
            self.tick()

    def reset_change(self, value: int, active: bool) -> None:
        """Asynchronous reset: takes effect immediately, not at the next edge."""
        self.logger.debug("reset_change: value=%d active=%s", value, active)
        self._reset_active = active
        if active:
            self._apply_reset()

    def in_reset(self) -> bool:
        """True while reset is asserted (presetn low or unknown)."""
        return self._reset_active or self._val("presetn") != 1

    def tick(self) -> None:
        """One rising edge."""
        if self.in_reset():
            self._apply_reset()
            return
        psel = self._val("psel") == 1
        penable = self._val("penable") == 1
        pwrite = self._val("pwrite") == 1
        if self.state is not SlaveState.IDLE and psel and penable:
            self._access()
        elif psel and penable and self._bad_addr(self._val("paddr")):
            # ACCESS without SETUP: flag the address, complete nothing
            self.logger.debug("IDLE access to bad paddr: pslverr only")
            self._drive_outputs(ready=0, err=1, rdata=0)
        else:
            self._drive_outputs(ready=0, err=0, rdata=0)
        self.state = next_state(self.state, psel, penable, pwrite)

    def _access(self) -> None:
        addr = self._val("paddr")
        wdata = self._val("pwdata")
        is_write = self.state is SlaveState.WRITE
        fault = (
            self.fault_inject
            or self._bad_addr(addr)
            or (is_write and wdata is None)
        )
        self.access_cnt += 1
        if fault:
            self.fault_cnt += 1
            self.logger.debug(
                "%s fault: paddr=%s pwdata=%s fault_inject=%s",
                self.state.name,
                addr,
                wdata,
                self.fault_inject,
            )
            self._drive_outputs(ready=1, err=1, rdata=0)
            return
        assert addr is not None
        if is_write:
            assert wdata is not None
            self.regs[addr] = wdata
            self._drive_outputs(ready=1, err=0, rdata=0)
        else:
            self._drive_outputs(ready=1, err=0, rdata=self.regs[addr])

    @staticmethod
    def _bad_addr(addr: int | None) -> bool:
        return addr is None or addr >= NUM_REGS

    def _apply_reset(self) -> None:
        self.state = SlaveState.IDLE
        self._drive_outputs(ready=0, err=0, rdata=0)

    def _drive_outputs(self, *, ready: int, err: int, rdata: int) -> None:
        self.bus.pready.value = ready
        self.bus.pslverr.value = err
        self.bus.prdata.value = rdata

    def _val(self, name: str) -> int | None:
        return utils_dv.get_signal_value_int(getattr(self.bus, name).value)
