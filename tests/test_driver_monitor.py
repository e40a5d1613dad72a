# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_driver_monitor.py

"""Handshake timing of the driver and capture by the monitor."""

from __future__ import annotations

import asyncio

import pyuvm

from regbus.apb_regfile import ApbRegfileSlave
from regbus.apb_regfile.dv import (
    ApbBus,
    ApbRegfileDriver,
    ApbRegfileItem,
    ApbRegfileMonitor,
)
from regbus.shared.dv import Clock
from regbus.shared.dv.utils_dv import get_signal_value_int


class Collector(pyuvm.uvm_subscriber):
    """Keep every item written to the analysis export."""

    def __init__(self, name, parent=None):
        super().__init__(name, parent)
        self.items: list[ApbRegfileItem] = []

    def write(self, tt):
        self.items.append(tt)


async def _one_transfer(is_write: bool, addr: int, write_data: int):
    bus = ApbBus()
    bus.presetn.value = 1
    clk = Clock("pclk", 10, signal=bus.pclk)
    slave = ApbRegfileSlave(bus)
    drv = ApbRegfileDriver("drv")
    mon = ApbRegfileMonitor("mon")
    mon.build_phase()
    for comp in (drv, mon):
        comp.clock_bind_handles(clk, bus)
    drv.reset_change(0, True)
    drv.reset_change(1, False)
    published = Collector("published")
    mon.ap.connect(published.analysis_export)

    samples: list[dict[str, int | None]] = []

    async def record_bus():
        while True:
            await clk.read_only()
            row = {"t": clk.now_ns}
            for name in ("psel", "penable", "pready", "pslverr", "prdata"):
                row[name] = get_signal_value_int(getattr(bus, name).value)
            samples.append(row)

    item = ApbRegfileItem("t0")
    item.is_write, item.addr, item.write_data = is_write, addr, write_data
    drv.mailbox.put_nowait(item)

    tasks = [
        asyncio.create_task(c)
        for c in (slave.run(clk), drv.run_phase(), mon.run_phase(), record_bus())
    ]
    tasks.append(asyncio.create_task(clk.run()))
    await drv.item_done.wait()
    await clk.cycles(2)
    for t in tasks:
        t.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
    return slave, samples, published.items


def test_setup_then_single_access_cycle():
    slave, samples, _ = asyncio.run(_one_transfer(True, 3, 0x5A))
    by_time = {s["t"]: s for s in samples}
    # SETUP is applied at the first falling edge (15 ns)
    assert by_time[10]["psel"] == 0
    assert (by_time[20]["psel"], by_time[20]["penable"]) == (1, 0)
    assert by_time[20]["pready"] == 0
    # ACCESS completes on the next rising edge
    assert (by_time[30]["psel"], by_time[30]["penable"]) == (1, 1)
    assert by_time[30]["pready"] == 1
    assert by_time[40]["psel"] == 0
    assert [s["t"] for s in samples if s["pready"] == 1] == [30]
    assert [s["t"] for s in samples if s["penable"] == 1] == [30]
    assert slave.regs[3] == 0x5A


def test_monitor_publishes_frozen_write():
    _, _, published = asyncio.run(_one_transfer(True, 3, 0x5A))
    assert len(published) == 1
    tr = published[0]
    assert tr.frozen
    assert (tr.is_write, tr.addr, tr.write_data) == (True, 3, 0x5A)
    assert tr.ready and tr.select and tr.enable
    assert not tr.slave_error


def test_read_drives_zero_write_data():
    _, samples, published = asyncio.run(_one_transfer(False, 5, 0xEE))
    tr = published[0]
    assert not tr.is_write
    assert tr.write_data == 0
    assert tr.read_data == 0
    assert [s["t"] for s in samples if s["pready"] == 1] == [30]


def test_out_of_range_observed_with_error():
    slave, samples, published = asyncio.run(_one_transfer(True, 20, 0x11))
    assert published[0].slave_error
    assert published[0].addr == 20
    assert [s["t"] for s in samples if s["pslverr"] == 1] == [30]
    assert slave.regs == bytearray(16)


def test_monitor_port_feeds_every_subscriber(item_factory):
    mon = ApbRegfileMonitor("mon")
    mon.build_phase()
    first, second = Collector("first"), Collector("second")
    mon.ap.connect(first.analysis_export)
    mon.ap.connect(second.analysis_export)
    tr = item_factory(False, 4, read_data=0x33)
    mon.ap.write(tr)
    assert first.items == [tr]
    assert second.items == [tr]
    assert mon.ap.get_full_name() == "mon.ap"
