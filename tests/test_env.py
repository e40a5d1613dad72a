# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_env.py

"""End-to-end bench runs."""

from __future__ import annotations

import asyncio

import pytest

from regbus.apb_regfile import NUM_REGS, ApbRegfileSlave, SlaveState
from regbus.apb_regfile.dv import (
    ApbRegfileConfig,
    ApbRegfileEnv,
    ApbRegfileSequence,
    run_bench,
)
from regbus.shared.dv import BenchTimeoutError, RandomizationError


def _run_env(cfg=None, **kwargs) -> tuple[ApbRegfileEnv, object]:
    if cfg is None:
        cfg = ApbRegfileConfig(seed=1)
    env = ApbRegfileEnv(cfg, **kwargs)
    result = asyncio.run(env.run())
    return env, result


def test_write_then_read_back():
    env, result = _run_env(steps=[(True, 3, 0x5A), (False, 3, 0)])
    assert result.passed
    assert (result.transactions, result.writes, result.reads) == (2, 1, 1)
    assert result.faults == 0
    read = env.sb.observed[1]
    assert read.read_data == 0x5A
    assert not read.slave_error
    assert env.slave.regs[3] == 0x5A
    assert env.ref.mem[3] == 0x5A


def test_out_of_range_write_is_flagged():
    env, result = _run_env(steps=[(True, 20, 0x77)])
    assert result.passed
    assert result.faults == 1
    assert env.sb.observed[0].slave_error
    assert env.slave.regs == bytearray(NUM_REGS)
    assert env.ref.mem == bytearray(NUM_REGS)


def test_random_run_passes_and_hits_error_path():
    env, result = _run_env(ApbRegfileConfig(seed=1, num_transactions=20))
    assert result.passed
    assert result.transactions == 20
    assert result.seed == 1
    expected_faults = sum(tr.addr >= NUM_REGS for tr in env.seq.issued)
    assert result.faults == expected_faults
    assert result.faults >= 1
    assert result.reads + result.writes + result.faults == 20


def test_same_seed_same_run():
    def once():
        env, result = _run_env(ApbRegfileConfig(seed=7, num_transactions=12))
        return result, [(t.addr, t.write_data, t.is_write) for t in env.seq.issued]

    assert once() == once()


def test_observed_order_matches_issue_order():
    env, result = _run_env(ApbRegfileConfig(seed=3, num_transactions=16))
    assert result.transactions == 16
    issued = [(t.addr, t.is_write) for t in env.seq.issued]
    observed = [(t.addr, t.is_write) for t in env.sb.observed]
    assert observed == issued
    for i, o in zip(env.seq.issued, env.sb.observed):
        if i.is_write:
            assert o.write_data == i.write_data


def test_no_seed_draws_and_reports_one():
    _, result = _run_env(ApbRegfileConfig(num_transactions=2))
    assert isinstance(result.seed, int)
    assert result.passed


def test_fault_inject_faults_everything():
    env, result = _run_env(
        ApbRegfileConfig(seed=4, num_transactions=10, fault_inject=True)
    )
    assert result.passed
    assert result.faults == 10
    assert (result.reads, result.writes) == (0, 0)
    assert env.slave.regs == bytearray(NUM_REGS)
    assert env.ref.mem == bytearray(NUM_REGS)


def test_readback_sequence_checks_every_write():
    env, result = _run_env(
        ApbRegfileConfig(seed=5, num_transactions=20, sequence="readback")
    )
    assert result.passed
    in_range_writes = sum(
        t.is_write and t.addr < NUM_REGS for t in env.seq.issued
    )
    assert result.reads == in_range_writes
    assert env.sb.pass_cnt == in_range_writes


def test_minimum_delta_cycles_keeps_cadence():
    steps = [(True, 3, 0x5A), (False, 3, 0), (True, 20, 0x01)]
    _, fast = _run_env(ApbRegfileConfig(seed=1, delta_cycles=5), steps=steps)
    _, slow = _run_env(ApbRegfileConfig(seed=1, delta_cycles=10), steps=steps)
    assert fast.passed and slow.passed
    assert fast.cycles == slow.cycles


def test_settle_cycles_and_slow_clock():
    _, result = _run_env(
        ApbRegfileConfig(
            seed=6, num_transactions=6, clock_period_ns=20, reset_settle_cycles=3
        )
    )
    assert result.passed
    assert result.transactions == 6
    assert result.sim_time_ns >= result.cycles * 20


class CorruptReadSlave(ApbRegfileSlave):
    """Flips every bit of read data."""

    def _drive_outputs(self, *, ready: int, err: int, rdata: int) -> None:
        if ready and not err and self.state is SlaveState.READ:
            rdata ^= 0xFF
        super()._drive_outputs(ready=ready, err=err, rdata=rdata)


class CorruptEnv(ApbRegfileEnv):
    def build_phase(self) -> None:
        super().build_phase()
        self.slave = CorruptReadSlave(self.bus)


def test_scoreboard_catches_bad_read_data():
    env = CorruptEnv(
        ApbRegfileConfig(seed=1), steps=[(True, 3, 0x5A), (False, 3, 0)]
    )
    result = asyncio.run(env.run())
    assert not result.passed
    assert result.mismatches == 1
    assert env.sb.observed[1].read_data == 0xA5


class SilentErrorSlave(ApbRegfileSlave):
    """Never raises pslverr."""

    def _drive_outputs(self, *, ready: int, err: int, rdata: int) -> None:
        super()._drive_outputs(ready=ready, err=0, rdata=rdata)


class SilentErrorEnv(ApbRegfileEnv):
    def build_phase(self) -> None:
        super().build_phase()
        self.slave = SilentErrorSlave(self.bus)


def test_unflagged_bad_address_fails_the_run():
    env = SilentErrorEnv(ApbRegfileConfig(seed=1), steps=[(True, 20, 0x77)])
    result = asyncio.run(env.run())
    assert not result.passed
    assert result.unflagged_errors == 1
    assert result.mismatches == 0
    assert result.faults == 0


def test_watchdog_aborts_run():
    env = ApbRegfileEnv(
        ApbRegfileConfig(seed=1, num_transactions=20, timeout_cycles=8)
    )
    with pytest.raises(BenchTimeoutError):
        asyncio.run(env.run())


class ImpossibleSequence(ApbRegfileSequence):
    async def set_item_inputs(self, item, index):
        self.randomize_item(item, lambda addr: addr > 1000)


def test_randomization_failure_propagates(monkeypatch):
    monkeypatch.setattr(
        ApbRegfileEnv,
        "_build_sequence",
        lambda self: ImpossibleSequence("seq", 4),
    )
    env = ApbRegfileEnv(ApbRegfileConfig(seed=1))
    with pytest.raises(RandomizationError):
        asyncio.run(env.run())


def test_run_bench_helper():
    result = run_bench(steps=[(True, 15, 0xFF), (False, 15, 0)])
    assert result.passed
    assert (result.writes, result.reads, result.faults) == (1, 1, 0)


def test_component_tree_and_ports():
    env, result = _run_env(steps=[(True, 1, 0x11)])
    assert result.passed
    names = {comp.get_full_name() for comp in env.hierarchy}
    assert {
        "env.reset_driver",
        "env.drv",
        "env.mon.ap",
        "env.sb.analysis_export",
        "env.coverage.analysis_export",
    } <= names
    assert "env.seq" not in names


def test_second_env_in_one_process():
    first, _ = _run_env(steps=[(True, 2, 0x22)])
    second, result = _run_env(steps=[(False, 2, 0)])
    assert result.passed
    assert second.sb.observed[0].read_data == 0
    assert first.ref.mem[2] == 0x22
