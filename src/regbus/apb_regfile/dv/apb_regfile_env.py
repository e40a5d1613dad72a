# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/dv/apb_regfile_env.py

"""Environment for apb_regfile: wires the bench around the slave model."""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Coroutine, Iterable

import pyuvm

from regbus.apb_regfile import ApbRegfileSlave
from regbus.shared.dv import BaseEnv, BaseResetDriver, Clock, utils_dv

from .apb_regfile_bus import ApbBus
from .apb_regfile_config import ApbRegfileConfig
from .apb_regfile_coverage import ApbRegfileCoverage
from .apb_regfile_driver import ApbRegfileDriver
from .apb_regfile_monitor import ApbRegfileMonitor
from .apb_regfile_ref_model import ApbRegfileRefModel
from .apb_regfile_sb import ApbRegfileSb
from .apb_regfile_sequence import (
    ApbRegfileDirectedSequence,
    ApbRegfileReadbackSequence,
    ApbRegfileSequence,
)


@dataclass(frozen=True)
class BenchResult:  # pylint: disable=too-many-instance-attributes
    """Outcome of one bench run."""

    mismatches: int
    transactions: int
    faults: int
    reads: int
    writes: int
    cycles: int
    sim_time_ns: int
    seed: int
    unflagged_errors: int = 0

    @property
    def passed(self) -> bool:
        """The verdict: no mismatches and no unflagged bad addresses."""
        return self.mismatches == 0 and self.unflagged_errors == 0


class ApbRegfileEnv(BaseEnv):  # pylint: disable=too-many-instance-attributes
    """Build, connect and run the apb_regfile bench.

    Components:
        bus (ApbBus): Wires between bench and slave
        clock (Clock): Shared clock, toggles bus.pclk
        slave (ApbRegfileSlave): Device under verification
        reset_driver (BaseResetDriver): Drives presetn, notifies slave/driver
        seq (ApbRegfileSequence): Random, read-back or directed sequence
        drv (ApbRegfileDriver): SETUP/ACCESS handshake
        mon (ApbRegfileMonitor): Passive observer
        sb (ApbRegfileSb): Scoreboard with its reference model
        cov (ApbRegfileCoverage | None): Functional coverage

    Connections:
        seq.mailbox -> drv.mailbox
        drv.item_done, sb.item_done -> seq.completions (lockstep)
        mon.ap -> sb.analysis_export, cov.analysis_export

    Configuration (via config_db):
        coverage_en (bool): Set for every component below the env

    Example:
        >>> env = ApbRegfileEnv(ApbRegfileConfig(seed=1))
        >>> result = await env.run()
        >>> result.passed
        True
    """

    def __init__(
        self,
        cfg: ApbRegfileConfig | None = None,
        name: str = "env",
        parent: pyuvm.uvm_component | None = None,
        *,
        steps: Iterable[tuple[bool, int, int]] | None = None,
    ) -> None:
        self.cfg = cfg if cfg is not None else ApbRegfileConfig()
        seed = self.cfg.seed
        if seed is None:
            seed = random.SystemRandom().getrandbits(32)
        super().__init__(
            name,
            parent,
            clock_period_ns=self.cfg.clock_period_ns,
            delta_cycles=self.cfg.delta_cycles,
            timeout_cycles=self.cfg.timeout_cycles,
            seed=seed,
        )
        self.steps = list(steps) if steps is not None else None
        self.bus: ApbBus
        self.slave: ApbRegfileSlave
        self.reset_driver: BaseResetDriver
        self.seq: ApbRegfileSequence
        self.drv: ApbRegfileDriver
        self.mon: ApbRegfileMonitor
        self.ref: ApbRegfileRefModel
        self.sb: ApbRegfileSb
        self.cov: ApbRegfileCoverage | None = None

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        cfg = self.cfg
        self.bus = ApbBus(cfg.addr_width)
        self.clock = Clock(
            "pclk",
            cfg.clock_period_ns,
            delta_cycles=cfg.delta_cycles,
            signal=self.bus.pclk,
        )
        self.slave = ApbRegfileSlave(self.bus)
        self.slave.fault_inject = cfg.fault_inject
        self.reset_driver = BaseResetDriver(
            "reset_driver",
            self,
            reset_name="presetn",
            reset_active_low=True,
            reset_cycles=cfg.reset_cycles,
            reset_settle_cycles=cfg.reset_settle_cycles,
        )
        utils_dv.uvm_config_db_set(self, "*", "coverage_en", cfg.coverage_en)
        self.seq = self._build_sequence()
        self.drv = ApbRegfileDriver("drv", self)
        self.mon = ApbRegfileMonitor("mon", self)
        self.ref = ApbRegfileRefModel()
        self.sb = ApbRegfileSb("sb", self, self.ref)
        if cfg.coverage_en:
            self.cov = ApbRegfileCoverage("coverage", self, yaml_path=cfg.cov_yaml)
        self.components = [self.reset_driver, self.drv, self.mon, self.sb]
        if self.cov is not None:
            self.components.append(self.cov)
        self.logger.debug("build_phase end")

    def _build_sequence(self) -> ApbRegfileSequence:
        cfg = self.cfg
        if self.steps is not None:
            return ApbRegfileDirectedSequence("seq", self.steps)
        if cfg.sequence == "readback":
            return ApbRegfileReadbackSequence(
                "seq",
                cfg.num_transactions,
                addr_min=cfg.addr_min,
                addr_max=cfg.addr_max,
            )
        return ApbRegfileSequence(
            "seq",
            cfg.num_transactions,
            addr_min=cfg.addr_min,
            addr_max=cfg.addr_max,
        )

    def connect_phase(self) -> None:
        self.logger.debug("connect_phase begin")
        for comp in (self.reset_driver, self.drv, self.mon):
            comp.clock_bind_handles(self.clock, self.bus)
        self.seq.clock = self.clock
        self.sb.clock = self.clock
        self.reset_driver.sinks += [self.slave, self.drv, self.ref]
        self.seq.mailbox = self.drv.mailbox
        self.seq.completions += [self.drv.item_done, self.sb.item_done]
        self.mon.ap.connect(self.sb.analysis_export)
        if self.cov is not None:
            self.mon.ap.connect(self.cov.analysis_export)
        self.logger.debug("connect_phase end")

    def dut_coroutines(self) -> list[Coroutine[Any, Any, None]]:
        return [self.slave.run(self.clock)]

    async def run(self) -> BenchResult:
        """Run the bench to completion and return its result."""
        self.logger.info("Run seed: %d", self.seed)
        self.logger.debug("%s", self.cfg)
        await self.run_test()
        return self.result()

    def result(self) -> BenchResult:
        """Collect the run's counters."""
        assert self.seed is not None
        return BenchResult(
            mismatches=self.sb.err_cnt,
            transactions=self.sb.vect_cnt,
            faults=self.sb.fault_cnt,
            reads=self.sb.read_cnt,
            writes=self.sb.write_cnt,
            cycles=self.clock.cycle,
            sim_time_ns=self.clock.now_ns,
            seed=self.seed,
            unflagged_errors=self.sb.unflagged_err_cnt,
        )


def run_bench(
    cfg: ApbRegfileConfig | None = None,
    *,
    steps: Iterable[tuple[bool, int, int]] | None = None,
) -> BenchResult:
    """Run one bench in a fresh event loop."""
    return asyncio.run(ApbRegfileEnv(cfg, steps=steps).run())
