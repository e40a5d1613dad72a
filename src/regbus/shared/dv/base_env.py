# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/base_env.py

"""Environment scaffold: build, connect, run, report."""

from __future__ import annotations

import asyncio
import random
from typing import Any, Coroutine

import pyuvm

from . import utils_dv
from .base_clock import DEFAULT_DELTA_CYCLES, Clock
from .base_sequence import BaseSequence


class BenchTimeoutError(RuntimeError):
    """Raised when the sequence does not finish within the watchdog budget."""


class BaseEnv(pyuvm.uvm_env):
    """Top-level environment that builds, connects and runs bench components.

    The environment is responsible for:
    - Creating the clock and every verification component (build_phase)
    - Wiring mailboxes, completion signals and analysis ports (connect_phase)
    - Seeding Python's ``random`` so runs are reproducible
    - Running each component's run_phase as its own asyncio task
    - Ending the run once the sequence is done, or on the first failure
    - Running build, connect, end_of_elaboration and report phases top-down
      over the pyuvm hierarchy

    Subclasses must implement:
        build_phase(): Create ``self.seq`` and the components
        connect_phase(): Wire them together

    Optional overrides:
        dut_coroutines(): Extra coroutines to run next to the components
            (the DUT model, for example)

    Attributes:
        clock (Clock): Shared clock
        seq (BaseSequence): The sequence whose completion ends the run
        components (list[uvm_component]): Components whose run_phase runs, in order
        seed (int | None): Seed applied to ``random`` before build
        timeout_cycles (int): Watchdog budget in clock cycles (0 disables)

    Example:
        >>> env = MyEnv("env", seed=1)
        >>> await env.run_test()
        >>> env.sb.err_cnt
        0
    """

    def __init__(
        self,
        name: str = "env",
        parent: pyuvm.uvm_component | None = None,
        *,
        clock_period_ns: int = 10,
        delta_cycles: int = DEFAULT_DELTA_CYCLES,
        timeout_cycles: int = 10_000,
        seed: int | None = None,
    ) -> None:
        if timeout_cycles < 0:
            raise ValueError("timeout_cycles must be >= 0")
        if parent is None:
            utils_dv.reset_uvm_root()
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.clock_period_ns = clock_period_ns
        self.delta_cycles = delta_cycles
        self.timeout_cycles = timeout_cycles
        self.seed = seed
        self.clock: Clock
        self.seq: BaseSequence[Any]
        self.components: list[pyuvm.uvm_component] = []

    def build_phase(self) -> None:
        """Create components."""
        raise NotImplementedError

    def connect_phase(self) -> None:
        """Connect components."""
        raise NotImplementedError

    def dut_coroutines(self) -> list[Coroutine[Any, Any, None]]:
        """Coroutines modelling the DUT, started before the bench components."""
        return []

    async def run_test(self) -> None:
        """Build, connect and run until the sequence is done, then report."""
        self.logger.debug("run_test begin")
        if self.seed is not None:
            random.seed(self.seed)
        for phase in ("build_phase", "connect_phase", "end_of_elaboration_phase"):
            self._run_function_phase(phase)
        try:
            await self._run_tasks()
        finally:
            self._run_function_phase("report_phase")
        self.logger.debug("run_test end")

    def _run_function_phase(self, phase: str) -> None:
        """Call ``phase`` on this env and every component below it, top-down.

        The hierarchy is walked lazily, so children created by a parent's
        build_phase are built next.
        """
        for comp in self.hierarchy:
            getattr(comp, phase)()

    async def _run_tasks(self) -> None:
        tasks: list[asyncio.Task[None]] = []
        for coro in self.dut_coroutines():
            tasks.append(asyncio.create_task(coro))
        for comp in self.components:
            tasks.append(
                asyncio.create_task(comp.run_phase(), name=comp.get_full_name())
            )
        seq_task = asyncio.create_task(self.seq.start(), name=self.seq.get_full_name())
        tasks.append(seq_task)
        if self.timeout_cycles:
            tasks.append(asyncio.create_task(self._watchdog(), name="watchdog"))
        # The clock starts last so every component is already waiting on it
        tasks.append(asyncio.create_task(self.clock.run(), name=self.clock.name))
        try:
            pending = set(tasks)
            while not seq_task.done():
                done, pending = await asyncio.wait(
                    pending, return_when=asyncio.FIRST_COMPLETED
                )
                for task in done:
                    if task is not seq_task:
                        # Finishing is fine (reset driver); raising is not
                        exc = task.exception()
                        if exc is not None:
                            raise exc
            seq_task.result()
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _watchdog(self) -> None:
        await self.clock.cycles(self.timeout_cycles)
        raise BenchTimeoutError(
            f"{self.get_full_name()}: sequence not done after "
            f"{self.timeout_cycles} cycles ({self.clock.now_ns} ns)"
        )

