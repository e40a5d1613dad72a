# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/__init__.py

"""Shared design verification infrastructure for regbus benches.

This package provides the base classes and utilities for building pyuvm
benches that run on asyncio instead of an HDL simulator, with cocotb's
four-state types on the wires and cocotb-coverage for randomization and
functional coverage. Every design bench builds on these classes so the
methodology stays consistent.

Base Classes:
- BaseEnv: Top-level environment (build, connect, run, report)
- BaseDriver: Component for driving DUT inputs
- BaseMonitor: Passive bus observer publishing frozen items
- BaseSequence: Lockstep item generator (sequence + sequencer)
- BaseItem: Transaction item base class
- BaseRefModel: Reference model for golden behavior
- BaseSb: Scoreboard for DUT vs reference comparison
- BaseCoverage: Functional coverage collection

Clock, Reset and Synchronization:
- Clock: Virtual-time clock with rising/read-only/falling regions
- ClockMixin: Mixin for clock-aware components
- BaseResetDriver: Reset generation component
- CompletionSignal: One-token-per-event handshake
- Signal: Four-state bus wire

Utilities:
- utils_dv: Design verification utility functions
- utils_cli: Environment/plusarg setting helpers
"""

from __future__ import annotations

from regbus import __version__

from . import utils_cli, utils_dv
from .base_clock import MIN_DELTA_CYCLES, Clock, ClockMixin
from .base_coverage import BaseCoverage
from .base_driver import BaseDriver
from .base_env import BaseEnv, BenchTimeoutError
from .base_item import BaseItem, FrozenItemError
from .base_monitor import BaseMonitor
from .base_ref_model import BaseRefModel
from .base_reset_driver import BaseResetDriver
from .base_sb import BaseSb
from .base_sequence import BaseSequence, RandomizationError
from .base_signal import Signal
from .base_sync import CompletionSignal

__all__ = (
    "BaseCoverage",
    "BaseDriver",
    "BaseEnv",
    "BaseItem",
    "BaseMonitor",
    "BaseRefModel",
    "BaseResetDriver",
    "BaseSb",
    "BaseSequence",
    "BenchTimeoutError",
    "Clock",
    "ClockMixin",
    "MIN_DELTA_CYCLES",
    "CompletionSignal",
    "FrozenItemError",
    "RandomizationError",
    "Signal",
    "utils_dv",
    "utils_cli",
    "__version__",
)
