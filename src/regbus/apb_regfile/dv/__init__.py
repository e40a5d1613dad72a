# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/dv/__init__.py

"""Design verification bench for apb_regfile.

This package contains a complete UVM-style bench for verifying the
apb_regfile slave model on asyncio, with cocotb's four-state types on the
wires and cocotb-coverage for randomization and coverage.

Components:
- apb_regfile_env: Top-level environment (and run_bench)
- apb_regfile_bus: Bus signal set
- apb_regfile_config: Bench configuration (pydantic + YAML + settings)
- apb_regfile_driver: Drives the SETUP/ACCESS handshake
- apb_regfile_monitor: Rebuilds completed transfers from the bus
- apb_regfile_ref_model: Reference model for golden behavior
- apb_regfile_sb: Scoreboard comparing the slave against the reference
- apb_regfile_sequence: Random, read-back and directed sequences
- apb_regfile_item: Transaction item definition
- apb_regfile_coverage: Functional coverage collection

To run:
    regbus-dv --count=20 --seed=1
"""

from __future__ import annotations

from .apb_regfile_bus import ApbBus
from .apb_regfile_config import ApbRegfileConfig, load_config
from .apb_regfile_coverage import ApbRegfileCoverage
from .apb_regfile_driver import ApbRegfileDriver
from .apb_regfile_env import ApbRegfileEnv, BenchResult, run_bench
from .apb_regfile_item import ApbRegfileItem
from .apb_regfile_monitor import ApbRegfileMonitor
from .apb_regfile_ref_model import ApbRegfileRefModel
from .apb_regfile_sb import ApbRegfileSb
from .apb_regfile_sequence import (
    ApbRegfileDirectedSequence,
    ApbRegfileReadbackSequence,
    ApbRegfileSequence,
)

__all__ = (
    "ApbBus",
    "ApbRegfileConfig",
    "ApbRegfileCoverage",
    "ApbRegfileDirectedSequence",
    "ApbRegfileDriver",
    "ApbRegfileEnv",
    "ApbRegfileItem",
    "ApbRegfileMonitor",
    "ApbRegfileReadbackSequence",
    "ApbRegfileRefModel",
    "ApbRegfileSb",
    "ApbRegfileSequence",
    "BenchResult",
    "load_config",
    "run_bench",
)
