# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/__init__.py

"""regbus: self-checking verification bench for a register-bus slave.

regbus models a memory-mapped peripheral that speaks a two-phase
(SETUP/ACCESS) register-bus protocol in front of a 16-byte register file,
and verifies it with a UVM-style bench running on asyncio.

Main Components:

apb_regfile:
    The slave model (protocol FSM + register file) and its bench:
    - Bus, item and configuration
    - Sequences, driver, monitor
    - Reference model, scoreboard, coverage
    - Environment

shared:
    Shared verification infrastructure (base classes, clock, sync primitives)

tools:
    Command-line runner (regbus-dv)

utils:
    Common utilities used across the framework

For more information, see the project documentation and individual module
docstrings.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

try:
    __version__ = pkg_version("regbus")
except PackageNotFoundError:
    __version__ = "0+local"
