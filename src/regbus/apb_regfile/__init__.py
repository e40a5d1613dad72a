# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/__init__.py

"""APB-style register file slave.

This package contains the software model of the slave (a SETUP/ACCESS
protocol FSM in front of a 16-byte register file) and its design
verification bench.

Subpackages:
- dv: Design verification bench (asyncio + cocotb types/coverage)
"""

from __future__ import annotations

from .apb_regfile_slave import NUM_REGS, ApbRegfileSlave, SlaveState, next_state

__all__ = ("NUM_REGS", "ApbRegfileSlave", "SlaveState", "next_state")
