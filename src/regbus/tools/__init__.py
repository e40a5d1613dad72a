# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/tools/__init__.py

"""regbus DV tools package.

Command-line tools:
- regbus-dv: Run the apb_regfile bench for one or more seeds
"""
