# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/__init__.py

"""Shared components and utilities for regbus benches.

Subpackages:
- dv: Shared design verification infrastructure (base classes, utilities)
"""
