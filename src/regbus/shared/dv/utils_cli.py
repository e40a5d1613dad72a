# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/utils_cli.py

"""Raw bench settings from the environment and plusargs.

Settings are looked up in this order:
    1. Environment variables (NAME, then REGBUS_NAME)
    2. Plusargs (+NAME=value, or a bare +NAME meaning "1")

Typing and validation are left to the caller; the bench config layer
passes every raw string through pydantic.

Environment Variables:
    PLUSARGS or REGBUS_PLUSARGS: Space-separated plusargs

Reference:
    UVM Class Reference Manual - uvm_cmdline_processor
    https://www.accellera.org/images/downloads/standards/uvm/UVM_Class_Reference_Manual_1.2.pdf

Example:
    >>> get_setting("APB_REGFILE_NUM_TRANSACTIONS")
    '20'
"""

from __future__ import annotations

import os


def _plusargs_str() -> str:
    return os.environ.get("PLUSARGS", "") or os.environ.get("REGBUS_PLUSARGS", "")


def _get_plusarg(name: str) -> str | None:
    """Return the value of +NAME=val, "1" for a bare +NAME, else None."""
    plusargs = _plusargs_str()
    if not plusargs:
        return None
    prefix = f"+{name}="
    for tok in plusargs.split():
        if tok.startswith(prefix):
            return tok[len(prefix) :]
        if tok == f"+{name}":
            return "1"
    return None


def get_setting(name: str) -> str | None:
    """Resolve a raw setting: env > plusarg, or None if neither is present."""
    for key in (name, f"REGBUS_{name}"):
        v = os.environ.get(key)
        if v is not None:
            return v
    return _get_plusarg(name)
