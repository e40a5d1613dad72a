# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/utils_dv.py

"""Design verification utilities for bench components and bus signals.

This module provides small, lint-friendly helpers used by every bench
component: logger configuration, pyuvm config_db access and signal access
with X/Z handling.

Functions:
    Signal Access:
        get_signal(): Get signal handle from a bus with validation
        get_signal_value_int(): Extract integer from Logic/LogicArray (or None if X/Z)

    Configuration Database:
        uvm_config_db(): Cached pyuvm ConfigDB singleton
        uvm_config_db_get_try(): Get a key, or None if missing
        uvm_config_db_set(): Set a key
        reset_uvm_root(): Drop components and config left by an earlier run

    Logging:
        desired_log_level(): Get log level from REGBUS_LOG_LEVEL env var
        configure_component_logger(): Configure logger for a bench component
        configure_non_component_logger(): Configure logger for a non-component

Error Handling:
    RuntimeError: Raised when signal not found on the bus
    TypeError: Raised when signal has no .value property

Example:
    >>> psel = get_signal(bus, "psel")
    >>> val = get_signal_value_int(psel.value)
    >>> if val is not None:
    ...     # Value is resolvable (no X/Z)
    ...     process(val)
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Union, cast

import pyuvm
from cocotb.types import Logic, LogicArray

if TYPE_CHECKING:
    from .base_signal import Signal


def desired_log_level(default: int = logging.INFO) -> int:
    """Return desired log level from env vars or default."""
    name = (os.getenv("REGBUS_LOG_LEVEL") or "INFO").upper()
    return getattr(logging, name, default)


def configure_component_logger(comp: pyuvm.uvm_component) -> None:
    """Configure logger for a component.

    The component logs to ``regbus.<full.name>``, which propagates to the
    root handlers instead of pyuvm's own stdout handler.
    """
    comp.logger = logging.getLogger(f"regbus.{comp.get_full_name()}")
    comp.logger.propagate = True
    comp.set_logging_level(desired_log_level())


def configure_non_component_logger(logger: logging.Logger) -> None:
    """Configure logger for a non-component"""
    logger.setLevel(desired_log_level())
    # Make sure it bubbles up to the root handlers (don't add new handlers)
    logger.propagate = True


@lru_cache(maxsize=1)
def uvm_config_db() -> pyuvm.ConfigDB:
    """Return pyuvm's config DB object (cached)."""
    return pyuvm.ConfigDB()


def uvm_config_db_get_try(
    comp: pyuvm.uvm_component, key: str, inst: str = ""
) -> Any | None:
    """Return value or None if missing (no logging/raise).
    Note: pyuvm allows wildcards only for set(), not get()."""
    if inst == "*":
        inst = ""
    try:
        return cast(Any, uvm_config_db().get(comp, inst, key))
    except pyuvm.UVMConfigItemNotFound:
        return None


def uvm_config_db_set(
    ctx: pyuvm.uvm_component | None, inst_name: str, key: str, value: Any
) -> None:
    """Set a key in the config DB (inst_name like '' or '*' etc.)."""
    uvm_config_db().set(ctx, inst_name, key, value)


def reset_uvm_root() -> None:
    """Forget every top-level component and config_db entry.

    pyuvm keeps one ``uvm_root`` per process and refuses two children with
    the same name, so each bench run starts from an empty root.
    """
    pyuvm.uvm_root().clear_children()
    pyuvm.uvm_component.clear_components()
    uvm_config_db().clear()


def get_signal(dut: Any, signal_name: str) -> Signal:
    """Return dut.<signal_name> or raise a clear error.

    Raises RuntimeError if signal not found, TypeError if signal has no .value.
    """
    signal = getattr(dut, signal_name, None)
    if signal is None:
        raise RuntimeError(f"Signal '{signal_name}' not found on DUT")
    if not hasattr(signal, "value"):
        raise TypeError(f"Signal '{signal_name}' has no .value property")
    return cast("Signal", signal)


def get_signal_value_int(sig: Union[Logic, LogicArray]) -> int | None:
    """Return integer value if resolvable (no X/Z), else None."""
    if isinstance(sig, Logic):
        return int(sig) if sig.is_resolvable else None
    # LogicArray
    return sig.to_unsigned() if sig.is_resolvable else None
