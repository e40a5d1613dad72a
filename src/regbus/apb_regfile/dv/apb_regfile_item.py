# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/dv/apb_regfile_item.py


"""Sequence item for apb_regfile verification."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from regbus.shared.dv import BaseItem

from .apb_regfile_bus import DATA_WIDTH

if TYPE_CHECKING:
    from regbus.shared.dv import Clock


class ApbRegfileItem(BaseItem):  # pylint: disable=too-many-instance-attributes
    """One register-bus transfer.

    Inputs: addr, write_data, is_write (set by the sequence), select, enable
            (protocol phase flags, regenerated by the driver)
    Outputs: read_data, ready, slave_error (observed after the transfer)

    ``addr`` and ``write_data`` are random variables. ``addr`` is drawn from
    ``[addr_min, addr_max]``, which is meant to reach past the 16 valid
    registers so the slave's error path is exercised. ``is_write`` is never
    random: the sequence alternates it.
    """

    def __init__(
        self, name: str = "apb_regfile_item", addr_min: int = 0, addr_max: int = 31
    ) -> None:
        super().__init__(name)
        if addr_min > addr_max:
            raise ValueError(f"addr_min {addr_min} > addr_max {addr_max}")
        # inputs
        self.addr: int = addr_min
        self.write_data: int = 0
        self.is_write: bool = True
        self.select: bool = False
        self.enable: bool = False
        # outputs
        self.read_data: int = 0
        self.ready: bool = False
        self.slave_error: bool = False
        self.add_rand("addr", list(range(addr_min, addr_max + 1)))
        self.add_rand("write_data", list(range(1 << DATA_WIDTH)))

    def _in_fields(self) -> tuple[str, ...]:
        return ("addr", "write_data", "is_write", "select", "enable")

    def _out_fields(self) -> tuple[str, ...]:
        return ("read_data", "ready", "slave_error")

    @property
    def kind(self) -> str:
        """'write' or 'read'."""
        return "write" if self.is_write else "read"


def log_transaction(
    logger: logging.Logger, tag: str, tr: BaseItem, clock: Clock | None
) -> None:
    """Transaction log line: ``[TAG] {json fields} @ <now> ns``."""
    if logger.isEnabledFor(logging.INFO):
        now = clock.now_ns if clock is not None else 0
        logger.info("[%s] %s @ %d ns", tag, tr, now)
