# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/dv/apb_regfile_sequence.py


"""Sequences for apb_regfile verification."""

from __future__ import annotations

from typing import Iterable

from regbus.shared.dv import BaseSequence, Clock

from .apb_regfile_item import ApbRegfileItem, log_transaction

# ---------------------------------------------------------------------
# Random sequence
# ---------------------------------------------------------------------


class ApbRegfileSequence(BaseSequence[ApbRegfileItem]):
    """Generate random transfers, alternating write, read, write, ...

    ``addr`` is uniform over ``[addr_min, addr_max]`` (the default range
    reaches past the 16 registers so the slave's error path is hit) and
    ``write_data`` is uniform over 0-255.
    """

    def __init__(
        self,
        name: str = "apb_regfile_seq",
        seq_len: int = 20,
        *,
        addr_min: int = 0,
        addr_max: int = 31,
    ) -> None:
        super().__init__(name, seq_len)
        if addr_min > addr_max:
            raise ValueError(f"addr_min {addr_min} > addr_max {addr_max}")
        self.addr_min = addr_min
        self.addr_max = addr_max
        self.clock: Clock | None = None

    def make_item(self, index: int) -> ApbRegfileItem:
        return ApbRegfileItem(f"item{index}", self.addr_min, self.addr_max)

    async def set_item_inputs(self, item: ApbRegfileItem, index: int) -> None:
        item.is_write = self.is_write_slot(index)
        self.randomize_item(item)

    @staticmethod
    def is_write_slot(index: int) -> bool:
        """Writes on even slots, reads on odd ones."""
        return index % 2 == 0

    def log_item(self, item: ApbRegfileItem) -> None:
        log_transaction(self.logger, "GEN", item, self.clock)


# ---------------------------------------------------------------------
# Read-back sequence
# ---------------------------------------------------------------------


class ApbRegfileReadbackSequence(ApbRegfileSequence):
    """Like the random sequence, but every read targets the previous write.

    Each written value is read back straight away, so every in-range write
    is checked by the scoreboard.
    """

    def __init__(
        self,
        name: str = "apb_regfile_readback_seq",
        seq_len: int = 20,
        *,
        addr_min: int = 0,
        addr_max: int = 31,
    ) -> None:
        super().__init__(name, seq_len, addr_min=addr_min, addr_max=addr_max)
        self._last_write_addr: int | None = None

    async def set_item_inputs(self, item: ApbRegfileItem, index: int) -> None:
        item.is_write = self.is_write_slot(index)
        if item.is_write or self._last_write_addr is None:
            self.randomize_item(item)
        else:
            last = self._last_write_addr
            self.randomize_item(item, lambda addr: addr == last)
        if item.is_write:
            self._last_write_addr = item.addr


# ---------------------------------------------------------------------
# Directed sequence
# ---------------------------------------------------------------------


class ApbRegfileDirectedSequence(ApbRegfileSequence):
    """Replay a fixed list of ``(is_write, addr, write_data)`` steps.

    Nothing is randomized, so the same steps into a freshly reset bench
    always produce the same result.

    Example:
        >>> seq = ApbRegfileDirectedSequence(steps=[(True, 3, 0x5A), (False, 3, 0)])
    """

    def __init__(
        self,
        name: str = "apb_regfile_directed_seq",
        steps: Iterable[tuple[bool, int, int]] = (),
    ) -> None:
        self.steps: list[tuple[bool, int, int]] = [
            (bool(w), int(a), int(d)) for w, a, d in steps
        ]
        if not self.steps:
            raise ValueError("directed sequence needs at least one step")
        addrs = [a for _, a, _ in self.steps]
        super().__init__(
            name,
            len(self.steps),
            addr_min=min(addrs),
            addr_max=max(addrs),
        )

    async def set_item_inputs(self, item: ApbRegfileItem, index: int) -> None:
        item.is_write, item.addr, item.write_data = self.steps[index]
