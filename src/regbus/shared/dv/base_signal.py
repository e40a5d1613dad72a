# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/base_signal.py

"""Four-state bus wire backed by cocotb's Logic/LogicArray types."""

from __future__ import annotations

from typing import Union

from cocotb.types import Logic, LogicArray, Range

SignalValue = Union[Logic, LogicArray]


class Signal:
    """A named wire of fixed width holding a four-state value.

    The bench has no HDL simulator underneath, so bus wires are plain objects
    that mirror the handle API drivers and monitors are used to: read and
    write ``.value``. Values are stored as ``cocotb.types.Logic`` (width 1)
    or ``LogicArray`` (wider), so X/Z states survive until something drives
    the wire.

    Every wire starts as all ``X``. Assignments accept ``int``, ``bool``,
    ``str`` (e.g. ``"01X0"``), ``Logic`` or ``LogicArray``. Integers must fit
    the width.

    Example:
        >>> paddr = Signal("paddr", 5)
        >>> paddr.value.is_resolvable
        False
        >>> paddr.value = 20
        >>> paddr.value.to_unsigned()
        20
    """

    def __init__(self, name: str, width: int = 1) -> None:
        if width <= 0:
            raise ValueError(f"{name}: width must be > 0, got {width}")
        self.name = name
        self.width = width
        self._range = Range(width - 1, "downto", 0)
        self._value: SignalValue = self._convert("X" * width)

    def __repr__(self) -> str:
        return f"Signal({self.name!r}, width={self.width}, value={self._value})"

    @property
    def value(self) -> SignalValue:
        """Current four-state value."""
        return self._value

    @value.setter
    def value(self, v: int | bool | str | Logic | LogicArray) -> None:
        self._value = self._convert(v)

    def _convert(self, v: int | bool | str | Logic | LogicArray) -> SignalValue:
        if self.width == 1:
            if isinstance(v, LogicArray):
                if len(v) != 1:
                    raise ValueError(f"{self.name}: expected 1 bit, got {len(v)}")
                return v[v.range.left]
            if isinstance(v, int) and not isinstance(v, bool) and v not in (0, 1):
                raise ValueError(f"{self.name}: value {v} does not fit in 1 bit")
            return Logic(v)
        if isinstance(v, LogicArray):
            if len(v) != self.width:
                raise ValueError(
                    f"{self.name}: expected {self.width} bits, got {len(v)}"
                )
            return v
        if isinstance(v, str):
            if len(v) != self.width:
                raise ValueError(
                    f"{self.name}: expected {self.width} characters, got {v!r}"
                )
            return LogicArray(v, self._range)
        if isinstance(v, Logic):
            raise TypeError(f"{self.name}: cannot assign a single Logic to a bus")
        value = int(v)
        if not 0 <= value < (1 << self.width):
            raise ValueError(
                f"{self.name}: value {value} does not fit in {self.width} bits"
            )
        return LogicArray.from_unsigned(value, self._range)
