# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/base_item.py

"""Base sequence item with constrained randomization and field utilities."""

from __future__ import annotations

import copy
import json
from typing import Any, Iterable, Self

from cocotb_coverage.crv import Randomized


class FrozenItemError(AttributeError):
    """Raised when a published (frozen) item is modified."""


class BaseItem(Randomized):
    """Base transaction item with field management and comparison utilities.

    This class provides a framework for transaction items with clear
    separation between input fields (randomized/constrained) and output
    fields (observed from DUT). It includes utilities for cloning, output
    comparison, serialization and freezing.

    Randomization comes from cocotb-coverage's ``Randomized``: subclasses
    register random variables with ``add_rand()`` and constraints with
    ``add_constraint()``; callers use ``randomize()`` or
    ``randomize_with(...)``.

    Subclasses must implement:
        _in_fields(): Return tuple of input field names
        _out_fields(): Return tuple of output field names

    The class provides:
    - Deep cloning for safe transaction copies
    - Comparison of output fields against an expectation
    - JSON serialization for logging and debugging
    - ``freeze()`` so an item published by a monitor cannot be modified

    Example:
        >>> class MyItem(BaseItem):
        ...     def __init__(self, name="my_item"):
        ...         super().__init__(name)
        ...         self.addr = 0
        ...         self.data = 0
        ...         self.response = 0
        ...         self.add_rand("addr", list(range(16)))
        ...
        ...     def _in_fields(self):
        ...         return ("addr", "data")
        ...
        ...     def _out_fields(self):
        ...         return ("response",)
    """

    def __init__(self, name: str = "item") -> None:
        super().__init__()
        self.name = name

    def __setattr__(self, key: str, value: Any) -> None:
        if self.__dict__.get("_frozen", False):
            raise FrozenItemError(
                f"{self.__dict__.get('name', type(self).__name__)} is frozen; "
                f"cannot set {key!r}"
            )
        super().__setattr__(key, value)

    def get_name(self) -> str:
        """Item name."""
        return self.name

    def freeze(self) -> Self:
        """Make the item read-only. Returns self for chaining."""
        self.__dict__["_frozen"] = True
        return self

    @property
    def frozen(self) -> bool:
        """True once freeze() has been called."""
        return bool(self.__dict__.get("_frozen", False))

    def _in_fields(self) -> Iterable[str]:
        """Fields considered *inputs* (randomized / constrained)."""
        return ()

    def _out_fields(self) -> Iterable[str]:
        """Fields considered *outputs* (observed from DUT)."""
        return ()

    def _all_fields(self) -> tuple[str, ...]:
        # Preserve declared order while removing duplicates if any overlap
        seen: set[str] = set()
        ordered: list[str] = []
        for f in list(self._in_fields()) + list(self._out_fields()):
            if f not in seen:
                seen.add(f)
                ordered.append(f)
        return tuple(ordered)

    def clone(self) -> Self:
        """Deep copy so the clone can diverge safely (never frozen)."""
        c = copy.deepcopy(self)
        c.__dict__["_frozen"] = False
        return c

    def to_dict(self) -> dict[str, object]:
        """Structured view for logging/JSON (in+out)."""
        return {f: getattr(self, f) for f in self._all_fields()}

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    def outputs_str(self) -> str:
        """Return JSON string of output fields only."""
        return json.dumps(
            {f: getattr(self, f) for f in self._out_fields()}, sort_keys=True
        )

    def compare_out(self, other: Self, *, fields: Iterable[str] | None = None) -> bool:
        """Compare only output fields."""
        if type(self) is not type(other):
            return False
        flist = list(fields) if fields is not None else list(self._out_fields())
        return all(getattr(self, f) == getattr(other, f) for f in flist)
