# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/base_sequence.py

"""Unified base for item-generating sequences (UVM-style, lockstep)."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_item import BaseItem
from .base_sync import CompletionSignal

T = TypeVar("T", bound=BaseItem)


class RandomizationError(RuntimeError):
    """Raised when an item cannot be randomized within its constraints."""


class BaseSequence(pyuvm.uvm_sequence, Generic[T]):
    """Base class for item-generating sequences with lockstep completion.

    The sequence plays the role of the UVM sequence plus sequencer: it
    creates items, hands them to the driver mailbox, and waits for every
    completion signal before issuing the next one. Only one item is ever in
    flight. pyuvm's ``start()``, called without a sequencer, runs ``body()``.

    Execution Flow:
        1. body_pre() - Optional pre-sequence hook
        2. For each item (seq_len times):
           a. make_item(index) - Create transaction
           b. set_item_inputs(item, index) - Randomize/configure (must implement)
           c. put the item in the driver mailbox
           d. wait for one token from each completion signal
        3. body_post() - Optional post-sequence hook
        4. done is set, exactly once

    Subclasses must implement:
        make_item(index): Create a transaction
        set_item_inputs(item, index): Randomize or configure transaction fields

    Attributes:
        seq_len (int): Number of items to generate
        mailbox (asyncio.Queue): Driver mailbox (set by the environment)
        completions (list[CompletionSignal]): Signals awaited after each item
        issued (list): Items in the order they were issued
        done (asyncio.Event): Set once every item has completed

    Example:
        >>> class MySequence(BaseSequence[MyItem]):
        ...     def make_item(self, index):
        ...         return MyItem(f"tr{index}")
        ...
        ...     async def set_item_inputs(self, item, index):
        ...         self.randomize_item(item)
    """

    def __init__(self, name: str = "seq", seq_len: int = 100) -> None:
        super().__init__(name)
        self.logger = logging.getLogger(f"regbus.seq.{name}")
        utils_dv.configure_non_component_logger(self.logger)
        self.seq_len: int = max(1, int(seq_len))
        self.mailbox: asyncio.Queue[T] | None = None
        self.completions: list[CompletionSignal] = []
        self.issued: list[T] = []
        self.done: asyncio.Event = asyncio.Event()

    async def body(self) -> None:
        """Issue seq_len items in lockstep with the completion signals."""
        self.logger.debug("BaseSequence body begin: length = %d", self.seq_len)
        if self.mailbox is None:
            raise RuntimeError(f"{self.get_full_name()}: mailbox not connected")
        # Hook for subclasses
        await self.body_pre()
        # Store handles for hot path
        make = self.make_item
        set_inputs = self.set_item_inputs
        for i in range(self.seq_len):
            item = make(i)
            await set_inputs(item, i)
            self.issued.append(item)
            self.log_item(item)
            self.mailbox.put_nowait(item)
            for signal in self.completions:
                await signal.wait()
        # Hook for subclasses
        await self.body_post()
        self.done.set()
        self.logger.debug("BaseSequence body end")

    async def body_pre(self) -> None:
        """Placeholder."""
        self.logger.debug("BaseSequence body_pre begin")
        self.logger.debug("BaseSequence body_pre end")

    def make_item(self, index: int) -> T:
        """Create one transaction item."""
        raise NotImplementedError

    async def set_item_inputs(self, item: T, index: int) -> None:
        """Must be implemented in subclasses: randomize/tweak before sending."""
        raise NotImplementedError

    async def body_post(self) -> None:
        """Placeholder."""
        self.logger.debug("BaseSequence body_post begin")
        self.logger.debug("BaseSequence body_post end")

    def log_item(self, item: T) -> None:
        """Transaction log hook, called as each item is issued."""
        self.logger.debug("issued %s", item)

    def randomize_item(self, item: T, *constraints: Callable[..., Any]) -> None:
        """Randomize ``item``, optionally with inline constraints.

        Raises RandomizationError if the solver fails or the result does not
        satisfy the inline constraints.
        """
        try:
            if constraints:
                item.randomize_with(*constraints)
            else:
                item.randomize()
        except Exception as exc:  # crv reports unsolvable problems as bare Exception
            raise RandomizationError(
                f"{self.get_full_name()}: cannot randomize {item.get_name()}: {exc}"
            ) from exc
        for cstr in constraints:
            args = {p: getattr(item, p) for p in inspect.signature(cstr).parameters}
            if not cstr(**args):
                raise RandomizationError(
                    f"{self.get_full_name()}: {item.get_name()} violates constraint "
                    f"on {', '.join(args)} ({args})"
                )
