# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/base_sync.py

"""Completion handshake between the sequence and the components it waits on."""

from __future__ import annotations

import asyncio


class CompletionSignal:
    """One-token-per-event completion signal.

    ``notify()`` deposits a token and ``wait()`` consumes one, so a
    notification that arrives before anybody waits is never lost (unlike a
    set/clear event). Tokens are consumed in FIFO order.

    Example:
        >>> done = CompletionSignal("drv_done")
        >>> done.notify()
        >>> await done.wait()  # returns immediately
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._tokens: asyncio.Queue[int] = asyncio.Queue()
        self.notify_count: int = 0

    def notify(self) -> None:
        """Deposit one completion token."""
        self.notify_count += 1
        self._tokens.put_nowait(self.notify_count)

    async def wait(self) -> int:
        """Consume one token, waiting if none is pending. Returns its number."""
        return await self._tokens.get()

    def pending(self) -> int:
        """Number of tokens not yet consumed."""
        return self._tokens.qsize()
