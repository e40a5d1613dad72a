# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/utils.py

"""Run-level helpers for the regbus-dv bench runner.

Logging: one root setup per run. Bench loggers (``regbus.*``) propagate to
the root, so every component line goes to the console and, when a log
file is given, to that file with the PASS/FAIL colouring removed.

Seeds: ``--seed`` accepts decimal, ``0x`` hex or ``random``; every form is
folded to the 32-bit range the bench seeds ``random`` with.
"""

from __future__ import annotations

import logging
import random
import re
import time
from os import PathLike
from pathlib import Path
from typing import Union

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RESET = "\033[0m"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

RANDOM_SEED_WORDS = frozenset({"rand", "random", "auto"})
SEED_MASK = 0xFFFF_FFFF


class NoColorFormatter(logging.Formatter):
    """Log formatter for run log files: verdict colours are dropped."""

    ANSI_ESCAPE = re.compile(r"\033\[[0-9;]*m")

    def format(self, record: logging.LogRecord) -> str:
        return self.ANSI_ESCAPE.sub("", super().format(record))


def configure_logger(
    verbosity: str = "info", log_file: Path | None = None
) -> logging.Logger:
    """Route every bench logger to the console and an optional run log.

    Args:
        verbosity: Root level name (``debug`` .. ``critical``)
        log_file: Run log path; its directory is created on demand and
            the file is rewritten on each run.

    Returns:
        This module's logger
    """
    level = verbosity.upper()
    root = logging.getLogger()
    root.setLevel(level)
    # a second run in one process must not print every line twice
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(console)

    if log_file:
        ensure_dir(Path(log_file).parent or ".", True)
        run_log = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        run_log.setLevel(level)
        run_log.setFormatter(NoColorFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
        root.addHandler(run_log)

    return logging.getLogger(__name__)


def ensure_dir(
    d: Union[str, Path, PathLike[str]], make_if_not_exists: bool = False
) -> Path:
    """Resolve a results or log directory, creating it when asked."""
    path = Path(d)
    if not path.exists():
        if not make_if_not_exists:
            raise FileNotFoundError(f"Directory does not exist: {path}")
        path.mkdir(parents=True, exist_ok=True)
        logging.info("Created directory: %s", path)
    if not path.is_dir():
        raise NotADirectoryError(f"Not a directory: {path}")
    return path.resolve()


def _paint(color: str, s: str) -> str:
    return f"{color}{s}{RESET}"


def green(s: str) -> str:
    """PASS colour."""
    return _paint(GREEN, s)


def red(s: str) -> str:
    """FAIL, ERROR and ABORT colour."""
    return _paint(RED, s)


def yellow(s: str) -> str:
    """Colour for a run set with at least one failure."""
    return _paint(YELLOW, s)


def iso_utc() -> str:
    """Timestamp for the JSON run summary, e.g. ``2026-01-31T12:00:00Z``."""
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def normalize_seed(rng: random.Random, s: str) -> int:
    """Turn a ``--seed`` value into a 32-bit bench seed.

    ``random``, ``rand`` and ``auto`` draw from ``rng``; anything else is
    parsed as a decimal or ``0x`` integer and masked to 32 bits.

    Raises:
        ValueError: ``s`` is neither a seed word nor an integer
    """
    word = s.strip().lower()
    if word in RANDOM_SEED_WORDS:
        return rng.getrandbits(32)
    try:
        return int(word, 0) & SEED_MASK
    except ValueError as exc:
        raise ValueError(
            f"Invalid seed '{s}'. Use decimal, 0x..., or 'random'."
        ) from exc
