# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/dv/apb_regfile_config.py

"""Bench configuration: pydantic model plus layered loading.

Sources, lowest to highest precedence:

1. Model defaults
2. YAML file (``yaml.safe_load``), a flat mapping of field names
3. Settings named ``APB_REGFILE_<FIELD>`` from the environment
   (or ``REGBUS_APB_REGFILE_<FIELD>``) or from plusargs
   (``PLUSARGS="+APB_REGFILE_SEED=7"``)
4. Keyword overrides (the CLI flags)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveInt,
    model_validator,
)

from regbus.apb_regfile import NUM_REGS
from regbus.shared.dv import MIN_DELTA_CYCLES, utils_cli

logger = logging.getLogger(__name__)

SETTING_PREFIX = "APB_REGFILE_"

DEFAULT_CONFIG_PATH = Path(__file__).with_name("apb_regfile_bench.yaml")


class ApbRegfileConfig(BaseModel):
    """Configuration of one apb_regfile bench run.

    Attributes:
        num_transactions: Items the sequence generates.
        clock_period_ns: Clock period, even so both edges land on whole ns.
        addr_width: paddr width in bits.
        addr_min: Lowest randomized address.
        addr_max: Highest randomized address; must reach past the 16 registers.
        reset_cycles: Drive edges reset is held for.
        reset_settle_cycles: Drive edges waited after reset deasserts.
        delta_cycles: Scheduler yields after each clock region (at least 5).
        timeout_cycles: Watchdog budget in cycles (0 disables it).
        sequence: ``random`` or ``readback``.
        seed: Seed for ``random``; None draws a fresh one per run.
        coverage_en: Collect functional coverage.
        fault_inject: Fault every ACCESS in the slave.
        cov_yaml: Coverage YAML report path.
    """

    model_config = ConfigDict(extra="forbid")

    num_transactions: PositiveInt = 20
    clock_period_ns: PositiveInt = 10
    addr_width: int = 5
    addr_min: NonNegativeInt = 0
    addr_max: NonNegativeInt = 31
    reset_cycles: NonNegativeInt = 5
    reset_settle_cycles: NonNegativeInt = 0
    delta_cycles: int = Field(default=10, ge=MIN_DELTA_CYCLES)
    timeout_cycles: NonNegativeInt = 10_000
    sequence: Literal["random", "readback"] = "random"
    seed: int | None = None
    coverage_en: bool = True
    fault_inject: bool = False
    cov_yaml: str | None = None

    @model_validator(mode="after")
    def check_ranges(self) -> "ApbRegfileConfig":
        """Validate cross-field constraints."""
        if self.clock_period_ns % 2:
            raise ValueError(
                f"clock_period_ns must be even, got {self.clock_period_ns}"
            )
        if not 5 <= self.addr_width <= 16:
            raise ValueError(f"addr_width must be in [5, 16], got {self.addr_width}")
        if self.addr_min > self.addr_max:
            raise ValueError(
                f"addr_min ({self.addr_min}) must be <= addr_max ({self.addr_max})"
            )
        if self.addr_max >= 1 << self.addr_width:
            raise ValueError(
                f"addr_max ({self.addr_max}) does not fit in "
                f"{self.addr_width} address bits"
            )
        if self.addr_max < NUM_REGS:
            raise ValueError(
                f"addr_max ({self.addr_max}) must exceed {NUM_REGS - 1} "
                "to exercise the error path"
            )
        return self

    def __str__(self) -> str:
        """Return JSON-formatted string representation of the model."""
        return f"{self.__class__.__name__}:\n" + json.dumps(self.model_dump(), indent=2)


def settings_overrides() -> dict[str, str]:
    """Collect APB_REGFILE_<FIELD> settings from environment and plusargs."""
    found: dict[str, str] = {}
    for field in ApbRegfileConfig.model_fields:
        v = utils_cli.get_setting(f"{SETTING_PREFIX}{field.upper()}")
        if v is not None:
            found[field] = v
    return found


def load_config(
    path: Path | str | None = None, **overrides: Any
) -> ApbRegfileConfig:
    """Build a validated config from defaults, YAML, settings and overrides.

    Overrides whose value is None are ignored, so unset CLI flags can be
    passed straight through.

    Raises:
        ValueError: If the YAML file is not a mapping.
        pydantic.ValidationError: If a value is invalid.
    """
    data: dict[str, Any] = {}
    if path is not None:
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValueError(f"{path}: config must be a mapping")
        data.update(raw)
        logger.debug("Loaded %d field(s) from %s", len(raw), path)
    env = settings_overrides()
    if env:
        logger.debug("Settings overrides: %s", env)
    data.update(env)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ApbRegfileConfig.model_validate(data)
