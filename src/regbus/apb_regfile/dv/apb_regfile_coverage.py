# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/apb_regfile/dv/apb_regfile_coverage.py


"""Coverage."""

from __future__ import annotations

from cocotb_coverage.coverage import CoverCross, CoverPoint, coverage_section

from regbus.apb_regfile import NUM_REGS
import pyuvm

from regbus.shared.dv import BaseCoverage

from .apb_regfile_item import ApbRegfileItem

OUT_OF_RANGE = "oor"


def addr_bin(tr: ApbRegfileItem) -> int | str:
    """Register index, or OUT_OF_RANGE past the register file."""
    return tr.addr if tr.addr < NUM_REGS else OUT_OF_RANGE


def addr_class(tr: ApbRegfileItem) -> str:
    """'valid' or 'invalid' address."""
    return "valid" if tr.addr < NUM_REGS else "invalid"


ApbRegfileCoverPoints = coverage_section(
    CoverPoint(
        "apb_regfile.direction",
        xf=lambda tr: tr.kind,
        bins=["write", "read"],
    ),
    CoverPoint(
        "apb_regfile.addr",
        xf=addr_bin,
        bins=[*range(NUM_REGS), OUT_OF_RANGE],
    ),
    CoverPoint(
        "apb_regfile.addr_class",
        xf=addr_class,
        bins=["valid", "invalid"],
    ),
    CoverPoint(
        "apb_regfile.slave_error",
        xf=lambda tr: tr.slave_error,
        bins=[True, False],
    ),
    CoverCross(
        "apb_regfile.direction_x_addr_class",
        items=["apb_regfile.direction", "apb_regfile.addr_class"],
    ),
)


@ApbRegfileCoverPoints
def sample_transfer(tr: ApbRegfileItem) -> None:
    """Feed one observed transfer to the cover points."""


class ApbRegfileCoverage(BaseCoverage[ApbRegfileItem]):
    """Track direction, register index, slave errors and their cross.

    Besides the cocotb-coverage database (shared by every bench in the
    process) the collector keeps per-run counters for the summary.
    """

    def __init__(
        self,
        name: str = "coverage",
        parent: pyuvm.uvm_component | None = None,
        *,
        coverage_en: bool = True,
        yaml_path: str | None = None,
    ) -> None:
        super().__init__(name, parent, coverage_en=coverage_en, yaml_path=yaml_path)
        self.writes: int = 0
        self.reads: int = 0
        self.errors: int = 0
        self.addrs_hit: set[int | str] = set()

    def sample(self, tr: ApbRegfileItem) -> None:
        sample_transfer(tr)
        if tr.is_write:
            self.writes += 1
        else:
            self.reads += 1
        if tr.slave_error:
            self.errors += 1
        self.addrs_hit.add(addr_bin(tr))

    def report_phase(self) -> None:
        """Print coverage summary."""
        self.logger.debug("report_phase begin")
        super().report_phase()
        if self.coverage_en:
            self.logger.info(
                "ApbRegfileCoverage summary: total=%d writes=%d reads=%d "
                "errors=%d addr_bins=%d/%d",
                self.sample_cnt,
                self.writes,
                self.reads,
                self.errors,
                len(self.addrs_hit),
                NUM_REGS + 1,
            )
        self.logger.debug("report_phase end")
