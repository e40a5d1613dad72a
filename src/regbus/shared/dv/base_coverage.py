# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/shared/dv/base_coverage.py

"""Base functional coverage subscriber (cocotb-coverage)."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm
from cocotb_coverage.coverage import coverage_db

from . import utils_cli, utils_dv
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseCoverage(pyuvm.uvm_subscriber, Generic[T]):
    """Functional coverage subscriber using cocotb-coverage.

    This subscriber receives transactions from monitors via its analysis_export
    and samples them for functional coverage. It integrates with cocotb-coverage's
    decorator-based coverage collection.

    Usage Pattern:
        1. Subclass BaseCoverage
        2. Override sample() method
        3. Call a function decorated with @CoverPoint/@CoverCross (or a
           coverage_section) from sample()
        4. Coverage is collected whenever write() is called

    Configuration (via config_db):
        coverage_en (bool): Overrides the constructor's coverage_en at
                            end_of_elaboration_phase. If False, sample()
                            is not called

    Attributes:
        yaml_path (str | None): Coverage YAML report path. Defaults to the
                                COV_YAML setting
        sample_cnt (int): Transactions sampled

    The coverage database is reported in report_phase and optionally
    exported to YAML.

    Example:
        >>> from cocotb_coverage.coverage import CoverPoint
        >>>
        >>> @CoverPoint("top.addr", xf=lambda tr: tr.addr, bins=list(range(256)))
        ... def sample_addr(tr):
        ...     pass
        >>>
        >>> class MyCoverage(BaseCoverage[MyItem]):
        ...     def sample(self, tr):
        ...         sample_addr(tr)
        >>>
        >>> mon.ap.connect(cov.analysis_export)
    """

    def __init__(
        self,
        name: str,
        parent: pyuvm.uvm_component | None = None,
        *,
        coverage_en: bool = True,
        yaml_path: str | None = None,
    ) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.yaml_path: str | None = yaml_path or utils_cli.get_setting("COV_YAML")
        self._coverage_en: bool = coverage_en
        self.sample_cnt: int = 0

    @property
    def coverage_en(self) -> bool:
        """True while write() samples."""
        return self._coverage_en

    def end_of_elaboration_phase(self) -> None:
        """Cache coverage_en."""
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        cvrg = utils_dv.uvm_config_db_get_try(self, "coverage_en")
        if isinstance(cvrg, bool):
            self._coverage_en = cvrg
        self.logger.debug("end_of_elaboration_phase end")

    def write(self, tt: T) -> None:
        """Receive a transaction from a monitor and sample coverage."""
        if not self._coverage_en:
            return
        self.sample_cnt += 1
        self.sample(tt)

    def sample(self, tt: T) -> None:  # pragma: no cover - abstract hook
        """Override in subclasses to feed the coverage points."""
        raise NotImplementedError("Override in subclass and sample coverpoints")

    def report_phase(self) -> None:
        """Emit coverage report (and optional YAML) at end of sim."""
        self.logger.debug("report_phase begin")
        super().report_phase()
        if not self._coverage_en:
            return
        coverage_db.report_coverage(self.logger.debug)
        if self.yaml_path:
            coverage_db.export_to_yaml(self.yaml_path)
            self.logger.info("Coverage YAML written to %s", self.yaml_path)
        self.logger.debug("report_phase end")
