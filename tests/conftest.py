# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/conftest.py

"""Shared fixtures for the regbus tests."""

from __future__ import annotations

import logging
import os

import pytest

from regbus.apb_regfile.dv import ApbBus, ApbRegfileItem
from regbus.shared.dv import utils_dv

_SETTING_PREFIXES = ("APB_REGFILE_", "REGBUS_APB_REGFILE_")
_SETTING_NAMES = ("PLUSARGS", "REGBUS_PLUSARGS", "COV_YAML", "REGBUS_COV_YAML")


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment settings out of the tests."""
    for key in list(os.environ):
        if key.startswith(_SETTING_PREFIXES) or key in _SETTING_NAMES:
            monkeypatch.delenv(key)
    monkeypatch.setenv("REGBUS_LOG_LEVEL", "INFO")


@pytest.fixture(autouse=True)
def fresh_uvm_root() -> None:
    """Components built without a parent hang off the one pyuvm root."""
    utils_dv.reset_uvm_root()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; drop its handlers afterwards."""
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if type(h) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


@pytest.fixture
def bus() -> ApbBus:
    """Fresh bus with reset deasserted and idle inputs."""
    b = ApbBus()
    b.presetn.value = 1
    for name in ApbBus.INPUTS:
        getattr(b, name).value = 0
    return b


def make_item(
    is_write: bool,
    addr: int,
    write_data: int = 0,
    *,
    read_data: int = 0,
    slave_error: bool = False,
    frozen: bool = True,
) -> ApbRegfileItem:
    """Build an observed transfer the way the monitor would."""
    item = ApbRegfileItem("t")
    item.is_write = is_write
    item.addr = addr
    item.write_data = write_data
    item.read_data = read_data
    item.slave_error = slave_error
    item.ready = True
    item.select = True
    item.enable = True
    return item.freeze() if frozen else item


@pytest.fixture
def item_factory():
    """Expose make_item to tests."""
    return make_item
