# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_item.py

"""Tests for the transfer item."""

from __future__ import annotations

import json
import random

import pytest

from regbus.apb_regfile.dv import ApbRegfileItem
from regbus.shared.dv import FrozenItemError


def test_frozen_item_rejects_writes(item_factory):
    tr = item_factory(True, 3, 0x5A)
    assert tr.frozen
    with pytest.raises(FrozenItemError):
        tr.addr = 4
    assert tr.addr == 3


def test_clone_is_unfrozen_and_independent(item_factory):
    tr = item_factory(False, 5, read_data=0x11)
    c = tr.clone()
    assert not c.frozen
    assert c.compare_out(tr)
    c.read_data = 0x22
    assert tr.read_data == 0x11
    assert not c.compare_out(tr)


def test_fields_and_json(item_factory):
    tr = item_factory(True, 3, 0x5A)
    d = tr.to_dict()
    assert list(d) == [
        "addr",
        "write_data",
        "is_write",
        "select",
        "enable",
        "read_data",
        "ready",
        "slave_error",
    ]
    assert json.loads(str(tr))["write_data"] == 0x5A
    assert json.loads(tr.outputs_str())["slave_error"] is False
    assert "addr" not in json.loads(tr.outputs_str())
    assert tr.kind == "write"


def test_randomize_stays_in_range():
    random.seed(3)
    item = ApbRegfileItem("r", addr_min=4, addr_max=20)
    for _ in range(50):
        item.randomize()
        assert 4 <= item.addr <= 20
        assert 0 <= item.write_data <= 255


def test_randomize_with_inline_constraint():
    item = ApbRegfileItem("r")
    item.randomize_with(lambda addr: addr == 7)
    assert item.addr == 7


def test_bad_range_rejected():
    with pytest.raises(ValueError):
        ApbRegfileItem("r", addr_min=10, addr_max=2)
