# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_config.py

"""Tests for bench configuration loading and validation."""

from __future__ import annotations

import pydantic
import pytest

from regbus.apb_regfile.dv import ApbRegfileConfig, load_config
from regbus.apb_regfile.dv.apb_regfile_config import DEFAULT_CONFIG_PATH


def test_defaults():
    cfg = ApbRegfileConfig()
    assert cfg.num_transactions == 20
    assert cfg.clock_period_ns == 10
    assert (cfg.addr_min, cfg.addr_max, cfg.addr_width) == (0, 31, 5)
    assert cfg.reset_cycles == 5
    assert cfg.seed is None
    assert cfg.coverage_en and not cfg.fault_inject


def test_packaged_yaml_matches_defaults():
    assert load_config(DEFAULT_CONFIG_PATH) == ApbRegfileConfig()


@pytest.mark.parametrize(
    "fields",
    [
        {"clock_period_ns": 7},
        {"clock_period_ns": 0},
        {"num_transactions": 0},
        {"addr_max": 15},
        {"addr_max": 40},
        {"addr_min": 20, "addr_max": 18},
        {"addr_width": 4},
        {"addr_width": 17},
        {"sequence": "burst"},
        {"reset_cycles": -1},
        {"delta_cycles": 1},
        {"delta_cycles": 4},
        {"bogus": 1},
    ],
)
def test_invalid_config_rejected(fields):
    with pytest.raises(pydantic.ValidationError):
        ApbRegfileConfig(**fields)


def test_wider_address_allows_larger_range():
    cfg = ApbRegfileConfig(addr_width=8, addr_max=255)
    assert cfg.addr_max == 255


def test_layering_precedence(tmp_path, monkeypatch):
    path = tmp_path / "bench.yaml"
    path.write_text("num_transactions: 5\nseed: 3\naddr_max: 20\n", encoding="utf-8")
    assert load_config(path).num_transactions == 5

    monkeypatch.setenv("APB_REGFILE_NUM_TRANSACTIONS", "7")
    cfg = load_config(path)
    assert cfg.num_transactions == 7
    assert cfg.seed == 3

    cfg = load_config(path, num_transactions=9, addr_max=None)
    assert cfg.num_transactions == 9
    assert cfg.addr_max == 20


def test_plusarg_settings(monkeypatch):
    monkeypatch.setenv("PLUSARGS", "+APB_REGFILE_SEED=11 +APB_REGFILE_FAULT_INJECT")
    cfg = load_config()
    assert cfg.seed == 11
    assert cfg.fault_inject


def test_prefixed_environment_setting(monkeypatch):
    monkeypatch.setenv("REGBUS_APB_REGFILE_SEQUENCE", "readback")
    assert load_config().sequence == "readback"


def test_empty_yaml_is_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == ApbRegfileConfig()


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_str_is_json():
    assert '"num_transactions": 20' in str(ApbRegfileConfig())
