# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_utils_cli.py

"""Tests for environment and plusarg settings."""

from __future__ import annotations

from regbus.shared.dv import utils_cli


def test_unset_is_none():
    assert utils_cli.get_setting("APB_REGFILE_X") is None


def test_env_beats_plusarg(monkeypatch):
    monkeypatch.setenv("APB_REGFILE_X", "1")
    monkeypatch.setenv("PLUSARGS", "+APB_REGFILE_X=2")
    assert utils_cli.get_setting("APB_REGFILE_X") == "1"


def test_plusarg_value(monkeypatch):
    monkeypatch.setenv("PLUSARGS", "+OTHER=no +APB_REGFILE_X=0x10")
    assert utils_cli.get_setting("APB_REGFILE_X") == "0x10"
    assert utils_cli.get_setting("OTHER") == "no"


def test_bare_plusarg_is_one(monkeypatch):
    monkeypatch.setenv("REGBUS_PLUSARGS", "+APB_REGFILE_FLAG")
    assert utils_cli.get_setting("APB_REGFILE_FLAG") == "1"


def test_regbus_prefixed_env(monkeypatch):
    monkeypatch.setenv("REGBUS_APB_REGFILE_X", "yes")
    assert utils_cli.get_setting("APB_REGFILE_X") == "yes"


def test_unprefixed_env_wins(monkeypatch):
    monkeypatch.setenv("APB_REGFILE_X", "a")
    monkeypatch.setenv("REGBUS_APB_REGFILE_X", "b")
    assert utils_cli.get_setting("APB_REGFILE_X") == "a"
