# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_cli.py

"""Tests for the regbus-dv command line."""

from __future__ import annotations

import json

import pytest

from regbus.apb_regfile import ApbRegfileSlave, SlaveState
from regbus.apb_regfile.dv import ApbRegfileEnv
from regbus.apb_regfile.dv.apb_regfile_config import DEFAULT_CONFIG_PATH
from regbus.tools import dv


def test_passing_run(capsys):
    rc = dv.main(["--seed", "1", "--count", "6", "--no-coverage"])
    assert rc == dv.EXIT_PASS
    out = capsys.readouterr().out
    assert "PASS" in out
    assert "seed=1 " in out
    assert "transactions=6" in out


def test_hex_seed_and_fault_inject(capsys):
    rc = dv.main(["--seed", "0x10", "--count", "4", "--fault-inject"])
    assert rc == dv.EXIT_PASS
    out = capsys.readouterr().out
    assert "seed=16 " in out
    assert "faults=4" in out
    assert "unflagged=0" in out


@pytest.mark.parametrize(
    "argv",
    [
        ["--count", "0"],
        ["--addr-max", "15"],
        ["--addr-max", "0x40"],
        ["--seed", "not-a-seed"],
    ],
)
def test_config_errors_exit_2(argv, capsys):
    assert dv.main(argv) == dv.EXIT_CONFIG
    assert "ERROR" in capsys.readouterr().err


def test_missing_config_file_exit_2(tmp_path):
    assert dv.main(["--config", str(tmp_path / "nope.yaml")]) == dv.EXIT_CONFIG


def test_timeout_exit_1(monkeypatch, capsys):
    monkeypatch.setenv("APB_REGFILE_TIMEOUT_CYCLES", "8")
    assert dv.main(["--seed", "1"]) == dv.EXIT_FAIL
    assert "ABORT" in capsys.readouterr().out


class CorruptReadSlave(ApbRegfileSlave):
    def _drive_outputs(self, *, ready: int, err: int, rdata: int) -> None:
        if ready and not err and self.state is SlaveState.READ:
            rdata ^= 0x01
        super()._drive_outputs(ready=ready, err=err, rdata=rdata)


def test_mismatch_exit_1(monkeypatch, capsys):
    original = ApbRegfileEnv.build_phase

    def corrupt_build(self):
        original(self)
        self.slave = CorruptReadSlave(self.bus)

    monkeypatch.setattr(ApbRegfileEnv, "build_phase", corrupt_build)
    rc = dv.main(["--seed", "1", "--sequence", "readback", "--count", "40"])
    assert rc == dv.EXIT_FAIL
    assert "FAIL" in capsys.readouterr().out


def test_multi_seed_summary_json(tmp_path, capsys):
    path = tmp_path / "out" / "summary.json"
    rc = dv.main(
        ["--nseeds", "2", "--count", "4", "--summary-json", str(path)]
    )
    assert rc == dv.EXIT_PASS
    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc["passed"] is True
    assert len(doc["runs"]) == 2
    assert doc["config"]["num_transactions"] == 4
    assert {"mismatches", "seed", "passed"} <= set(doc["runs"][0])
    assert "2/2 seeds passed" in capsys.readouterr().out


def test_nseeds_are_reproducible(tmp_path):
    seeds = []
    for name in ("a.json", "b.json"):
        path = tmp_path / name
        dv.main(["--nseeds", "2", "--count", "2", "--summary-json", str(path)])
        doc = json.loads(path.read_text(encoding="utf-8"))
        seeds.append([r["seed"] for r in doc["runs"]])
    assert seeds[0] == seeds[1]


def test_log_file_written(tmp_path):
    log = tmp_path / "logs" / "run.log"
    assert dv.main(["--seed", "2", "--count", "2", "--log-file", str(log)]) == 0
    text = log.read_text(encoding="utf-8")
    assert "Run seed: 2" in text
    assert "\x1b[" not in text


def test_build_config_uses_packaged_defaults():
    args = dv.parse_args([])
    assert args.config is None
    cfg = dv.build_config(args)
    assert cfg.num_transactions == 20
    assert DEFAULT_CONFIG_PATH.is_file()


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        dv.parse_args(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip()
