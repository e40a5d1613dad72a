# SPDX-FileCopyrightText: 2026 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/regbus/tools/dv.py

"""Run the apb_regfile bench from the command line.

Builds a configuration from the packaged defaults (or --config), the
APB_REGFILE_<FIELD> settings and the flags below, runs the bench once per
seed and prints a PASS/FAIL summary.

Command-line interface:
    regbus-dv [OPTIONS]

Typical usage:
    # One run, random seed
    regbus-dv

    # Reproduce a run
    regbus-dv --seed=1234 --count=50

    # Five seeds derived from a base seed
    regbus-dv --nseeds=5 --seed-base=7

Exit status:
    0 every run passed, 1 a run failed its checks or aborted, 2 bad configuration
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import random
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Final, Sequence

import pydantic
import yaml

from regbus import __version__, utils
from regbus.apb_regfile.dv import ApbRegfileConfig, ApbRegfileEnv, BenchResult
from regbus.apb_regfile.dv.apb_regfile_config import DEFAULT_CONFIG_PATH, load_config
from regbus.shared.dv import BenchTimeoutError, RandomizationError

logger = logging.getLogger(__name__)

EXIT_PASS: Final[int] = 0
EXIT_FAIL: Final[int] = 1
EXIT_CONFIG: Final[int] = 2


# === CLI ===


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for a bench run.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv[1:].

    Returns:
        Parsed argument namespace. Options left unset are None so they do not
        override the config file or settings.
    """
    ap = argparse.ArgumentParser(
        prog="regbus-dv",
        description="Run the apb_regfile self-checking bench",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--version", action="version", version=__version__)
    ap.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"YAML config file (default: {DEFAULT_CONFIG_PATH.name})",
    )
    ap.add_argument(
        "--count",
        type=int,
        default=None,
        help="number of transactions",
    )
    ap.add_argument(
        "--seed",
        default=None,
        help="seed (decimal, 0x..., or 'random')",
    )
    ap.add_argument(
        "--nseeds",
        type=int,
        default=0,
        help="run N seeds derived from --seed-base (ignores --seed)",
    )
    ap.add_argument(
        "--seed-base",
        type=int,
        default=1999,
        help="base seed for --nseeds",
    )
    ap.add_argument(
        "--addr-max",
        type=lambda s: int(s, 0),
        default=None,
        help="highest randomized address (must be > 15)",
    )
    ap.add_argument(
        "--sequence",
        choices=["random", "readback"],
        default=None,
        help="sequence to run",
    )
    ap.add_argument(
        "--fault-inject",
        action="store_true",
        default=None,
        help="fault every ACCESS in the slave",
    )
    ap.add_argument(
        "--no-coverage",
        dest="coverage_en",
        action="store_false",
        default=None,
        help="disable functional coverage",
    )
    ap.add_argument(
        "--cov-yaml",
        default=None,
        help="write the coverage database to this YAML file",
    )
    ap.add_argument(
        "--summary-json",
        type=Path,
        default=None,
        help="write the run results to this JSON file",
    )
    ap.add_argument(
        "--verbosity",
        choices=["critical", "error", "warning", "info", "debug", "notset"],
        default="info",
        help="logging level",
    )
    ap.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="also log (without colors) to this file",
    )
    return ap.parse_args(argv)


# === Seeds ===


def _derive_seeds(args: argparse.Namespace) -> list[int | None]:
    """Seeds to run; None means the configured (or a fresh) seed."""
    rng = random.Random(args.seed_base & 0xFFFF_FFFF)
    if args.nseeds > 0:
        return [utils.normalize_seed(rng, "random") for _ in range(args.nseeds)]
    if args.seed is not None:
        return [utils.normalize_seed(random.Random(), str(args.seed))]
    return [None]


# === Config ===


def build_config(args: argparse.Namespace) -> ApbRegfileConfig:
    """Layer the CLI flags on top of the config file and settings."""
    path = args.config if args.config is not None else DEFAULT_CONFIG_PATH
    return load_config(
        path,
        num_transactions=args.count,
        addr_max=args.addr_max,
        sequence=args.sequence,
        fault_inject=args.fault_inject,
        coverage_en=args.coverage_en,
        cov_yaml=args.cov_yaml,
    )


# === Run ===


def _summary_line(result: BenchResult) -> str:
    verdict = utils.green("PASS") if result.passed else utils.red("FAIL")
    return (
        f"[regbus-dv] {verdict} seed={result.seed} "
        f"transactions={result.transactions} writes={result.writes} "
        f"reads={result.reads} faults={result.faults} "
        f"mismatches={result.mismatches} unflagged={result.unflagged_errors} "
        f"sim_time={result.sim_time_ns} ns"
    )


def _write_summary(
    path: Path, cfg: ApbRegfileConfig, results: list[BenchResult]
) -> None:
    utils.ensure_dir(path.parent, True)
    doc = {
        "timestamp": utils.iso_utc(),
        "version": __version__,
        "config": cfg.model_dump(),
        "passed": all(r.passed for r in results),
        "runs": [{**asdict(r), "passed": r.passed} for r in results],
    }
    path.write_text(json.dumps(doc, indent=2) + "\n", encoding="utf-8")
    logger.info("Summary written to %s", path)


def run_seed(cfg: ApbRegfileConfig, seed: int | None) -> BenchResult:
    """Run one bench with ``seed`` (None keeps the configured seed)."""
    if seed is not None:
        cfg = cfg.model_copy(update={"seed": seed})
    return asyncio.run(ApbRegfileEnv(cfg).run())


# === Main ===


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        EXIT_PASS if every run passed, EXIT_FAIL on mismatches, unflagged
        errors or an aborted run, EXIT_CONFIG on configuration errors.
    """
    args = parse_args(argv)
    utils.configure_logger(args.verbosity, args.log_file)
    # Bench component loggers take their level from REGBUS_LOG_LEVEL
    os.environ.setdefault("REGBUS_LOG_LEVEL", args.verbosity.upper())

    try:
        cfg = build_config(args)
        seeds = _derive_seeds(args)
    except (pydantic.ValidationError, ValueError, OSError, yaml.YAMLError) as exc:
        print(f"[regbus-dv] {utils.red('ERROR')}: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    logger.debug("%s", cfg)
    results: list[BenchResult] = []
    rc = EXIT_PASS
    for seed in seeds:
        try:
            result = run_seed(cfg, seed)
        except (RandomizationError, BenchTimeoutError) as exc:
            logger.error("Run aborted: %s", exc)
            print(f"[regbus-dv] {utils.red('ABORT')}: {exc}")
            rc = EXIT_FAIL
            continue
        results.append(result)
        print(_summary_line(result))
        if not result.passed:
            rc = EXIT_FAIL

    if args.summary_json is not None:
        _write_summary(args.summary_json, cfg, results)
    if len(seeds) > 1:
        n_pass = sum(r.passed for r in results)
        color = utils.green if rc == EXIT_PASS else utils.yellow
        print(color(f"[regbus-dv] {n_pass}/{len(seeds)} seeds passed"))
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
