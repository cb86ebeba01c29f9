#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Error-chain demo (DAO -> business layer)

Scenarios:
  no-rows             DAO annotates the no-rows sentinel with its query
  invalid-query       DAO rejects a malformed query (unrelated leaf error)
  no-rows-wrapped     same as no-rows, wrapped once more on the way up

For each scenario prints the error type, its full chain and whether the
no-rows sentinel is somewhere in it.
"""
from __future__ import annotations

import argparse
import json
import sys

from .db import configure_logging
from .repository.samples import SCENARIOS
from .services.account_svc import is_no_rows
from .errors import format_chain, to_dict


def run_scenario(name: str) -> dict:
    err = SCENARIOS[name]()
    return {
        "scenario": name,
        "type": type(err).__name__,
        "message": str(err),
        "is_no_rows": is_no_rows(err),
        "error": to_dict(err),
        "dump": format_chain(err),
    }


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Show how DAO errors are wrapped and checked for no-rows")
    ap.add_argument("scenarios", nargs="*", help=f"scenarios to run: {', '.join(SCENARIOS)} (default: all)")
    ap.add_argument("--json", action="store_true", help="print results as JSON")
    ap.add_argument("--log-level", default=None, help="override log_level from config.yaml")
    args = ap.parse_args(argv)
    unknown = [s for s in args.scenarios if s not in SCENARIOS]
    if unknown:
        ap.error(f"unknown scenario: {', '.join(unknown)}")

    configure_logging(args.log_level)
    names = args.scenarios or list(SCENARIOS)
    results = [run_scenario(n) for n in names]

    if args.json:
        out = [{k: r[k] for k in ("scenario", "is_no_rows", "error")} for r in results]
        print(json.dumps(out, ensure_ascii=False, indent=2))
        return 0

    for r in results:
        print(f"[{r['scenario']}] this err is {r['type']} {r['message']}.")
        print(r["dump"])
        print(f"is no rows: {r['is_no_rows']}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
